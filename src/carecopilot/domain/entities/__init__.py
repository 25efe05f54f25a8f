"""
Domain entities package.
"""

from .analysis import (
    AnalysisResult,
    PipelineResult,
    RiskAnalysis,
    RiskFlag,
    StructuredVisitData,
)
from .patient import Patient

__all__ = [
    "AnalysisResult",
    "Patient",
    "PipelineResult",
    "RiskAnalysis",
    "RiskFlag",
    "StructuredVisitData",
]
