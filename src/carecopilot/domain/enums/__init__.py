"""
Domain enums package.
"""

from .analysis import (
    CareLevel,
    ConfidenceLevel,
    FindingType,
    PipelineStep,
    Severity,
    TrendDirection,
    TrendLabelType,
)

__all__ = [
    "CareLevel",
    "ConfidenceLevel",
    "FindingType",
    "PipelineStep",
    "Severity",
    "TrendDirection",
    "TrendLabelType",
]
