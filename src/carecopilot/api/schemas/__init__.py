"""
Request and response schemas for the HTTP API.
"""

from .common import ApiResponse, ErrorResponse, PipelineErrorResponse
from .patients import (
    CreatePatientRequest,
    RecordAnalysisRequest,
    SetActivePatientRequest,
)

__all__ = [
    "ApiResponse",
    "CreatePatientRequest",
    "ErrorResponse",
    "PipelineErrorResponse",
    "RecordAnalysisRequest",
    "SetActivePatientRequest",
]
