"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional, Union

from .enums import PipelineStep


class DomainError(Exception):
    """Base domain error."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class PipelineError(DomainError):
    """A visit pipeline stage failed.

    ``step`` names the failing stage; ``cause`` is the original exception.
    """

    def __init__(
        self,
        message: str,
        step: Union[PipelineStep, str],
        cause: Optional[BaseException] = None,
    ) -> None:
        self.step = PipelineStep(step)
        self.cause = cause
        super().__init__(message, "PIPELINE_ERROR", {"step": self.step.value})


class EmptyInputError(PipelineError):
    """Raw transcript was empty or whitespace-only."""

    def __init__(self, message: str = "Input text cannot be empty") -> None:
        super().__init__(message, PipelineStep.CLEAN)
        self.error_code = "EMPTY_INPUT"


STAGE_EMPTY_MESSAGES = {
    PipelineStep.CLEAN: "No output from transcript cleaning step",
    PipelineStep.STRUCTURE: "No output from clinical structuring step",
    PipelineStep.ANALYZE: "No output from risk analysis step",
}


class EmptyCompletionError(DomainError):
    """The LLM returned no usable content for a stage."""

    def __init__(self, step: Union[PipelineStep, str]) -> None:
        self.step = PipelineStep(step)
        super().__init__(
            STAGE_EMPTY_MESSAGES[self.step],
            "EMPTY_COMPLETION",
            {"step": self.step.value},
        )


class PatientNotFoundError(DomainError):
    """Patient not found."""

    def __init__(self, patient_id: str) -> None:
        message = f"Patient with ID '{patient_id}' not found"
        super().__init__(message, "PATIENT_NOT_FOUND", {"patient_id": patient_id})


class NoActivePatientError(DomainError):
    """An operation needed an active patient but none is selected."""

    def __init__(self) -> None:
        super().__init__("No active patient selected", "NO_ACTIVE_PATIENT")


class InvalidPatientDataError(DomainError):
    """Invalid patient data."""

    def __init__(self, field: str, value: Any, reason: str = "") -> None:
        message = f"Invalid patient data. Field: {field}, Value: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message, "INVALID_PATIENT_DATA", {"field": field, "value": value}
        )


class AnalysisNotFoundError(DomainError):
    """Patient has no recorded visit analyses."""

    def __init__(self, patient_id: str) -> None:
        message = f"Patient '{patient_id}' has no recorded visits"
        super().__init__(message, "ANALYSIS_NOT_FOUND", {"patient_id": patient_id})


class InvalidAudioError(DomainError):
    """Uploaded audio failed size or format checks."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "INVALID_AUDIO", details)
