"""
Exception handling for Caregiver Co-Pilot.

Infrastructure-level exceptions. Business rule violations live in
``carecopilot.domain.errors``.
"""

from typing import Any, Dict, Optional


MISSING_API_KEY_MESSAGE = (
    "OPENAI_API_KEY is not set. Add it to .env or .env.local in the project root, "
    "then restart the dev server."
)


class CareCopilotException(Exception):
    """Base exception class for Caregiver Co-Pilot."""

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


class ConfigurationError(CareCopilotException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class LLMUnavailableError(ConfigurationError):
    """Raised when the LLM backend cannot be used at all (e.g. missing credential).

    Not retryable. Raised before any pipeline stage runs.
    """

    def __init__(self, message: str = MISSING_API_KEY_MESSAGE) -> None:
        super().__init__(message, {"credential": "OPENAI_API_KEY"})


class ExternalServiceError(CareCopilotException):
    """Raised when there's an external service error."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"{service} error: {message}",
            "EXTERNAL_SERVICE_ERROR",
            {"service": service, **(details or {})},
        )


class TranscriptionError(ExternalServiceError):
    """Raised when the speech-to-text backend fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("transcription", message, details)
