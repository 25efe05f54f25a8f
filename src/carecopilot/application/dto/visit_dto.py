"""Visit and patient DTOs passed between the API and use cases."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class RecordVisitRequest:
    """Request DTO for analyzing a transcript and storing it on a patient."""

    transcript: str
    patient_id: Optional[str] = None  # None means the active patient


@dataclass
class TranscribeAudioRequest:
    """Request DTO for audio transcription."""

    audio: bytes
    filename: str
    content_type: str
    language: Optional[str] = None


@dataclass
class InsightsRequest:
    """Request DTO for the insights view / export of one visit."""

    patient_id: str
    visit_index: Any = 0  # clamped to the patient's history when used
    export_kind: str = "emr"
