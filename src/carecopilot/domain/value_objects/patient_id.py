"""
Patient ID value object for type-safe patient identification.
Format: patient-{EPOCH_MS}-{7 BASE36 CHARS}
"""

from dataclasses import dataclass
from typing import Optional

from ...core.utils.string_utils import generate_patient_id


@dataclass(frozen=True)
class PatientId:
    """Immutable patient identifier value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate patient ID."""
        if not isinstance(self.value, str):
            raise ValueError("Patient ID must be a string")
        if not self.value.strip():
            raise ValueError("Patient ID cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, timestamp_ms: Optional[int] = None) -> "PatientId":
        """Generate a new patient ID."""
        return cls(generate_patient_id(timestamp_ms))
