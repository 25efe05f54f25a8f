"""Patient domain entity representing one person in a caregiver's session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import InvalidPatientDataError
from .analysis import AnalysisResult

MAX_AGE = 130
MAX_NAME_LENGTH = 120


@dataclass
class Patient:
    """Patient domain entity.

    ``analyses`` is ordered newest-first and only ever grows.
    """

    id: str
    name: str
    age: int
    analyses: List[AnalysisResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate patient data."""
        self._validate_patient_data()

    def _validate_patient_data(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidPatientDataError("name", self.name, "name is required")
        if len(self.name) > MAX_NAME_LENGTH:
            raise InvalidPatientDataError(
                "name", self.name[:50], f"max {MAX_NAME_LENGTH} characters"
            )
        if isinstance(self.age, bool) or not isinstance(self.age, int):
            raise InvalidPatientDataError("age", self.age, "age must be an integer")
        if not 0 <= self.age <= MAX_AGE:
            raise InvalidPatientDataError("age", self.age, f"age must be between 0 and {MAX_AGE}")

    @property
    def latest_analysis(self) -> Optional[AnalysisResult]:
        return self.analyses[0] if self.analyses else None

    @property
    def visit_count(self) -> int:
        return len(self.analyses)

    def record_analysis(self, analysis: AnalysisResult) -> None:
        """Prepend a completed analysis to the history."""
        self.analyses.insert(0, analysis)

    def visit_pair(self, index: int) -> Tuple[AnalysisResult, Optional[AnalysisResult]]:
        """Return the analysis at ``index`` and the one recorded before it."""
        current = self.analyses[index]
        previous = self.analyses[index + 1] if index + 1 < len(self.analyses) else None
        return current, previous

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Patient":
        analyses = data.get("analyses") or []
        if not isinstance(analyses, list):
            raise ValueError("Patient analyses must be a list")
        return cls(
            id=str(data["id"]),
            name=data.get("name"),
            age=data.get("age"),
            analyses=[AnalysisResult.from_dict(a) for a in analyses],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "analyses": [a.to_dict() for a in self.analyses],
        }

    def to_summary_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "visitCount": self.visit_count,
        }
