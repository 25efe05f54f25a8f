"""Visit analysis entities produced by the pipeline and stored per patient."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping

from ..enums import CareLevel, Severity

# 9999-12-31T23:59:59.999Z, the last instant datetime can represent.
MAX_TIMESTAMP_MS = 253402300799999


def _string_list(value: Any) -> List[str]:
    # Non-string elements become "" so indexes line up with the model output.
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else "" for item in value]


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class StructuredVisitData:
    """Clinical snapshot extracted from a cleaned transcript."""

    visit_summary: str = ""
    key_observations: List[str] = field(default_factory=list)
    activities_completed: List[str] = field(default_factory=list)
    medication_notes: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    suggested_followups: List[str] = field(default_factory=list)
    care_level_indicator: CareLevel = CareLevel.STABLE

    @classmethod
    def empty(cls) -> "StructuredVisitData":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StructuredVisitData":
        """Build from loosely-typed JSON, coercing every field to its declared shape."""
        return cls(
            visit_summary=_string(data.get("visit_summary")),
            key_observations=_string_list(data.get("key_observations")),
            activities_completed=_string_list(data.get("activities_completed")),
            medication_notes=_string_list(data.get("medication_notes")),
            concerns=_string_list(data.get("concerns")),
            suggested_followups=_string_list(data.get("suggested_followups")),
            care_level_indicator=CareLevel.parse(data.get("care_level_indicator")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visit_summary": self.visit_summary,
            "key_observations": list(self.key_observations),
            "activities_completed": list(self.activities_completed),
            "medication_notes": list(self.medication_notes),
            "concerns": list(self.concerns),
            "suggested_followups": list(self.suggested_followups),
            "care_level_indicator": self.care_level_indicator.value,
        }


@dataclass(frozen=True)
class RiskFlag:
    """A named concern with severity and justification."""

    risk: str
    severity: Severity
    reason: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RiskFlag":
        return cls(
            risk=_string(data.get("risk")),
            severity=Severity.parse(data.get("severity")),
            reason=_string(data.get("reason")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"risk": self.risk, "severity": self.severity.value, "reason": self.reason}


@dataclass
class RiskAnalysis:
    risk_flags: List[RiskFlag] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RiskAnalysis":
        flags = data.get("risk_flags")
        if not isinstance(flags, list):
            return cls()
        # JSON arrays count as objects here and yield a blank low-severity flag.
        return cls(
            risk_flags=[
                RiskFlag.from_dict(f if isinstance(f, dict) else {})
                for f in flags
                if isinstance(f, (dict, list))
            ]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"risk_flags": [f.to_dict() for f in self.risk_flags]}


@dataclass(frozen=True)
class PipelineResult:
    """Output of one complete pipeline run (no timestamp yet)."""

    cleaned_transcript: str
    structured_data: StructuredVisitData
    risks: RiskAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cleanedTranscript": self.cleaned_transcript,
            "structuredData": self.structured_data.to_dict(),
            "risks": self.risks.to_dict(),
        }

    def stamp(self, timestamp_ms: int) -> "AnalysisResult":
        """Attach the time the result was recorded."""
        return AnalysisResult(
            cleaned_transcript=self.cleaned_transcript,
            structured_data=replace(self.structured_data),
            risks=RiskAnalysis(list(self.risks.risk_flags)),
            timestamp=timestamp_ms,
        )


@dataclass(frozen=True)
class AnalysisResult:
    """A recorded visit analysis. Never mutated after creation."""

    cleaned_transcript: str
    structured_data: StructuredVisitData
    risks: RiskAnalysis
    timestamp: int

    @property
    def risk_flags(self) -> List[RiskFlag]:
        return self.risks.risk_flags

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisResult":
        structured = data.get("structuredData")
        risks = data.get("risks")
        timestamp = data.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError("Analysis timestamp must be a number")
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            raise ValueError(f"Analysis timestamp must be finite: {timestamp}")
        if not 0 <= timestamp <= MAX_TIMESTAMP_MS:
            raise ValueError(f"Analysis timestamp out of range: {timestamp}")
        return cls(
            cleaned_transcript=_string(data.get("cleanedTranscript")),
            structured_data=StructuredVisitData.from_dict(structured if isinstance(structured, dict) else {}),
            risks=RiskAnalysis.from_dict(risks if isinstance(risks, dict) else {}),
            timestamp=int(timestamp),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cleanedTranscript": self.cleaned_transcript,
            "structuredData": self.structured_data.to_dict(),
            "risks": self.risks.to_dict(),
            "timestamp": self.timestamp,
        }
