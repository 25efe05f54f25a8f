"""Value types returned by the insight derivation functions."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from ...domain.enums import ConfidenceLevel, FindingType, TrendDirection, TrendLabelType


@dataclass
class TrendAnalysis:
    new_findings: List[str] = field(default_factory=list)
    worsening_signals: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)

    @property
    def has_change(self) -> bool:
        """Worsening signals or new findings present."""
        return bool(self.worsening_signals or self.new_findings)

    def to_dict(self) -> Dict[str, List[str]]:
        return asdict(self)


@dataclass(frozen=True)
class ConfidenceAssessment:
    level: ConfidenceLevel
    reasoning: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level.value, "reasoning": self.reasoning, "score": self.score}


@dataclass(frozen=True)
class TrendLabel:
    type: TrendLabelType
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type.value, "label": self.label}


@dataclass(frozen=True)
class NewFinding:
    text: str
    type: FindingType

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "type": self.type.value}


@dataclass(frozen=True)
class TrendChip:
    label: str
    direction: TrendDirection

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "direction": self.direction.value}


@dataclass(frozen=True)
class PhraseRange:
    start: int
    end: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class InsightCard:
    type: str
    title: str
    items: List[str]
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "title": self.title, "items": list(self.items), "date": self.date}
