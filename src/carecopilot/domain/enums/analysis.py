"""
Enums for visit analysis and derived insights.
"""

from enum import Enum
from typing import Any


class PipelineStep(str, Enum):
    """Stages of the visit pipeline, in execution order."""
    CLEAN = "clean"
    STRUCTURE = "structure"
    ANALYZE = "analyze"


class Severity(str, Enum):
    """Normalized risk severity."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Map free-form model output onto a severity; unknown input is LOW."""
        s = value.lower() if isinstance(value, str) else ""
        if s in ("medium", "moderate"):
            return cls.MEDIUM
        if s in ("high", "urgent"):
            return cls.HIGH
        return cls.LOW


class CareLevel(str, Enum):
    """Overall care level suggested by the structuring stage."""
    STABLE = "stable"
    WATCH = "watch"
    ATTENTION_NEEDED = "attention_needed"

    @classmethod
    def parse(cls, value: Any) -> "CareLevel":
        """Exact literal match only; anything else is STABLE."""
        for level in cls:
            if value == level.value:
                return level
        return cls.STABLE


class ConfidenceLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TrendLabelType(str, Enum):
    NEW = "new"
    WORSENING = "worsening"
    IMPROVED = "improved"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class FindingType(str, Enum):
    RISK = "risk"
    CONCERN = "concern"
    OBSERVATION = "observation"
