"""Risk flag helpers: severity ranking, escalation actions, keyword highlighting."""

import re
from typing import List, Optional, Sequence

from ...domain.entities import RiskFlag
from ...domain.enums import Severity
from .text import is_high, is_medium, severity_key
from .types import PhraseRange

ACTION_NOTIFY_CLINICIAN = "Consider notifying supervising nurse or clinician today."
ACTION_MONITOR_24H = "Monitor closely over the next 24 hours."
ACTION_FALL_PREVENTION = (
    "Fall prevention measures may be warranted: clear pathways, adequate lighting, "
    "mobility assistance."
)
ACTION_MEDICATION_REVIEW = "Medication adherence and side effects may warrant review."
ACTION_ROUTINE_MONITORING = "Continue routine monitoring."

RISK_KEYWORDS = (
    "dizzy",
    "dizziness",
    "fall",
    "confusion",
    "confused",
    "swelling",
    "swollen",
    "pain",
    "unsteady",
    "unsteadiness",
)
RISK_KEYWORDS_RE = re.compile("|".join(RISK_KEYWORDS), re.IGNORECASE)


def get_highest_risk_severity(flags: Sequence[RiskFlag]) -> Optional[Severity]:
    if not flags:
        return None
    if any(is_high(f.severity) for f in flags):
        return Severity.HIGH
    if any(is_medium(f.severity) for f in flags):
        return Severity.MEDIUM
    return Severity.LOW


def generate_escalation(flags: Sequence[RiskFlag]) -> List[str]:
    """Ordered list of suggested actions for a set of risk flags."""
    actions: List[str] = []
    risk_names = [f.risk.lower() for f in flags]

    if any(is_high(f.severity) for f in flags):
        actions.append(ACTION_NOTIFY_CLINICIAN)
    if sum(1 for f in flags if is_medium(f.severity)) >= 2:
        actions.append(ACTION_MONITOR_24H)
    if any("fall" in name for name in risk_names):
        actions.append(ACTION_FALL_PREVENTION)
    if any("medication" in name or "med" in name for name in risk_names):
        actions.append(ACTION_MEDICATION_REVIEW)
    if not actions and flags:
        actions.append(ACTION_ROUTINE_MONITORING)
    return actions


def get_contributing_signals(
    flag: RiskFlag, concerns: Sequence[str], observations: Sequence[str]
) -> List[str]:
    """Concerns/observations sharing a word (>3 chars) with the flag; else the reason."""
    terms = [
        word
        for word in flag.risk.lower().split() + flag.reason.lower().split()
        if len(word) > 3
    ]
    signals = [
        item
        for item in list(concerns) + list(observations)
        if any(term in item.lower() for term in terms)
    ]
    return signals or [flag.reason]


def _severity_rank(flag: RiskFlag) -> int:
    key = severity_key(flag.severity) or "low"
    if key == "high":
        return 0
    if key in ("medium", "moderate"):
        return 1
    return 2


def sort_risks_by_severity(flags: Sequence[RiskFlag]) -> List[RiskFlag]:
    """High, then medium/moderate, then low. Stable; input is not modified."""
    return sorted(flags, key=_severity_rank)


def get_risky_phrase_ranges(text: str) -> List[PhraseRange]:
    """Character ranges of risk keywords in ``text`` (case-insensitive)."""
    if not text:
        return []
    return [PhraseRange(m.start(), m.end()) for m in RISK_KEYWORDS_RE.finditer(text)]


def normalize_risk_title_for_emr(risk: str) -> str:
    r = risk.lower()
    if "medication" in r:
        return "Medication concern"
    if "fatigue" in r or "deterioration" in r:
        return "Possible deterioration"
    if "fall" in r:
        return "Fall risk"
    if "mobility" in r:
        return "Mobility concern"
    return risk


def capitalize_severity(severity) -> str:
    key = severity_key(severity) or "low"
    if key in ("medium", "moderate"):
        return "Moderate"
    if key == "high":
        return "High"
    return "Low"
