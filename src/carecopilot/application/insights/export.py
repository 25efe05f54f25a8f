"""Plain-text export documents: caregiver summary and EMR note."""

import re
from typing import List, Sequence

from ...domain.entities import RiskFlag
from .risk import capitalize_severity, normalize_risk_title_for_emr
from .text import CERTAINTY_WORDS_RE, collapse_spaces, soften_language

NO_ACUTE_CONCERNS = "No acute concerns noted during visit."
NO_RISKS_PLACEHOLDER = "None identified."
NO_PLAN_PLACEHOLDER = "Continue routine monitoring."

HONORIFIC_SUBJECT_RE = re.compile(
    r"^(mr\.|mrs\.|ms\.)\s+[\w\s]+\s+(exhibited|was|demonstrated|showed)\s+",
    re.IGNORECASE,
)


def to_clinical_assessment(summary: str) -> str:
    """Rewrite a visit summary into neutral assessment wording."""
    if not summary or not summary.strip():
        return NO_ACUTE_CONCERNS
    text = HONORIFIC_SUBJECT_RE.sub(r"Patient \2 ", summary.strip(), count=1)
    return collapse_spaces(soften_language(text))


def soften_reason(reason: str) -> str:
    return collapse_spaces(soften_language(reason))


def soften_export_reason(reason: str) -> str:
    """Like soften_reason, and also drops certainty adverbs."""
    return collapse_spaces(CERTAINTY_WORDS_RE.sub("", soften_language(reason)))


def _header(patient_name: str, patient_age: int, date_str: str) -> List[str]:
    return [f"Patient: {patient_name}, Age {patient_age}", f"Date: {date_str}"]


def build_emr_export_text(
    patient_name: str,
    patient_age: int,
    date_str: str,
    visit_summary: str,
    risk_flags: Sequence[RiskFlag],
    suggested_actions: Sequence[str],
) -> str:
    """EMR-ready note with Assessment, Clinical Risks and Plan sections."""
    risk_lines = [
        f"- {normalize_risk_title_for_emr(f.risk)} ({capitalize_severity(f.severity)}): "
        f"{soften_reason(f.reason)}"
        for f in risk_flags
    ]
    plan_lines = [f"- {a}" for a in suggested_actions]

    lines = _header(patient_name, patient_age, date_str) + [
        "",
        "Assessment",
        to_clinical_assessment(visit_summary),
        "",
        "Clinical Risks",
        "\n".join(risk_lines) if risk_lines else NO_RISKS_PLACEHOLDER,
        "",
        "Plan",
        "\n".join(plan_lines) if plan_lines else NO_PLAN_PLACEHOLDER,
    ]
    return "\n".join(lines)


def build_export_text(
    patient_name: str,
    patient_age: int,
    date_str: str,
    ai_summary: str,
    risk_flags: Sequence[RiskFlag],
    suggested_actions: Sequence[str],
) -> str:
    """Caregiver-facing summary. Empty sections are left empty."""
    risk_lines = [
        f"- {f.risk} ({capitalize_severity(f.severity)}): {soften_export_reason(f.reason)}"
        for f in risk_flags
    ]
    action_lines = [f"- {a.strip()}" for a in suggested_actions]

    lines = _header(patient_name, patient_age, date_str) + [
        "",
        "Summary",
        ai_summary,
        "",
        "Clinical Risk Signals",
        *risk_lines,
        "",
        "Suggested Actions",
        *action_lines,
    ]
    return "\n".join(lines)
