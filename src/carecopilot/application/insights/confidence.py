"""Heuristic confidence score for a single analysis."""

from ...domain.entities import AnalysisResult
from ...domain.enums import ConfidenceLevel
from .types import ConfidenceAssessment

REASON_HIGH_CORROBORATED = "Based on multiple corroborating symptoms and consistent transcript detail."
REASON_HIGH = "Based on sufficient transcript detail and structured clinical data."
REASON_MEDIUM_SHORT = "Limited transcript detail reduces certainty."
REASON_MEDIUM = "Moderate data completeness; some nuance may be missed."
REASON_LOW_VERY_SHORT = "Very short transcript limits reliability."
REASON_LOW = "Limited structured data extracted; consider adding more detail."


def count_populated_fields(analysis: AnalysisResult) -> int:
    """How many of the six content fields are non-empty."""
    data = analysis.structured_data
    return sum(
        1
        for populated in (
            data.visit_summary,
            data.key_observations,
            data.activities_completed,
            data.concerns,
            data.suggested_followups,
            data.medication_notes,
        )
        if populated
    )


def compute_ai_confidence(analysis: AnalysisResult) -> ConfidenceAssessment:
    data = analysis.structured_data
    transcript_len = len(analysis.cleaned_transcript or "")
    risk_count = len(analysis.risk_flags)
    populated = count_populated_fields(analysis)

    score = 0
    if transcript_len > 150:
        score += 1
    if populated > 4:
        score += 1
    if risk_count >= 2:
        score += 1
    if transcript_len < 50:
        score -= 1
    if not data.concerns and not data.key_observations:
        score -= 1

    if score <= 1:
        level = ConfidenceLevel.LOW
    elif score == 2:
        level = ConfidenceLevel.MEDIUM
    else:
        level = ConfidenceLevel.HIGH

    if level is ConfidenceLevel.HIGH:
        reasoning = REASON_HIGH_CORROBORATED if risk_count >= 2 and populated > 4 else REASON_HIGH
    elif level is ConfidenceLevel.MEDIUM:
        reasoning = REASON_MEDIUM_SHORT if transcript_len < 100 else REASON_MEDIUM
    else:
        reasoning = REASON_LOW_VERY_SHORT if transcript_len < 50 else REASON_LOW

    return ConfidenceAssessment(level=level, reasoning=reasoning, score=score)
