"""Grouped insight cards for the latest visit."""

from datetime import datetime
from typing import List, Optional

from ...core.utils.datetime_utils import format_card_date
from ...domain.entities import AnalysisResult
from .types import InsightCard


def analysis_to_insight_cards(
    analysis: AnalysisResult, now: Optional[datetime] = None
) -> List[InsightCard]:
    """Observations, Reminders and Recommendations; empty groups are skipped."""
    data = analysis.structured_data
    date_str = format_card_date(analysis.timestamp, now=now)
    cards: List[InsightCard] = []

    observations = ([data.visit_summary] if data.visit_summary else []) + list(data.key_observations)
    if observations:
        cards.append(InsightCard("observation", "Observations", observations, date_str))

    reminders = list(data.medication_notes) + list(data.suggested_followups)
    if reminders:
        cards.append(InsightCard("reminder", "Reminders", reminders, date_str))

    recommendations = list(data.concerns) + [
        f"{flag.risk}: {flag.reason}" for flag in analysis.risk_flags
    ]
    if recommendations:
        cards.append(InsightCard("recommendation", "Recommendations", recommendations, date_str))

    return cards
