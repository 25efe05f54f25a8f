"""Composes every derived insight for one selected visit of a patient."""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...core.utils.datetime_utils import format_visit_date
from ...domain.entities import AnalysisResult, Patient
from .cards import analysis_to_insight_cards
from .confidence import compute_ai_confidence
from .export import build_emr_export_text, build_export_text
from .risk import (
    capitalize_severity,
    generate_escalation,
    get_contributing_signals,
    get_highest_risk_severity,
    get_risky_phrase_ranges,
    normalize_risk_title_for_emr,
    sort_risks_by_severity,
)
from .summaries import (
    derive_ai_snapshot_text,
    derive_ai_summary,
    derive_ai_summary_short,
    derive_key_takeaway,
    derive_trend_chips,
    get_insight_banner_message,
)
from .trends import (
    compute_trend_analysis,
    count_new_risks_since_prior,
    get_new_since_last_visit_findings,
    get_trend_indicator_for_timeline,
    get_trend_labels,
)

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(raw: Any) -> int:
    # "2abc" -> 2, "1.5" -> 1; anything without a leading integer -> 0
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else 0
    match = LEADING_INT_RE.match(str(raw))
    return int(match.group(1)) if match else 0


def clamp_visit_index(raw: Any, visit_count: int) -> int:
    """Coerce a user-supplied visit index into ``[0, visit_count - 1]``.

    Only the leading integer of a string counts; input without one selects
    the newest visit.
    """
    index = _leading_int(raw)
    max_index = max(0, visit_count - 1)
    return min(max(0, index), max_index)


@dataclass
class InsightsReport:
    """Everything the insights view shows for one visit."""

    patient_id: str
    visit_index: int
    visit_count: int
    visit_date: str
    analysis: AnalysisResult
    has_previous: bool
    summary: str
    summary_short: str
    banner: str
    snapshot: str
    key_takeaway: str
    highest_severity: Optional[str]
    new_risk_count: int
    confidence: Dict[str, Any]
    trend: Dict[str, List[str]]
    trend_labels: List[Dict[str, str]]
    trend_chips: List[Dict[str, str]]
    new_since_last_visit: List[Dict[str, str]]
    risks: List[Dict[str, Any]]
    suggested_actions: List[str]
    risky_phrases: List[Dict[str, int]]
    cards: List[Dict[str, Any]]
    timeline: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patientId": self.patient_id,
            "visitIndex": self.visit_index,
            "visitCount": self.visit_count,
            "visitDate": self.visit_date,
            "analysis": self.analysis.to_dict(),
            "hasPrevious": self.has_previous,
            "summary": self.summary,
            "summaryShort": self.summary_short,
            "banner": self.banner,
            "snapshot": self.snapshot,
            "keyTakeaway": self.key_takeaway,
            "highestSeverity": self.highest_severity,
            "newRiskCount": self.new_risk_count,
            "confidence": self.confidence,
            "trend": self.trend,
            "trendLabels": self.trend_labels,
            "trendChips": self.trend_chips,
            "newSinceLastVisit": self.new_since_last_visit,
            "risks": self.risks,
            "suggestedActions": self.suggested_actions,
            "riskyPhrases": self.risky_phrases,
            "cards": self.cards,
            "timeline": self.timeline,
        }


def build_timeline(patient: Patient, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Per-visit rows, newest first, each compared with the visit before it."""
    rows = []
    for index, analysis in enumerate(patient.analyses):
        _, previous = patient.visit_pair(index)
        highest = get_highest_risk_severity(analysis.risk_flags)
        rows.append({
            "index": index,
            "date": format_visit_date(analysis.timestamp, now=now),
            "summary": derive_ai_summary_short(analysis),
            "trendIndicator": get_trend_indicator_for_timeline(analysis, previous),
            "highestSeverity": highest.value if highest else None,
        })
    return rows


def build_insights_report(
    patient: Patient, visit_index: int = 0, now: Optional[datetime] = None
) -> InsightsReport:
    """Build the report for ``patient.analyses[visit_index]``.

    The caller guarantees the patient has at least one analysis.
    """
    index = clamp_visit_index(visit_index, patient.visit_count)
    latest, previous = patient.visit_pair(index)
    data = latest.structured_data

    sorted_flags = sort_risks_by_severity(latest.risk_flags)
    highest = get_highest_risk_severity(latest.risk_flags)
    risks = [
        {
            **flag.to_dict(),
            "severityLabel": capitalize_severity(flag.severity),
            "emrTitle": normalize_risk_title_for_emr(flag.risk),
            "contributingSignals": get_contributing_signals(flag, data.concerns, data.key_observations),
        }
        for flag in sorted_flags
    ]

    return InsightsReport(
        patient_id=patient.id,
        visit_index=index,
        visit_count=patient.visit_count,
        visit_date=format_visit_date(latest.timestamp, now=now),
        analysis=latest,
        has_previous=previous is not None,
        summary=derive_ai_summary(latest),
        summary_short=derive_ai_summary_short(latest),
        banner=get_insight_banner_message(latest, previous),
        snapshot=derive_ai_snapshot_text(latest, previous),
        key_takeaway=derive_key_takeaway(latest, previous),
        highest_severity=highest.value if highest else None,
        new_risk_count=count_new_risks_since_prior(latest, previous),
        confidence=compute_ai_confidence(latest).to_dict(),
        trend=compute_trend_analysis(latest, previous).to_dict(),
        trend_labels=[label.to_dict() for label in get_trend_labels(latest, previous)],
        trend_chips=[chip.to_dict() for chip in derive_trend_chips(latest, previous)],
        new_since_last_visit=[f.to_dict() for f in get_new_since_last_visit_findings(latest, previous)],
        risks=risks,
        suggested_actions=generate_escalation(sorted_flags),
        risky_phrases=[r.to_dict() for r in get_risky_phrase_ranges(latest.cleaned_transcript)],
        cards=[c.to_dict() for c in analysis_to_insight_cards(latest, now=now)],
        timeline=build_timeline(patient, now=now),
    )


def build_export_document(
    patient: Patient, kind: str = "emr", visit_index: int = 0, now: Optional[datetime] = None
) -> str:
    """Render the selected visit as an EMR note (``emr``) or caregiver summary (``summary``)."""
    index = clamp_visit_index(visit_index, patient.visit_count)
    latest, _ = patient.visit_pair(index)
    sorted_flags = sort_risks_by_severity(latest.risk_flags)
    actions = generate_escalation(sorted_flags)
    date_str = format_visit_date(latest.timestamp, now=now)
    ai_summary = derive_ai_summary(latest)

    if kind == "summary":
        return build_export_text(
            patient.name, patient.age, date_str, ai_summary, sorted_flags, actions
        )
    return build_emr_export_text(
        patient.name,
        patient.age,
        date_str,
        latest.structured_data.visit_summary,
        sorted_flags,
        actions,
    )
