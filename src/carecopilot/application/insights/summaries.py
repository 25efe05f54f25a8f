"""Short user-facing summary strings derived from one or two analyses.

Priority is always: visit-over-visit change, then high risks, then stable.
"""

import re
from typing import List, Optional

from ...domain.entities import AnalysisResult
from ...domain.enums import TrendDirection
from .text import collapse_spaces, first_sentence, is_high, strip_trailing_periods
from .trends import compute_trend_analysis, strip_newly_identified
from .types import TrendChip

FILLER_PATTERNS = (
    re.compile(r"\bVisit with [^.]* showed (?:he|she|they|patient) was\s+", re.IGNORECASE),
    re.compile(r"\b(?:The )?patient (?:was )?(?:observed to be |noted to be )", re.IGNORECASE),
    re.compile(r"\b(?:Overall |In summary,? )", re.IGNORECASE),
)

COGNITION_FINDING_RE = re.compile(r"confusion|confused|cognition|cognitive")
COGNITION_SIGNAL_RE = re.compile(r"confusion|confused|cognition")
FALL_SIGNAL_RE = re.compile(r"fall|mobility|unsteady")
FALL_FINDING_RE = re.compile(r"fall|mobility|unsteady|dizzy")

BANNER_CHANGE = "Notable change observed since last visit."
BANNER_STABLE_VS_PRIOR = "Condition appears stable compared to prior visit."
BANNER_MULTI_HIGH = "Multiple risk signals identified."
BANNER_MULTI = "Several areas warrant attention."
BANNER_HIGH = "Risk signal noted."
BANNER_FIRST_VISIT = "Visit documented. No significant concerns noted."


def strip_filler_phrases(text: str) -> str:
    for pattern in FILLER_PATTERNS:
        text = pattern.sub("", text)
    return collapse_spaces(text)


def _high_risk_topics(analysis: AnalysisResult) -> List[str]:
    return [f.risk.lower() for f in analysis.risk_flags if is_high(f.severity)]


def derive_ai_summary_short(analysis: AnalysisResult) -> str:
    """One-liner for timeline and dashboard rows."""
    topics = _high_risk_topics(analysis)
    if topics:
        if len(topics) == 1:
            return f"{topics[0]} noted; may warrant attention"
        return f"Multiple risks: {', '.join(topics)}"
    return analysis.structured_data.visit_summary or "Visit recorded"


def derive_ai_summary(analysis: AnalysisResult) -> str:
    """Headline summary for the insights view."""
    data = analysis.structured_data
    summary = strip_filler_phrases(data.visit_summary)
    concerns = data.concerns
    observations = data.key_observations
    high_risks = [f for f in analysis.risk_flags if is_high(f.severity)]

    if high_risks:
        topics = [f.risk.lower() for f in high_risks]
        if len(topics) == 1:
            base = f"{topics[0]} may warrant attention."
        else:
            base = f"Multiple risks noted: {', '.join(topics)}."
        detail = ""
        if concerns:
            cleaned = [strip_trailing_periods(c).strip().lower() for c in concerns[:2]]
            detail = f"Monitor {' and '.join(cleaned)}."
        elif high_risks[0].reason:
            detail = first_sentence(high_risks[0].reason) + "."
        elif observations and observations[0]:
            detail = strip_trailing_periods(observations[0]) + "."
        return f"{base} {detail}" if detail else base

    if analysis.risk_flags or concerns:
        concern_note = f"Monitor {', '.join(concerns[:2]).lower()}. " if concerns else ""
        if summary:
            return f"{concern_note}{summary}"
        return concern_note or "Stable visit; minor follow-ups suggested."

    return summary or "Visit suggests stable status with no significant concerns."


def get_insight_banner_message(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> str:
    flags = latest.risk_flags
    high_count = sum(1 for f in flags if is_high(f.severity))
    multi_risk = len(flags) >= 2

    if previous is not None:
        trend = compute_trend_analysis(latest, previous)
        if trend.has_change:
            return BANNER_CHANGE
        if trend.improvements and not flags:
            return BANNER_STABLE_VS_PRIOR

    if multi_risk and high_count > 0:
        return BANNER_MULTI_HIGH
    if multi_risk:
        return BANNER_MULTI
    if high_count > 0:
        return BANNER_HIGH
    if previous is not None:
        return BANNER_STABLE_VS_PRIOR
    return BANNER_FIRST_VISIT


def derive_ai_snapshot_text(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> str:
    """One or two sentences on change since the prior visit, or current status."""
    summary = latest.structured_data.visit_summary
    flags = latest.risk_flags
    trend = compute_trend_analysis(latest, previous) if previous is not None else None

    if trend is not None and trend.has_change:
        parts: List[str] = []
        if trend.worsening_signals:
            parts.append(f"{strip_newly_identified(trend.worsening_signals[0])} compared to prior visit.")
        if trend.new_findings:
            second = f". {trend.new_findings[1]}" if len(trend.new_findings) > 1 else ""
            parts.append(f"New: {trend.new_findings[0]}{second}.")
        return " ".join(parts) or summary or "Notable changes observed."

    if flags:
        topics = [f.risk.lower() for f in flags[:2]]
        if len(topics) == 1:
            return f"Patient stable overall with {topics[0]} noted."
        return f"Patient stable overall with mild concerns: {', '.join(topics)}."
    return summary or "Patient stable overall with no significant concerns."


def derive_trend_chips(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> List[TrendChip]:
    if previous is None:
        return []
    trend = compute_trend_analysis(latest, previous)
    chips: List[TrendChip] = []

    has_confusion = any(
        COGNITION_FINDING_RE.search(f.lower()) for f in trend.new_findings
    ) or any(COGNITION_SIGNAL_RE.search(s.lower()) for s in trend.worsening_signals)
    if has_confusion:
        chips.append(TrendChip("Cognition declining", TrendDirection.UP))

    has_fall_risk = any(
        FALL_SIGNAL_RE.search(s.lower()) for s in trend.worsening_signals
    ) or any(FALL_FINDING_RE.search(f.lower()) for f in trend.new_findings)
    if has_fall_risk:
        chips.append(TrendChip("Risk increasing", TrendDirection.UP))

    if trend.improvements:
        chips.append(TrendChip("Some areas improving", TrendDirection.DOWN))

    if not chips:
        chips.append(TrendChip("Stable overall", TrendDirection.STABLE))
    return chips


def derive_key_takeaway(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> str:
    trend = compute_trend_analysis(latest, previous) if previous is not None else None
    concerns = latest.structured_data.concerns
    high_topics = _high_risk_topics(latest)

    if trend is not None and trend.has_change:
        parts: List[str] = []
        if trend.worsening_signals and trend.worsening_signals[0]:
            parts.append(strip_newly_identified(trend.worsening_signals[0]))
        if trend.new_findings and trend.new_findings[0]:
            parts.append(trend.new_findings[0])
        return f"{' and '.join(parts)} suggest monitoring."

    if high_topics:
        return f"{' and '.join(high_topics[:2])} may warrant attention."
    if concerns:
        return f"Monitor {strip_trailing_periods(concerns[0].lower())}."
    first = first_sentence(latest.structured_data.visit_summary)
    return f"{first}." if first else "Visit documented. No acute concerns."
