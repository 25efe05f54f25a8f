"""Visit-over-visit trend comparison."""

from typing import Dict, List, Optional, Tuple

from ...domain.entities import AnalysisResult
from ...domain.enums import FindingType, TrendLabelType
from .text import normalize_for_compare, severity_key
from .types import NewFinding, TrendAnalysis, TrendLabel

NEWLY_IDENTIFIED = " newly identified"
SEVERITY_INCREASED = " severity increased"


def _normalized_findings(analysis: AnalysisResult) -> Tuple[List[str], List[str]]:
    data = analysis.structured_data
    return (
        [normalize_for_compare(c) for c in data.concerns],
        [normalize_for_compare(o) for o in data.key_observations],
    )


def _escalated(current: str, previous: str) -> bool:
    # Only these two transitions count as worsening.
    return (current == "high" and previous != "high") or (
        current == "medium" and previous == "low"
    )


def compute_trend_analysis(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> TrendAnalysis:
    """Compare the newest analysis with the one before it.

    new_findings and improvements hold normalized concern/observation text.
    worsening_signals read "<risk> newly identified" or "<risk> severity increased".
    """
    result = TrendAnalysis()
    if previous is None:
        return result

    latest_concerns, latest_obs = _normalized_findings(latest)
    prev_concerns, prev_obs = _normalized_findings(previous)

    prev_set = set(prev_concerns) | set(prev_obs)
    result.new_findings = [f for f in latest_concerns + latest_obs if f not in prev_set]

    prev_severity: Dict[str, str] = {}
    for flag in previous.risk_flags:
        prev_severity[flag.risk.lower()] = severity_key(flag.severity)
    for flag in latest.risk_flags:
        prev_sev = prev_severity.get(flag.risk.lower())
        if not prev_sev:
            result.worsening_signals.append(f"{flag.risk}{NEWLY_IDENTIFIED}")
        elif _escalated(severity_key(flag.severity), prev_sev):
            result.worsening_signals.append(f"{flag.risk}{SEVERITY_INCREASED}")

    latest_set = set(latest_concerns) | set(latest_obs)
    result.improvements = [f for f in prev_concerns + prev_obs if f not in latest_set]

    return result


def strip_newly_identified(signal: str) -> str:
    return signal.replace(NEWLY_IDENTIFIED, "", 1)


def get_trend_indicator_for_timeline(
    analysis: AnalysisResult, previous: Optional[AnalysisResult]
) -> Optional[str]:
    """Short change note shown next to a visit in the patient timeline."""
    if previous is None:
        return None
    trend = compute_trend_analysis(analysis, previous)
    if trend.worsening_signals:
        signal = trend.worsening_signals[0]
        if "newly identified" in signal:
            return f"{strip_newly_identified(signal)} observed compared to prior visit"
        return signal
    if trend.new_findings:
        return f"{trend.new_findings[0]} compared to prior visit"
    return None


def get_trend_labels(
    analysis: AnalysisResult, previous: Optional[AnalysisResult]
) -> List[TrendLabel]:
    if previous is None:
        return []
    trend = compute_trend_analysis(analysis, previous)
    labels: List[TrendLabel] = []
    if trend.new_findings:
        labels.append(TrendLabel(TrendLabelType.NEW, "New"))
    if trend.worsening_signals:
        labels.append(TrendLabel(TrendLabelType.WORSENING, "Worsening"))
    if trend.improvements:
        labels.append(TrendLabel(TrendLabelType.IMPROVED, "Improved"))
    return labels


def get_new_since_last_visit_findings(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> List[NewFinding]:
    """Worsening risks first, then new concern/observation text."""
    if previous is None:
        return []
    trend = compute_trend_analysis(latest, previous)
    items = [
        NewFinding(strip_newly_identified(s) if "newly identified" in s else s, FindingType.RISK)
        for s in trend.worsening_signals
    ]
    items.extend(NewFinding(f, FindingType.CONCERN) for f in trend.new_findings)
    return items


def count_new_risks_since_prior(
    latest: AnalysisResult, previous: Optional[AnalysisResult]
) -> int:
    """Number of latest risk flags whose name did not appear in the prior visit."""
    if previous is None:
        return 0
    prev_names = {flag.risk.lower() for flag in previous.risk_flags}
    return sum(1 for flag in latest.risk_flags if flag.risk.lower() not in prev_names)
