"""
Insight derivation engine.

Pure functions over one or two analyses: trends, confidence, escalation,
summary strings and export documents. No I/O and no state.
"""

from .cards import analysis_to_insight_cards
from .confidence import compute_ai_confidence
from .export import (
    build_emr_export_text,
    build_export_text,
    soften_export_reason,
    soften_reason,
    to_clinical_assessment,
)
from .report import (
    InsightsReport,
    build_export_document,
    build_insights_report,
    build_timeline,
    clamp_visit_index,
)
from .risk import (
    RISK_KEYWORDS,
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
    strip_filler_phrases,
)
from .text import normalize_for_compare
from .trends import (
    compute_trend_analysis,
    count_new_risks_since_prior,
    get_new_since_last_visit_findings,
    get_trend_indicator_for_timeline,
    get_trend_labels,
)
from .types import (
    ConfidenceAssessment,
    InsightCard,
    NewFinding,
    PhraseRange,
    TrendAnalysis,
    TrendChip,
    TrendLabel,
)
