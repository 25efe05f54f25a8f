"""
Summary, banner, snapshot, chip and takeaway derivation tests.
"""

from carecopilot.application.insights import (
    derive_ai_snapshot_text,
    derive_ai_summary,
    derive_ai_summary_short,
    derive_key_takeaway,
    derive_trend_chips,
    get_insight_banner_message,
    strip_filler_phrases,
)
from carecopilot.application.insights.summaries import (
    BANNER_CHANGE,
    BANNER_FIRST_VISIT,
    BANNER_HIGH,
    BANNER_MULTI,
    BANNER_MULTI_HIGH,
    BANNER_STABLE_VS_PRIOR,
)
from carecopilot.domain.enums import TrendDirection

from conftest import make_analysis


def _changed_pair():
    previous = make_analysis(concerns=["Tired"])
    latest = make_analysis(
        concerns=["Tired", "Dizziness when standing", "Poor appetite"],
        flags=[("Confusion", "medium", "")],
    )
    return latest, previous


def test_strip_filler_phrases():
    assert strip_filler_phrases("Visit with Mary showed she was tired and pale.") == "tired and pale."
    assert strip_filler_phrases("Overall the patient was observed to be calm.") == "calm."


def test_summary_short():
    assert derive_ai_summary_short(make_analysis(flags=[("Fall risk", "high", "")])) == (
        "fall risk noted; may warrant attention"
    )
    assert derive_ai_summary_short(
        make_analysis(flags=[("Fall risk", "high", ""), ("Dehydration", "urgent", "")])
    ) == "Multiple risks: fall risk, dehydration"
    assert derive_ai_summary_short(make_analysis(summary="Quiet day.")) == "Quiet day."
    assert derive_ai_summary_short(make_analysis()) == "Visit recorded"


def test_summary_leads_with_high_risks():
    analysis = make_analysis(
        concerns=["Dizziness when standing.", "Low appetite", "Ignored third"],
        flags=[("Fall risk", "high", "Dizzy.")],
    )
    assert derive_ai_summary(analysis) == (
        "fall risk may warrant attention. Monitor dizziness when standing and low appetite."
    )


def test_summary_falls_back_to_first_reason_sentence():
    analysis = make_analysis(flags=[("Fall risk", "high", "Dizzy spells. More text")])
    assert derive_ai_summary(analysis) == "fall risk may warrant attention. Dizzy spells."


def test_summary_for_moderate_visit():
    analysis = make_analysis(
        concerns=["Poor sleep"], flags=[("Insomnia", "medium", "")], summary="Quiet day."
    )
    assert derive_ai_summary(analysis) == "Monitor poor sleep. Quiet day."
    assert derive_ai_summary(make_analysis(flags=[("Insomnia", "low", "")])) == (
        "Stable visit; minor follow-ups suggested."
    )


def test_summary_for_stable_visit():
    assert derive_ai_summary(
        make_analysis(summary="Visit with Mary showed she was cheerful.")
    ) == "cheerful."
    assert derive_ai_summary(make_analysis()) == (
        "Visit suggests stable status with no significant concerns."
    )


def test_banner_priority():
    latest, previous = _changed_pair()
    assert get_insight_banner_message(latest, previous) == BANNER_CHANGE
    assert get_insight_banner_message(make_analysis(), make_analysis(concerns=["Tired"])) == (
        BANNER_STABLE_VS_PRIOR
    )
    assert get_insight_banner_message(
        make_analysis(flags=[("A", "high", ""), ("B", "low", "")]), None
    ) == BANNER_MULTI_HIGH
    assert get_insight_banner_message(
        make_analysis(flags=[("A", "medium", ""), ("B", "medium", "")]), None
    ) == BANNER_MULTI
    assert get_insight_banner_message(make_analysis(flags=[("A", "high", "")]), None) == BANNER_HIGH
    assert get_insight_banner_message(make_analysis(), None) == BANNER_FIRST_VISIT

    same = make_analysis(flags=[("A", "low", "")])
    assert get_insight_banner_message(same, same) == BANNER_STABLE_VS_PRIOR


def test_snapshot_text():
    latest, previous = _changed_pair()
    assert derive_ai_snapshot_text(latest, previous) == (
        "Confusion compared to prior visit. New: dizziness when standing. poor appetite."
    )
    assert derive_ai_snapshot_text(make_analysis(flags=[("Fall risk", "high", "")]), None) == (
        "Patient stable overall with fall risk noted."
    )
    assert derive_ai_snapshot_text(
        make_analysis(flags=[("Fall risk", "high", ""), ("Edema", "low", ""), ("C", "low", "")]),
        None,
    ) == "Patient stable overall with mild concerns: fall risk, edema."
    assert derive_ai_snapshot_text(make_analysis(), None) == (
        "Patient stable overall with no significant concerns."
    )


def test_trend_chips():
    latest, previous = _changed_pair()
    chips = derive_trend_chips(latest, previous)
    assert [(c.label, c.direction) for c in chips] == [("Cognition declining", TrendDirection.UP)]

    previous = make_analysis(concerns=["Poor appetite"])
    latest = make_analysis(flags=[("Fall risk", "high", "")])
    assert [(c.label, c.direction) for c in derive_trend_chips(latest, previous)] == [
        ("Risk increasing", TrendDirection.UP),
        ("Some areas improving", TrendDirection.DOWN),
    ]

    stable = make_analysis(concerns=["Tired"])
    assert [c.label for c in derive_trend_chips(stable, stable)] == ["Stable overall"]
    assert derive_trend_chips(stable, None) == []


def test_key_takeaway():
    latest, previous = _changed_pair()
    assert derive_key_takeaway(latest, previous) == (
        "Confusion and dizziness when standing suggest monitoring."
    )
    assert derive_key_takeaway(
        make_analysis(flags=[("Fall risk", "high", ""), ("Dehydration", "high", "")]), None
    ) == "fall risk and dehydration may warrant attention."
    assert derive_key_takeaway(make_analysis(concerns=["Poor sleep."]), None) == "Monitor poor sleep."
    assert derive_key_takeaway(make_analysis(summary="Calm visit. Ate well."), None) == "Calm visit."
    assert derive_key_takeaway(make_analysis(), None) == "Visit documented. No acute concerns."
