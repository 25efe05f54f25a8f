"""
Visit-over-visit trend comparison tests.
"""

import pytest

from carecopilot.application.insights import (
    compute_trend_analysis,
    count_new_risks_since_prior,
    get_new_since_last_visit_findings,
    get_trend_indicator_for_timeline,
    get_trend_labels,
)
from carecopilot.domain.enums import FindingType, TrendLabelType

from conftest import make_analysis


def _previous():
    return make_analysis(
        concerns=["Poor appetite."],
        observations=["Walked well"],
        flags=[("Fall risk", "low", "Slow gait"), ("Dehydration", "medium", "Low fluids")],
    )


def _latest():
    return make_analysis(
        concerns=["Dizziness when standing"],
        observations=["walked well."],
        flags=[
            ("fall risk", "high", "Dizzy"),
            ("Dehydration", "high", "Dry mouth"),
            ("Confusion", "medium", "Forgot lunch"),
        ],
    )


def test_no_previous_visit_means_no_trend():
    trend = compute_trend_analysis(_latest(), None)
    assert trend.new_findings == []
    assert trend.worsening_signals == []
    assert trend.improvements == []
    assert not trend.has_change


def test_trend_compares_normalized_findings_and_risks():
    trend = compute_trend_analysis(_latest(), _previous())

    assert trend.new_findings == ["dizziness when standing"]
    assert trend.improvements == ["poor appetite"]
    assert trend.worsening_signals == [
        "fall risk severity increased",
        "Dehydration severity increased",
        "Confusion newly identified",
    ]
    assert trend.has_change


def test_only_upward_transitions_count_as_worsening():
    previous = make_analysis(flags=[("A", "high", ""), ("B", "medium", ""), ("C", "low", "")])
    latest = make_analysis(flags=[("A", "medium", ""), ("B", "medium", ""), ("C", "medium", "")])
    assert compute_trend_analysis(latest, previous).worsening_signals == ["C severity increased"]


def test_timeline_indicator():
    assert get_trend_indicator_for_timeline(_latest(), None) is None
    assert get_trend_indicator_for_timeline(_latest(), _previous()) == "fall risk severity increased"

    previous = make_analysis(concerns=["Tired"])
    latest = make_analysis(concerns=["Tired"], flags=[("Confusion", "medium", "")])
    assert (
        get_trend_indicator_for_timeline(latest, previous)
        == "Confusion observed compared to prior visit"
    )

    latest = make_analysis(concerns=["Tired", "Cough"])
    assert get_trend_indicator_for_timeline(latest, previous) == "cough compared to prior visit"
    assert get_trend_indicator_for_timeline(previous, previous) is None


def test_trend_labels_order():
    labels = get_trend_labels(_latest(), _previous())
    assert [label.type for label in labels] == [
        TrendLabelType.NEW,
        TrendLabelType.WORSENING,
        TrendLabelType.IMPROVED,
    ]
    assert [label.label for label in labels] == ["New", "Worsening", "Improved"]
    assert get_trend_labels(_latest(), None) == []


def test_new_since_last_visit_lists_risks_before_concerns():
    findings = get_new_since_last_visit_findings(_latest(), _previous())
    assert [(f.text, f.type) for f in findings] == [
        ("fall risk severity increased", FindingType.RISK),
        ("Dehydration severity increased", FindingType.RISK),
        ("Confusion", FindingType.RISK),
        ("dizziness when standing", FindingType.CONCERN),
    ]


def test_count_new_risks_since_prior():
    assert count_new_risks_since_prior(_latest(), _previous()) == 1
    assert count_new_risks_since_prior(_latest(), None) == 0


SYMMETRY_PAIRS = [
    (_previous, _latest),
    (
        lambda: make_analysis(concerns=["Fatigue.", "fatigue"], observations=["Ate lunch"]),
        lambda: make_analysis(concerns=["Fatigue"], observations=["Ate lunch..", "Confused"]),
    ),
    (
        lambda: make_analysis(concerns=["Cough", "Cough"], observations=[]),
        lambda: make_analysis(concerns=[], observations=["  cough.  ", "Rash"]),
    ),
    (
        lambda: make_analysis(),
        lambda: make_analysis(concerns=["Swelling"], observations=["Swelling."]),
    ),
]


@pytest.mark.parametrize("build_a,build_b", SYMMETRY_PAIRS)
def test_improvements_mirror_new_findings(build_a, build_b):
    a, b = build_a(), build_b()
    assert compute_trend_analysis(a, b).improvements == compute_trend_analysis(b, a).new_findings
    assert compute_trend_analysis(b, a).improvements == compute_trend_analysis(a, b).new_findings


def test_duplicates_survive_in_both_directions():
    a = make_analysis(concerns=["Cough", "Cough"])
    b = make_analysis(observations=["Rash"])
    assert compute_trend_analysis(b, a).improvements == ["cough", "cough"]
    assert compute_trend_analysis(a, b).new_findings == ["cough", "cough"]
