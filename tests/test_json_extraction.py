"""
JSON extraction and stage-output normalization tests.
"""

import pytest

from carecopilot.application.utils.json_extraction import (
    extract_json_candidate,
    extract_json_object,
    parse_json_object,
)
from carecopilot.application.utils.normalization import (
    normalize_care_level,
    normalize_severity,
    parse_risk_analysis,
    parse_structured_data,
)
from carecopilot.domain.entities import StructuredVisitData
from carecopilot.domain.enums import CareLevel, Severity


def test_fenced_block_wins_over_surrounding_text():
    content = 'Here you go:\n```json\n{"a": 1}\n```\nLet me know {if} you need more.'
    assert extract_json_candidate(content) == '{"a": 1}'


def test_unlabelled_fence_is_extracted():
    assert extract_json_object('``` {"x": true} ```') == {"x": True}


def test_brace_span_used_without_fence():
    assert extract_json_candidate('Sure! {"a": {"b": 2}} done') == '{"a": {"b": 2}}'


def test_plain_text_returned_trimmed():
    assert extract_json_candidate("  nothing here  ") == "nothing here"


def test_invalid_fenced_content_does_not_fall_back_to_braces():
    assert extract_json_object("```\nnope\n```\n{\"a\": 1}") is None


def test_parse_json_object_rejects_non_objects():
    assert parse_json_object("[1, 2]") is None
    assert parse_json_object("not json") is None
    assert parse_json_object('"text"') is None
    assert parse_json_object('{"a": 1}') == {"a": 1}


def test_normalize_severity():
    assert normalize_severity("Moderate") is Severity.MEDIUM
    assert normalize_severity("medium") is Severity.MEDIUM
    assert normalize_severity("URGENT") is Severity.HIGH
    assert normalize_severity("critical") is Severity.LOW
    assert normalize_severity(None) is Severity.LOW
    assert normalize_severity(3) is Severity.LOW


def test_normalize_care_level_is_exact():
    assert normalize_care_level("attention_needed") is CareLevel.ATTENTION_NEEDED
    assert normalize_care_level("watch") is CareLevel.WATCH
    assert normalize_care_level("Watch") is CareLevel.STABLE
    assert normalize_care_level(None) is CareLevel.STABLE


def test_unparseable_structure_output_is_empty():
    assert parse_structured_data("I could not do that.") == StructuredVisitData.empty()


def test_structure_fields_are_coerced():
    data = parse_structured_data(
        '{"visit_summary": 5, "concerns": "not a list", '
        '"key_observations": ["Alert", 2], "care_level_indicator": "urgent"}'
    )
    assert data.visit_summary == ""
    assert data.concerns == []
    assert data.key_observations == ["Alert", ""]
    assert data.care_level_indicator is CareLevel.STABLE


def test_risk_flags_must_be_a_list():
    assert parse_risk_analysis('{"risk_flags": "none"}').risk_flags == []
    assert parse_risk_analysis("[]").risk_flags == []


def test_risk_flag_entries_are_filtered_and_normalized():
    analysis = parse_risk_analysis(
        '{"risk_flags": [{"risk": "Falls", "severity": "Moderate", "reason": "Unsteady"}, '
        '"text", 3, []]}'
    )
    assert len(analysis.risk_flags) == 2
    first, blank = analysis.risk_flags
    assert (first.risk, first.severity, first.reason) == ("Falls", Severity.MEDIUM, "Unsteady")
    assert (blank.risk, blank.severity, blank.reason) == ("", Severity.LOW, "")


@pytest.mark.parametrize(
    "content",
    [
        "no json at all",
        "{broken",
        "} backwards {",
        "```json\nnot json\n```",
        "[1, 2, 3]",
        '{"visit_summary": 5, "concerns": "one", "care_level_indicator": "critical"}',
    ],
)
def test_repeated_parse_of_malformed_output_is_identical(content):
    first = parse_structured_data(content)
    second = parse_structured_data(content)
    assert first == second
    assert first == StructuredVisitData.empty()
    assert parse_risk_analysis(content) == parse_risk_analysis(content)
