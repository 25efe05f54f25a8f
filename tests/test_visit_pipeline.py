"""
Visit pipeline stage and orchestration tests.
"""

import asyncio
import json

import pytest

from carecopilot.application.prompts import STEP_SYSTEM_PROMPTS
from carecopilot.application.use_cases.visit_pipeline import VisitPipeline
from carecopilot.core.exceptions import LLMUnavailableError
from carecopilot.domain.enums import CareLevel, PipelineStep, Severity
from carecopilot.domain.errors import EmptyInputError, PipelineError

from conftest import CLEANED_TRANSCRIPT, FakeGateway, default_responses


def run(coro):
    return asyncio.run(coro)


def test_analyze_runs_stages_in_order(gateway):
    result = run(VisitPipeline(gateway).analyze("  um so she took her meds  "))

    assert gateway.steps == [PipelineStep.CLEAN, PipelineStep.STRUCTURE, PipelineStep.ANALYZE]
    assert result.cleaned_transcript == CLEANED_TRANSCRIPT
    assert result.structured_data.care_level_indicator is CareLevel.WATCH
    assert result.structured_data.concerns == ["Dizziness when standing"]
    assert [f.severity for f in result.risks.risk_flags] == [Severity.HIGH, Severity.MEDIUM]


def test_stage_requests_carry_prompts_and_limits(gateway):
    run(VisitPipeline(gateway).analyze("  she took her meds  "))
    clean, structure, analyze = gateway.requests

    assert clean.user_content == "Clean this transcript:\n\nshe took her meds"
    assert clean.response_format is None
    assert (clean.max_tokens, clean.temperature) == (1000, 0.2)

    assert structure.user_content == f"Structure these visit notes:\n\n{CLEANED_TRANSCRIPT}"
    assert structure.wants_json
    assert structure.max_tokens == 1000

    assert analyze.wants_json
    assert analyze.max_tokens == 1024
    assert analyze.user_content.startswith("Analyze risks from this structured visit data:\n\n")
    payload = json.loads(analyze.user_content.split("\n\n", 1)[1])
    assert payload["care_level_indicator"] == "watch"

    for request in gateway.requests:
        assert request.system_prompt == STEP_SYSTEM_PROMPTS[request.step]


def test_empty_input_never_reaches_gateway(gateway):
    with pytest.raises(EmptyInputError) as exc_info:
        run(VisitPipeline(gateway).analyze("   \n\t "))
    assert exc_info.value.step is PipelineStep.CLEAN
    assert exc_info.value.message == "Input text cannot be empty"
    assert gateway.requests == []


def test_unavailable_gateway_fails_before_any_stage():
    gateway = FakeGateway(available=False)
    with pytest.raises(LLMUnavailableError):
        run(VisitPipeline(gateway).analyze("Patient ate lunch."))
    assert gateway.requests == []


def test_credential_error_inside_stage_is_not_wrapped():
    gateway = FakeGateway(errors={PipelineStep.CLEAN: LLMUnavailableError()})
    with pytest.raises(LLMUnavailableError):
        run(VisitPipeline(gateway).analyze("Patient ate lunch."))


@pytest.mark.parametrize(
    "step, message",
    [
        (PipelineStep.CLEAN, "No output from transcript cleaning step"),
        (PipelineStep.STRUCTURE, "No output from clinical structuring step"),
        (PipelineStep.ANALYZE, "No output from risk analysis step"),
    ],
)
def test_empty_completion_fails_its_step(step, message):
    responses = default_responses()
    responses[step] = "   "
    gateway = FakeGateway(responses=responses)

    with pytest.raises(PipelineError) as exc_info:
        run(VisitPipeline(gateway).analyze("Patient ate lunch."))
    assert exc_info.value.step is step
    assert exc_info.value.message == message
    assert gateway.steps[-1] is step


def test_missing_completion_content_is_empty():
    responses = default_responses()
    responses[PipelineStep.CLEAN] = None
    with pytest.raises(PipelineError) as exc_info:
        run(VisitPipeline(FakeGateway(responses=responses)).analyze("Patient ate lunch."))
    assert exc_info.value.message == "No output from transcript cleaning step"


def test_transport_error_is_tagged_with_step():
    cause = TimeoutError("Request timed out.")
    gateway = FakeGateway(errors={PipelineStep.ANALYZE: cause})

    with pytest.raises(PipelineError) as exc_info:
        run(VisitPipeline(gateway).analyze("Patient ate lunch."))
    err = exc_info.value
    assert err.step is PipelineStep.ANALYZE
    assert err.message == "Request timed out."
    assert err.cause is cause
    assert err.__cause__ is cause


def test_error_without_message_uses_stage_default():
    gateway = FakeGateway(errors={PipelineStep.STRUCTURE: RuntimeError()})
    with pytest.raises(PipelineError) as exc_info:
        run(VisitPipeline(gateway).analyze("Patient ate lunch."))
    assert exc_info.value.message == "Clinical structuring failed"


def test_malformed_structure_output_degrades_and_continues():
    responses = default_responses()
    responses[PipelineStep.STRUCTURE] = "Sorry, here are the notes in prose."
    responses[PipelineStep.ANALYZE] = "no json at all"
    gateway = FakeGateway(responses=responses)

    result = run(VisitPipeline(gateway).analyze("Patient ate lunch."))

    assert result.structured_data.visit_summary == ""
    assert result.structured_data.care_level_indicator is CareLevel.STABLE
    assert result.risks.risk_flags == []
    payload = json.loads(gateway.requests[2].user_content.split("\n\n", 1)[1])
    assert payload["concerns"] == []


def test_clean_stage_rejects_blank_input(gateway):
    with pytest.raises(EmptyInputError):
        run(VisitPipeline(gateway).clean_transcript(""))
