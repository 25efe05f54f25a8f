from carecopilot.application.prompts import (
    CLEAN_USER_TEMPLATE,
    CLINICAL_STRUCTURER,
    PROMPT_VERSIONS,
    RISK_ANALYZER,
    STEP_SYSTEM_PROMPTS,
    TRANSCRIPT_CLEANER,
    PromptScenario,
    prompt_version,
    scenario_for_step,
)
from carecopilot.domain.enums import PipelineStep


def test_every_stage_has_a_prompt_and_scenario():
    assert STEP_SYSTEM_PROMPTS[PipelineStep.CLEAN] is TRANSCRIPT_CLEANER
    assert STEP_SYSTEM_PROMPTS[PipelineStep.STRUCTURE] is CLINICAL_STRUCTURER
    assert STEP_SYSTEM_PROMPTS[PipelineStep.ANALYZE] is RISK_ANALYZER
    assert scenario_for_step(PipelineStep.STRUCTURE) == PromptScenario.CLINICAL_STRUCTURE
    assert scenario_for_step("analyze") == PromptScenario.RISK_ANALYSIS


def test_every_scenario_is_versioned():
    for scenario in PromptScenario:
        assert prompt_version(scenario) == PROMPT_VERSIONS[scenario]


def test_json_stage_prompts_name_their_keys():
    for key in ("visit_summary", "care_level_indicator", "suggested_followups"):
        assert key in CLINICAL_STRUCTURER
    assert "risk_flags" in RISK_ANALYZER
    assert "low | medium | high" in RISK_ANALYZER


def test_clean_user_template():
    assert CLEAN_USER_TEMPLATE.format(transcript="hi") == "Clean this transcript:\n\nhi"
