"""
Prompt registry for LLM scenarios and version tracking.

Versions are attached to telemetry so output changes can be traced back to
prompt edits. Bump the version whenever a template in ``templates`` changes.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict

from ...domain.enums import PipelineStep
from . import templates


class PromptScenario(str, Enum):
    """LLM scenarios for telemetry and prompt versioning."""

    TRANSCRIPT_CLEAN = "transcript_clean"
    CLINICAL_STRUCTURE = "clinical_structure"
    RISK_ANALYSIS = "risk_analysis"
    TRANSCRIPTION = "transcription"


PROMPT_VERSIONS: Dict[PromptScenario, str] = {
    PromptScenario.TRANSCRIPT_CLEAN: "CLEAN_V2_2025-02-01",
    PromptScenario.CLINICAL_STRUCTURE: "STRUCTURE_V2_2025-02-01",
    PromptScenario.RISK_ANALYSIS: "RISK_V2_2025-02-01",
    PromptScenario.TRANSCRIPTION: "WHISPER_V1",
}

STEP_SCENARIOS: Dict[PipelineStep, PromptScenario] = {
    PipelineStep.CLEAN: PromptScenario.TRANSCRIPT_CLEAN,
    PipelineStep.STRUCTURE: PromptScenario.CLINICAL_STRUCTURE,
    PipelineStep.ANALYZE: PromptScenario.RISK_ANALYSIS,
}

STEP_SYSTEM_PROMPTS: Dict[PipelineStep, str] = {
    PipelineStep.CLEAN: templates.TRANSCRIPT_CLEANER,
    PipelineStep.STRUCTURE: templates.CLINICAL_STRUCTURER,
    PipelineStep.ANALYZE: templates.RISK_ANALYZER,
}


def scenario_for_step(step: PipelineStep) -> PromptScenario:
    return STEP_SCENARIOS[PipelineStep(step)]


def prompt_version(scenario: PromptScenario) -> str:
    return PROMPT_VERSIONS.get(scenario, "UNKNOWN")


__all__ = [
    "PromptScenario",
    "PROMPT_VERSIONS",
    "STEP_SYSTEM_PROMPTS",
    "prompt_version",
    "scenario_for_step",
]
