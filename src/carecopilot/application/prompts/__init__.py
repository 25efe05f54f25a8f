"""
Prompt templates and version registry.
"""

from .registry import PROMPT_VERSIONS, STEP_SYSTEM_PROMPTS, PromptScenario, prompt_version, scenario_for_step
from .templates import (
    ANALYSIS_SYSTEM_PROMPT,
    ANALYZE_USER_TEMPLATE,
    CAREGIVER_GREETING,
    CLEAN_USER_TEMPLATE,
    CLINICAL_STRUCTURER,
    FRIENDLY_SUMMARY,
    RISK_ANALYZER,
    STRUCTURE_USER_TEMPLATE,
    SYSTEM_PROMPT,
    TRANSCRIPT_CLEANER,
)

__all__ = [
    "ANALYSIS_SYSTEM_PROMPT",
    "ANALYZE_USER_TEMPLATE",
    "CAREGIVER_GREETING",
    "CLEAN_USER_TEMPLATE",
    "CLINICAL_STRUCTURER",
    "FRIENDLY_SUMMARY",
    "PROMPT_VERSIONS",
    "PromptScenario",
    "RISK_ANALYZER",
    "STEP_SYSTEM_PROMPTS",
    "STRUCTURE_USER_TEMPLATE",
    "SYSTEM_PROMPT",
    "TRANSCRIPT_CLEANER",
    "prompt_version",
    "scenario_for_step",
]
