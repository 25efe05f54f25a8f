"""Visit pipeline: clean -> structure -> analyze risks.

Each stage is one LLM call whose output feeds the next. Stages 2 and 3 never
raise on malformed model output; they fall back to empty values. Any stage
failure reaches the caller as a PipelineError tagged with the failing step.
"""

import json
import logging
import time
from typing import Awaitable, Optional, TypeVar

from ...core.config import PipelineSettings
from ...core.exceptions import LLMUnavailableError
from ...domain.entities import PipelineResult, RiskAnalysis, StructuredVisitData
from ...domain.enums import PipelineStep
from ...domain.errors import DomainError, EmptyCompletionError, EmptyInputError, PipelineError
from ...observability import record_pipeline_run, set_span_status, trace_operation
from ..ports.services.llm_gateway import (
    JSON_RESPONSE_FORMAT,
    CompletionRequest,
    LLMGateway,
)
from ..prompts import (
    ANALYZE_USER_TEMPLATE,
    CLEAN_USER_TEMPLATE,
    STEP_SYSTEM_PROMPTS,
    STRUCTURE_USER_TEMPLATE,
)
from ..utils.normalization import parse_risk_analysis, parse_structured_data

logger = logging.getLogger("carecopilot")

T = TypeVar("T")

STAGE_FAILURE_MESSAGES = {
    PipelineStep.CLEAN: "Transcript cleaning failed",
    PipelineStep.STRUCTURE: "Clinical structuring failed",
    PipelineStep.ANALYZE: "Risk analysis failed",
}


def _error_message(exc: BaseException, step: PipelineStep) -> str:
    message = exc.message if isinstance(exc, DomainError) else str(exc)
    return message or STAGE_FAILURE_MESSAGES[step]


class VisitPipeline:
    """Runs the three visit-processing stages against an injected gateway."""

    def __init__(self, gateway: LLMGateway, settings: Optional[PipelineSettings] = None):
        self._gateway = gateway
        self._settings = settings or PipelineSettings()

    def is_available(self) -> bool:
        return self._gateway.is_available()

    async def _complete(
        self,
        step: PipelineStep,
        user_content: str,
        max_tokens: int,
        response_format: Optional[str] = None,
    ) -> str:
        completion = await self._gateway.complete(
            CompletionRequest(
                system_prompt=STEP_SYSTEM_PROMPTS[step],
                user_content=user_content,
                max_tokens=max_tokens,
                temperature=self._settings.temperature,
                response_format=response_format,
                step=step,
            )
        )
        content = (completion.content or "").strip()
        if not content:
            raise EmptyCompletionError(step)
        return content

    async def clean_transcript(self, raw_text: str) -> str:
        """Stage 1: strip filler and ASR noise without dropping clinical content."""
        text = raw_text.strip() if isinstance(raw_text, str) else ""
        if not text:
            raise EmptyInputError()
        return await self._complete(
            PipelineStep.CLEAN,
            CLEAN_USER_TEMPLATE.format(transcript=text),
            self._settings.clean_max_tokens,
        )

    async def structure_visit_data(self, cleaned_transcript: str) -> StructuredVisitData:
        """Stage 2: extract structured visit fields as JSON."""
        content = await self._complete(
            PipelineStep.STRUCTURE,
            STRUCTURE_USER_TEMPLATE.format(transcript=cleaned_transcript),
            self._settings.structure_max_tokens,
            response_format=JSON_RESPONSE_FORMAT,
        )
        return parse_structured_data(content)

    async def analyze_risks(self, structured_data: StructuredVisitData) -> RiskAnalysis:
        """Stage 3: flag risks from the structured data."""
        payload = json.dumps(structured_data.to_dict(), indent=2, ensure_ascii=False)
        content = await self._complete(
            PipelineStep.ANALYZE,
            ANALYZE_USER_TEMPLATE.format(structured_json=payload),
            self._settings.analyze_max_tokens,
            response_format=JSON_RESPONSE_FORMAT,
        )
        return parse_risk_analysis(content)

    async def _run_stage(self, step: PipelineStep, stage: Awaitable[T]) -> T:
        try:
            return await stage
        except (PipelineError, LLMUnavailableError):
            raise
        except Exception as exc:
            raise PipelineError(_error_message(exc, step), step, exc) from exc

    async def analyze(self, transcript: str) -> PipelineResult:
        """Run all stages in order and return the combined result.

        Raises:
            EmptyInputError: transcript is empty after trimming (gateway untouched).
            LLMUnavailableError: gateway is not configured.
            PipelineError: a stage failed; ``step`` names it.
        """
        text = transcript.strip() if isinstance(transcript, str) else ""
        if not text:
            raise EmptyInputError()
        if not self.is_available():
            raise LLMUnavailableError()

        start = time.perf_counter()
        with trace_operation("visit_pipeline", {"pipeline.input_chars": len(text)}) as span:
            try:
                cleaned = await self._run_stage(PipelineStep.CLEAN, self.clean_transcript(text))
                structured = await self._run_stage(
                    PipelineStep.STRUCTURE, self.structure_visit_data(cleaned)
                )
                risks = await self._run_stage(PipelineStep.ANALYZE, self.analyze_risks(structured))
            except PipelineError as e:
                latency_ms = (time.perf_counter() - start) * 1000.0
                set_span_status(span, success=False, error_message=e.message)
                record_pipeline_run(latency_ms, success=False, failed_step=e.step.value)
                logger.error(
                    f"Visit pipeline failed: step={e.step.value} "
                    f"latency_ms={latency_ms:.2f} error={e.message}"
                )
                raise

            latency_ms = (time.perf_counter() - start) * 1000.0
            set_span_status(span, success=True)
            record_pipeline_run(latency_ms, success=True)
            logger.info(
                f"Visit pipeline completed: latency_ms={latency_ms:.2f} "
                f"cleaned_chars={len(cleaned)} risk_flags={len(risks.risk_flags)} "
                f"care_level={structured.care_level_indicator.value}"
            )

        return PipelineResult(
            cleaned_transcript=cleaned,
            structured_data=structured,
            risks=risks,
        )
