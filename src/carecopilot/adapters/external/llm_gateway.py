"""
Centralized LLM gateway with telemetry and prompt version tracking.

This module provides a unified interface for making LLM calls with:
- Automatic prompt version tracking
- OpenTelemetry spans and AI request metrics
- Consistent error handling (errors are logged and re-raised)
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ...application.ports.services.llm_gateway import Completion, CompletionRequest, LLMGateway
from ...application.prompts.registry import PromptScenario, prompt_version, scenario_for_step
from ...core.ai_client import OpenAIChatClient
from ...core.ai_factory import get_ai_client, is_ai_configured
from ...domain.enums import PipelineStep
from ...observability import add_span_attribute, record_ai_request, set_span_status, trace_operation

logger = logging.getLogger(__name__)


async def call_llm_with_telemetry(
    ai_client: OpenAIChatClient,
    scenario: PromptScenario,
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
    temperature: float = 0.2,
    max_tokens: Optional[int] = None,
    **kwargs: Any,
) -> Any:
    """
    Central gateway for LLM calls with telemetry.

    Args:
        ai_client: OpenAIChatClient instance
        scenario: PromptScenario enum value for this LLM call
        messages: List of message dicts for the LLM
        model: Optional model override
        temperature: Sampling temperature
        max_tokens: Optional max tokens for response
        **kwargs: Additional arguments passed to chat completion

    Returns:
        LLM response object
    """
    version = prompt_version(scenario)
    model_name = model or ai_client.model
    start_time = time.perf_counter()

    with trace_operation(
        "llm_call",
        {
            "llm.scenario": scenario.value,
            "llm.prompt_version": version,
            "llm.model": model_name,
        },
    ) as span:
        try:
            response = await ai_client.chat(
                messages=messages,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000.0
            add_span_attribute(span, "llm.latency_ms", latency_ms)
            add_span_attribute(span, "llm.error", str(e)[:200])
            set_span_status(span, success=False, error_message=str(e))
            record_ai_request(model_name, scenario.value, latency_ms, 0, success=False)
            logger.error(
                f"LLM call failed: scenario={scenario.value} "
                f"version={version} error={str(e)}"
            )
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000.0
        usage = getattr(response, "usage", None)
        total_tokens = (getattr(usage, "total_tokens", 0) or 0) if usage is not None else 0
        add_span_attribute(span, "llm.latency_ms", latency_ms)
        add_span_attribute(span, "llm.tokens", total_tokens)
        set_span_status(span, success=True)
        record_ai_request(model_name, scenario.value, latency_ms, total_tokens, success=True)

        logger.info(
            f"LLM call completed: scenario={scenario.value} "
            f"version={version} latency_ms={latency_ms:.2f}"
        )
        return response


def _first_choice_content(response: Any) -> Optional[str]:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None) if message is not None else None


def _usage_dict(response: Any) -> Dict[str, Any]:
    usage = getattr(response, "usage", None)
    if usage is None:
        return {}
    return {
        "prompt_tokens": getattr(usage, "prompt_tokens", 0),
        "completion_tokens": getattr(usage, "completion_tokens", 0),
        "total_tokens": getattr(usage, "total_tokens", 0),
    }


class OpenAILLMGateway(LLMGateway):
    """LLMGateway backed by the hosted OpenAI chat completions API."""

    def __init__(self, client: Optional[OpenAIChatClient] = None):
        self._client = client

    def is_available(self) -> bool:
        return self._client is not None or is_ai_configured()

    def _get_client(self) -> OpenAIChatClient:
        # Shared process-wide client unless one was injected.
        return self._client or get_ai_client()

    async def complete(self, request: CompletionRequest) -> Completion:
        client = self._get_client()
        kwargs: Dict[str, Any] = {}
        if request.wants_json:
            kwargs["response_format"] = {"type": "json_object"}

        scenario = scenario_for_step(request.step or PipelineStep.CLEAN)
        response = await call_llm_with_telemetry(
            client,
            scenario,
            [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_content},
            ],
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            **kwargs,
        )
        return Completion(
            content=_first_choice_content(response),
            model=getattr(response, "model", None) or client.model,
            usage=_usage_dict(response),
        )
