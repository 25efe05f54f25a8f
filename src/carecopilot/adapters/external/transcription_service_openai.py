"""
OpenAI Whisper implementation of TranscriptionService.
"""

import logging
from typing import Any, Optional

from ...application.ports.services.transcription_service import TranscriptionService
from ...application.prompts.registry import PromptScenario, prompt_version
from ...core.ai_client import OpenAIChatClient
from ...core.ai_factory import get_ai_client, is_ai_configured
from ...core.config import get_settings
from ...core.exceptions import TranscriptionError
from ...observability import set_span_status, trace_operation

logger = logging.getLogger(__name__)


def _response_text(response: Any) -> str:
    # response_format="text" yields a plain string; json formats an object.
    if isinstance(response, str):
        return response
    return getattr(response, "text", "") or ""


class OpenAITranscriptionService(TranscriptionService):
    """Speech-to-text through the hosted Whisper model."""

    def __init__(self, client: Optional[OpenAIChatClient] = None):
        self._client = client

    def is_available(self) -> bool:
        return self._client is not None or is_ai_configured()

    def _get_client(self) -> OpenAIChatClient:
        # Shared process-wide client unless one was injected.
        return self._client or get_ai_client()

    async def transcribe_audio(
        self,
        audio: bytes,
        filename: str,
        content_type: str,
        language: Optional[str] = None,
    ) -> str:
        client = self._get_client()
        with trace_operation(
            "transcription",
            {
                "transcription.model": get_settings().openai.transcription_model,
                "transcription.version": prompt_version(PromptScenario.TRANSCRIPTION),
                "transcription.bytes": len(audio),
            },
        ) as span:
            try:
                response = await client.transcribe_whisper(
                    (filename or "recording.webm", audio, content_type),
                    language=language,
                    response_format="text",
                )
            except Exception as e:
                set_span_status(span, success=False, error_message=str(e))
                logger.error(f"Whisper transcription failed: {e}")
                raise TranscriptionError(str(e)) from e
            set_span_status(span, success=True)
            return _response_text(response)
