"""
Simple OpenAI client wrapper for core AI operations.

Design goals:
- Talk to the hosted OpenAI API only (via AsyncOpenAI)
- Model names, timeout and retries come from configuration
- No prompt knowledge here; callers build their own messages

Telemetry and error wrapping are handled by the gateway adapters.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from openai import AsyncOpenAI

from .config import OpenAISettings, get_settings
from .exceptions import LLMUnavailableError


class OpenAIChatClient:
    """
    Thin wrapper around AsyncOpenAI for chat completions and Whisper.

    Raises LLMUnavailableError on construction when no API key is configured.
    """

    def __init__(
        self,
        settings: Optional[OpenAISettings] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        settings = settings or get_settings().openai
        if client is None and not settings.is_configured:
            raise LLMUnavailableError()

        self._model = settings.model
        self._transcription_model = settings.transcription_model
        self._client = client or AsyncOpenAI(
            api_key=settings.api_key,
            timeout=settings.timeout_seconds,
            max_retries=settings.max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    # -------------------------------------------------------------------------
    # Core operations
    # -------------------------------------------------------------------------

    async def chat(
        self,
        messages: Sequence[Dict[str, str]],
        *,
        model: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ):
        """
        Generic chat completion helper.

        Args:
            messages: OpenAI chat messages list.
            model: Optional model override. Defaults to the configured model.
            temperature: Sampling temperature.
            max_tokens: Optional max tokens for the response.
            **kwargs: Passed directly to the OpenAI SDK (e.g. response_format).
        """
        return await self._client.chat.completions.create(
            model=model or self._model,
            messages=list(messages),
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    async def transcribe_whisper(
        self,
        file: Any,
        *,
        language: Optional[str] = None,
        **kwargs: Any,
    ):
        """
        Transcribe audio with the configured Whisper model.

        Args:
            file: ``(filename, bytes, content_type)`` tuple or binary file-like object.
            language: Optional language code.
        """
        params: Dict[str, Any] = {"model": self._transcription_model, "file": file}
        if language:
            params["language"] = language
        params.update(kwargs)
        return await self._client.audio.transcriptions.create(**params)


__all__ = ["OpenAIChatClient"]
