"""
AI client factory.

This module centralizes creation of the core AI client used by the backend.
"""

from __future__ import annotations

from typing import Optional

from .ai_client import OpenAIChatClient
from .config import get_settings

_client: Optional[OpenAIChatClient] = None


def is_ai_configured() -> bool:
    """Check if the OpenAI API key is present."""
    return get_settings().openai.is_configured


def get_ai_client() -> OpenAIChatClient:
    """
    Get the process-wide AI client, creating it on first use.

    Raises LLMUnavailableError when OPENAI_API_KEY is missing.
    """
    global _client
    if _client is None:
        _client = OpenAIChatClient(get_settings().openai)
    return _client


def reset_ai_client() -> None:
    global _client
    _client = None


__all__ = ["get_ai_client", "is_ai_configured", "reset_ai_client", "OpenAIChatClient"]
