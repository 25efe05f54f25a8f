"""
LLM gateway interface for chat completions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ....domain.enums import PipelineStep

JSON_RESPONSE_FORMAT = "json"


@dataclass(frozen=True)
class CompletionRequest:
    """One system + user exchange with generation limits."""

    system_prompt: str
    user_content: str
    max_tokens: int
    temperature: float
    response_format: Optional[str] = None
    step: Optional[PipelineStep] = None

    @property
    def wants_json(self) -> bool:
        return self.response_format == JSON_RESPONSE_FORMAT


@dataclass(frozen=True)
class Completion:
    """Model output. ``content`` is None when the model returned nothing."""

    content: Optional[str]
    model: Optional[str] = None
    usage: Dict[str, Any] = field(default_factory=dict)


class LLMGateway(ABC):
    """Abstract chat-completion backend."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backend is configured (e.g. credential present)."""
        pass

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> Completion:
        """
        Run one chat completion.

        Raises:
            LLMUnavailableError: the backend is not configured.
            Exception: transport, timeout or API errors propagate unchanged.
        """
        pass
