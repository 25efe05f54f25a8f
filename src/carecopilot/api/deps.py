"""FastAPI dependency providers.

Override any provider through ``app.dependency_overrides`` in tests.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from ..adapters.external.llm_gateway import OpenAILLMGateway
from ..adapters.external.transcription_service_openai import OpenAITranscriptionService
from ..adapters.session import SessionRegistry
from ..application.ports.repositories.session_store import SessionStore
from ..application.ports.services.llm_gateway import LLMGateway
from ..application.ports.services.transcription_service import TranscriptionService
from ..application.use_cases.visit_pipeline import VisitPipeline
from ..core.config import get_settings

DEFAULT_SESSION_ID = "default"


@lru_cache()
def get_llm_gateway() -> LLMGateway:
    """Get LLM gateway instance."""
    return OpenAILLMGateway()


@lru_cache()
def get_transcription_service() -> TranscriptionService:
    """Get transcription service instance."""
    return OpenAITranscriptionService()


@lru_cache()
def get_session_registry() -> SessionRegistry:
    """Process-wide registry of per-session stores."""
    settings = get_settings().session
    return SessionRegistry(
        idle_ttl_seconds=settings.idle_ttl_seconds,
        max_sessions=settings.max_sessions,
    )


def get_visit_pipeline(
    gateway: Annotated[LLMGateway, Depends(get_llm_gateway)],
) -> VisitPipeline:
    return VisitPipeline(gateway, get_settings().pipeline)


def get_session_store(
    request: Request,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> SessionStore:
    """Store for the session named by the session header (see SessionMiddleware)."""
    session_id = getattr(request.state, "session_id", None) or DEFAULT_SESSION_ID
    return registry.get(session_id)


LLMGatewayDep = Annotated[LLMGateway, Depends(get_llm_gateway)]
TranscriptionServiceDep = Annotated[TranscriptionService, Depends(get_transcription_service)]
VisitPipelineDep = Annotated[VisitPipeline, Depends(get_visit_pipeline)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
