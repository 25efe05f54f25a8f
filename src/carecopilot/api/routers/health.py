"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ... import __version__
from ...core.config import get_settings
from ..deps import LLMGatewayDep, TranscriptionServiceDep
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("", response_model=ApiResponse[HealthResponse])
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns the current status of the service.
    """
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        service=get_settings().app_name,
    ), message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(
    request: Request,
    gateway: LLMGatewayDep,
    transcription_service: TranscriptionServiceDep,
):
    """
    Readiness check endpoint.

    The service is degraded (not down) when the OpenAI key is missing: the
    insights and patient routes still work on stored visits.
    """
    checks = {
        "llm_gateway": "ok" if gateway.is_available() else "not_configured",
        "transcription": "ok" if transcription_service.is_available() else "not_configured",
    }
    all_ok = all(v == "ok" for v in checks.values())

    return ok(request, data={
        "status": "ready" if all_ok else "degraded",
        "timestamp": datetime.now(timezone.utc),
        "checks": checks,
    }, message="OK" if all_ok else "Some services unavailable")


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    """
    Liveness check endpoint.

    Returns whether the service is alive.
    """
    return ok(request, data={"status": "alive", "timestamp": datetime.now(timezone.utc)}, message="OK")
