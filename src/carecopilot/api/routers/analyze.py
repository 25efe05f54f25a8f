"""
POST /analyze: run the visit pipeline on a transcript and return the result.

Nothing is stored; use ``POST /patients/{id}/analyses`` to record a visit.
"""

import json
import logging
import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ...application.use_cases.analyze_visit import AnalyzeTranscriptUseCase
from ...core.exceptions import LLMUnavailableError
from ...core.structured_logger import log_event
from ...domain.errors import EmptyInputError, PipelineError
from ..deps import VisitPipelineDep
from ..errors import ServiceUnavailableError
from ..schemas.common import PipelineErrorResponse
from ..utils.responses import fail

router = APIRouter(tags=["analyze"])
logger = logging.getLogger("carecopilot")

SERVICE_UNAVAILABLE_MESSAGE = (
    "Add OPENAI_API_KEY to .env or .env.local, then restart the dev server."
)


def _error(status_code: int, error: str, message: str, request: Request, **extra) -> JSONResponse:
    if "step" in extra:
        req_id = getattr(request.state, "request_id", None) or ""
        body = PipelineErrorResponse(error=error, message=message, request_id=req_id, **extra)
    else:
        body = fail(request, error, message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _invalid(request: Request, message: str) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request", message, request)


@router.post("/analyze", status_code=status.HTTP_200_OK)
async def analyze_transcript(request: Request, pipeline: VisitPipelineDep):
    """
    Clean, structure and risk-analyze a caregiver transcript.

    Body: ``{"transcript": "..."}``. Returns ``{cleanedTranscript,
    structuredData, risks}`` on success.
    """
    start = time.perf_counter()
    logger.info("[Analyze] Request received")

    if not pipeline.is_available():
        logger.warning("[Analyze] OpenAI not configured")
        raise ServiceUnavailableError(SERVICE_UNAVAILABLE_MESSAGE)

    raw = await request.body()
    try:
        body = json.loads(raw)
    except ValueError:
        return _invalid(request, "Request body must be valid JSON.")
    if not isinstance(body, dict):
        return _invalid(request, "Request body must be a JSON object.")

    transcript = body.get("transcript")
    if not isinstance(transcript, str):
        return _invalid(request, "Expected { transcript: string }.")
    if not transcript.strip():
        return _invalid(request, "'transcript' cannot be empty.")

    try:
        result = await AnalyzeTranscriptUseCase(pipeline).execute(transcript.strip())
    except EmptyInputError:
        return _invalid(request, "'transcript' cannot be empty.")
    except PipelineError as e:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.error(f"[Analyze] Pipeline error at step \"{e.step.value}\" ({duration_ms:.0f}ms): {e.message}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Pipeline error",
            e.message,
            request,
            step=e.step.value,
        )
    except LLMUnavailableError as e:
        logger.error(f"[Analyze] Missing API key: {e.message}")
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Configuration error", e.message, request)

    duration_ms = (time.perf_counter() - start) * 1000.0
    log_event(
        logger,
        logging.INFO,
        f"[Analyze] Success in {duration_ms:.0f}ms",
        duration_ms=round(duration_ms, 2),
        risk_flags=len(result.risks.risk_flags),
        care_level=result.structured_data.care_level_indicator.value,
    )
    return result.to_dict()
