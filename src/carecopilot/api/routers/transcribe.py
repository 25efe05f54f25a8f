"""
POST /transcribe: speech-to-text for a recorded caregiver visit.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from ...application.dto.visit_dto import TranscribeAudioRequest
from ...application.use_cases.transcribe_audio import TranscribeAudioUseCase
from ...core.config import get_settings
from ...core.exceptions import LLMUnavailableError
from ...domain.errors import InvalidAudioError
from ..deps import TranscriptionServiceDep
from ..errors import ServiceUnavailableError
from ..utils.responses import fail
from .analyze import SERVICE_UNAVAILABLE_MESSAGE

router = APIRouter(tags=["transcription"])
logger = logging.getLogger("carecopilot")


def _error(request: Request, status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=fail(request, error, message).model_dump())


@router.post("/transcribe", status_code=status.HTTP_200_OK)
async def transcribe_audio(
    request: Request,
    transcription_service: TranscriptionServiceDep,
    audio: Optional[UploadFile] = File(None),
    language: Optional[str] = Form(None),
):
    """Transcribe the multipart ``audio`` file and return ``{"text": ...}``."""
    use_case = TranscribeAudioUseCase(transcription_service, get_settings().audio)

    if not transcription_service.is_available():
        raise ServiceUnavailableError(SERVICE_UNAVAILABLE_MESSAGE)

    try:
        if audio is not None:
            use_case.check_size(audio.size)
        payload = TranscribeAudioRequest(
            audio=await audio.read() if audio is not None else b"",
            filename=(audio.filename if audio is not None else "") or "recording.webm",
            content_type=(audio.content_type if audio is not None else "") or "",
            language=language,
        )
        text = await use_case.execute(payload)
    except InvalidAudioError as e:
        return _error(request, status.HTTP_400_BAD_REQUEST, "Invalid request", e.message)
    except LLMUnavailableError as e:
        return _error(request, status.HTTP_503_SERVICE_UNAVAILABLE, "Configuration error", e.message)
    except Exception as e:
        logger.error(f"[Transcribe] Error: {e}", exc_info=True)
        return _error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Transcription failed",
            "Could not transcribe audio. Please try again.",
        )

    return {"text": text}
