"""Transcribe audio use case."""

import logging
import time
from typing import Optional

from ...core.config import AudioSettings
from ...core.exceptions import LLMUnavailableError
from ...domain.errors import InvalidAudioError
from ...observability import record_transcription_request
from ..dto.visit_dto import TranscribeAudioRequest
from ..ports.services.transcription_service import TranscriptionService

logger = logging.getLogger("carecopilot")


def is_allowed_mime_type(content_type: str, allowed: list) -> bool:
    """Exact match, or a listed type followed by ``;parameters``."""
    return any(content_type == t or content_type.startswith(t + ";") for t in allowed)


class TranscribeAudioUseCase:
    """Validate an uploaded recording and turn it into transcript text."""

    def __init__(
        self,
        transcription_service: TranscriptionService,
        settings: Optional[AudioSettings] = None,
    ):
        self._transcription_service = transcription_service
        self._settings = settings or AudioSettings()

    def check_size(self, size_bytes: Optional[int]) -> None:
        """Reject oversized uploads; callers use the declared size before reading the body."""
        if size_bytes is not None and size_bytes > self._settings.max_size_bytes:
            raise InvalidAudioError(
                f"Audio file must be under {self._settings.max_size_mb} MB.",
                {"size_bytes": size_bytes},
            )

    def validate(self, request: TranscribeAudioRequest) -> None:
        if not request.audio:
            raise InvalidAudioError("Missing 'audio' file. Send as multipart/form-data.")
        self.check_size(len(request.audio))
        content_type = request.content_type or ""
        if not is_allowed_mime_type(content_type, self._settings.allowed_mime_types):
            raise InvalidAudioError(
                f"Unsupported audio format: {content_type}. Use webm, mp4, mp3, wav, or m4a.",
                {"content_type": content_type},
            )

    async def execute(self, request: TranscribeAudioRequest) -> str:
        if not self._transcription_service.is_available():
            raise LLMUnavailableError()
        self.validate(request)

        start = time.perf_counter()
        try:
            text = await self._transcription_service.transcribe_audio(
                request.audio,
                request.filename,
                request.content_type,
                language=request.language,
            )
        except Exception:
            record_transcription_request(time.perf_counter() - start, success=False)
            raise

        elapsed = time.perf_counter() - start
        record_transcription_request(elapsed, success=True)
        text = (text or "").strip()
        logger.info(
            f"[Transcribe] Completed: bytes={len(request.audio)} "
            f"chars={len(text)} latency_s={elapsed:.2f}"
        )
        return text
