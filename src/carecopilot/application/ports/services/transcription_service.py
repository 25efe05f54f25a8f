"""
Transcription service interface for audio-to-text conversion.
"""

from abc import ABC, abstractmethod
from typing import Optional


class TranscriptionService(ABC):
    """Abstract service for audio transcription."""

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    async def transcribe_audio(
        self,
        audio: bytes,
        filename: str,
        content_type: str,
        language: Optional[str] = None,
    ) -> str:
        """
        Transcribe an audio payload to plain text.

        Args:
            audio: Raw audio bytes
            filename: Original file name, used by the backend to sniff format
            content_type: MIME type of the payload
            language: Optional language hint

        Returns:
            Transcript text (may be empty)
        """
        pass
