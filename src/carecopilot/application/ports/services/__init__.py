from .llm_gateway import Completion, CompletionRequest, JSON_RESPONSE_FORMAT, LLMGateway
from .transcription_service import TranscriptionService
