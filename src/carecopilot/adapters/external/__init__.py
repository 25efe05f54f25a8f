from .llm_gateway import OpenAILLMGateway, call_llm_with_telemetry
from .transcription_service_openai import OpenAITranscriptionService

__all__ = ["OpenAILLMGateway", "OpenAITranscriptionService", "call_llm_with_telemetry"]
