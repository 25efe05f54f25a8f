"""
Shared fixtures: a scripted LLM gateway, analysis builders and an API client.
"""

import json
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from carecopilot.adapters.session import SessionRegistry
from carecopilot.application.ports.services.llm_gateway import (
    Completion,
    CompletionRequest,
    LLMGateway,
)
from carecopilot.application.ports.services.transcription_service import TranscriptionService
from carecopilot.core.config import reset_settings
from carecopilot.domain.entities import (
    AnalysisResult,
    RiskAnalysis,
    RiskFlag,
    StructuredVisitData,
)
from carecopilot.domain.enums import CareLevel, PipelineStep, Severity

# 2025-01-06 09:05:00 UTC
VISIT_TS = 1736154300000

CLEANED_TRANSCRIPT = (
    "Mrs. Thompson took her morning medications. She reported feeling dizzy when "
    "standing up. Her ankles looked slightly swollen. We walked to the mailbox."
)

STRUCTURED_JSON = {
    "visit_summary": "Mrs. Thompson was alert but reported dizziness on standing.",
    "key_observations": ["Mild ankle swelling"],
    "activities_completed": ["Short walk to mailbox"],
    "medication_notes": ["Morning medications taken"],
    "concerns": ["Dizziness when standing"],
    "suggested_followups": ["Check blood pressure tomorrow"],
    "care_level_indicator": "watch",
}

RISKS_JSON = {
    "risk_flags": [
        {"risk": "Fall risk", "severity": "high", "reason": "Dizziness when standing indicates orthostatic issues."},
        {"risk": "Edema", "severity": "moderate", "reason": "Ankle swelling observed."},
    ]
}


class FakeGateway(LLMGateway):
    """Returns canned completion content per pipeline step and records requests."""

    def __init__(
        self,
        responses: Optional[Dict[PipelineStep, Optional[str]]] = None,
        available: bool = True,
        errors: Optional[Dict[PipelineStep, Exception]] = None,
    ):
        self.responses = responses if responses is not None else default_responses()
        self.available = available
        self.errors = errors or {}
        self.requests: List[CompletionRequest] = []

    def is_available(self) -> bool:
        return self.available

    async def complete(self, request: CompletionRequest) -> Completion:
        self.requests.append(request)
        if request.step in self.errors:
            raise self.errors[request.step]
        return Completion(content=self.responses.get(request.step), model="fake-model")

    @property
    def steps(self) -> List[PipelineStep]:
        return [r.step for r in self.requests]


class FakeTranscriptionService(TranscriptionService):
    def __init__(self, text: str = "  Patient ate lunch.  ", available: bool = True, error: Exception = None):
        self.text = text
        self.available = available
        self.error = error
        self.calls = []

    def is_available(self) -> bool:
        return self.available

    async def transcribe_audio(self, audio, filename, content_type, language=None) -> str:
        self.calls.append((filename, content_type, len(audio)))
        if self.error is not None:
            raise self.error
        return self.text


def default_responses() -> Dict[PipelineStep, str]:
    return {
        PipelineStep.CLEAN: CLEANED_TRANSCRIPT,
        PipelineStep.STRUCTURE: json.dumps(STRUCTURED_JSON),
        PipelineStep.ANALYZE: "```json\n" + json.dumps(RISKS_JSON) + "\n```",
    }


def make_analysis(
    concerns=(),
    observations=(),
    flags=(),
    summary: str = "",
    transcript: str = "",
    timestamp: int = VISIT_TS,
    **fields,
) -> AnalysisResult:
    """Build an AnalysisResult; ``flags`` is a sequence of (risk, severity, reason)."""
    return AnalysisResult(
        cleaned_transcript=transcript,
        structured_data=StructuredVisitData(
            visit_summary=summary,
            key_observations=list(observations),
            concerns=list(concerns),
            activities_completed=list(fields.get("activities", [])),
            medication_notes=list(fields.get("medication_notes", [])),
            suggested_followups=list(fields.get("followups", [])),
            care_level_indicator=fields.get("care_level", CareLevel.STABLE),
        ),
        risks=RiskAnalysis(
            [RiskFlag(risk, Severity.parse(sev), reason) for risk, sev, reason in flags]
        ),
        timestamp=timestamp,
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def transcription_service():
    return FakeTranscriptionService()


@pytest.fixture
def app(gateway, transcription_service):
    from carecopilot.api.deps import (
        get_llm_gateway,
        get_session_registry,
        get_transcription_service,
    )
    from carecopilot.app import create_app

    application = create_app()
    registry = SessionRegistry()
    application.dependency_overrides[get_llm_gateway] = lambda: gateway
    application.dependency_overrides[get_transcription_service] = lambda: transcription_service
    application.dependency_overrides[get_session_registry] = lambda: registry
    return application


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI app."""
    return TestClient(app, headers={"X-Session-ID": "test-session"})
