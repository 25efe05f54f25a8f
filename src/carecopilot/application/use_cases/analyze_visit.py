"""Analyze transcript and record visit use cases."""

import logging

from ...core.utils.datetime_utils import current_timestamp_ms
from ...domain.entities import AnalysisResult, PipelineResult
from ...domain.errors import NoActivePatientError
from ..dto.visit_dto import RecordVisitRequest
from ..ports.repositories.session_store import SessionStore
from .visit_pipeline import VisitPipeline

logger = logging.getLogger("carecopilot")


class AnalyzeTranscriptUseCase:
    """Run the visit pipeline without storing anything."""

    def __init__(self, pipeline: VisitPipeline):
        self._pipeline = pipeline

    async def execute(self, transcript: str) -> PipelineResult:
        return await self._pipeline.analyze(transcript)


class RecordVisitUseCase:
    """Run the pipeline and append the completed result to a patient's history.

    Nothing is stored unless every stage succeeds.
    """

    def __init__(self, pipeline: VisitPipeline, session_store: SessionStore):
        self._pipeline = pipeline
        self._session_store = session_store

    async def execute(self, request: RecordVisitRequest) -> AnalysisResult:
        if request.patient_id:
            patient = await self._session_store.get_patient(request.patient_id)
        else:
            patient = await self._session_store.get_active()
            if patient is None:
                raise NoActivePatientError()

        result = await self._pipeline.analyze(request.transcript)
        analysis = result.stamp(current_timestamp_ms())
        await self._session_store.append_analysis(patient.id, analysis)

        logger.info(
            f"[RecordVisit] Stored analysis for patient={patient.id} "
            f"risk_flags={len(analysis.risk_flags)}"
        )
        return analysis
