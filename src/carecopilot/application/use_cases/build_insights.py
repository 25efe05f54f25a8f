"""Build insights and export use cases."""

from datetime import datetime
from typing import Optional

from ...domain.errors import AnalysisNotFoundError
from ..dto.visit_dto import InsightsRequest
from ..insights import InsightsReport, build_export_document, build_insights_report
from ..ports.repositories.session_store import SessionStore

EXPORT_KINDS = ("emr", "summary")


class BuildInsightsUseCase:
    """Derive the insights report for one visit of one patient."""

    def __init__(self, session_store: SessionStore):
        self._session_store = session_store

    async def execute(self, request: InsightsRequest, now: Optional[datetime] = None) -> InsightsReport:
        patient = await self._session_store.get_patient(request.patient_id)
        if not patient.analyses:
            raise AnalysisNotFoundError(patient.id)
        return build_insights_report(patient, request.visit_index, now=now)


class ExportVisitUseCase:
    """Render one visit as EMR note or caregiver summary text."""

    def __init__(self, session_store: SessionStore):
        self._session_store = session_store

    async def execute(self, request: InsightsRequest, now: Optional[datetime] = None) -> str:
        if request.export_kind not in EXPORT_KINDS:
            raise ValueError(f"Export kind must be one of: {list(EXPORT_KINDS)}")
        patient = await self._session_store.get_patient(request.patient_id)
        if not patient.analyses:
            raise AnalysisNotFoundError(patient.id)
        return build_export_document(patient, request.export_kind, request.visit_index, now=now)
