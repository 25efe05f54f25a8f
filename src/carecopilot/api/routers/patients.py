"""
Session-scoped patient endpoints: roster, active selection, visits and insights.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import PlainTextResponse

from ...application.dto.visit_dto import InsightsRequest, RecordVisitRequest
from ...application.use_cases.analyze_visit import RecordVisitUseCase
from ...application.use_cases.build_insights import BuildInsightsUseCase, ExportVisitUseCase
from ...application.use_cases.manage_patients import (
    AddPatientUseCase,
    ListPatientsUseCase,
    SetActivePatientUseCase,
)
from ..deps import SessionStoreDep, VisitPipelineDep
from ..errors import InvalidRequestError
from ..schemas.common import ApiResponse
from ..schemas.patients import (
    CreatePatientRequest,
    RecordAnalysisRequest,
    SetActivePatientRequest,
)
from ..utils.responses import ok

router = APIRouter(prefix="/patients", tags=["patients"])
logger = logging.getLogger("carecopilot")


@router.get("", response_model=ApiResponse[dict])
async def list_patients(request: Request, session_store: SessionStoreDep):
    """List the session's patients and the active selection."""
    data = await ListPatientsUseCase(session_store).execute()
    return ok(request, data=data, message="OK")


@router.post("", response_model=ApiResponse[dict], status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: Request, payload: CreatePatientRequest, session_store: SessionStoreDep
):
    """Add a patient; the new patient becomes the active one."""
    patient = await AddPatientUseCase(session_store).execute(payload.name, payload.age)
    return ok(request, data=patient.to_summary_dict(), message="Patient created")


@router.get("/active", response_model=ApiResponse[Optional[dict]])
async def get_active_patient(request: Request, session_store: SessionStoreDep):
    patient = await session_store.get_active()
    if patient is None:
        return ok(request, data=None, message="No active patient")
    return ok(request, data=patient.to_summary_dict(), message="OK")


@router.put("/active", response_model=ApiResponse[Optional[dict]])
async def set_active_patient(
    request: Request, payload: SetActivePatientRequest, session_store: SessionStoreDep
):
    patient = await SetActivePatientUseCase(session_store).execute(payload.patient_id)
    return ok(request, data=patient.to_summary_dict() if patient else None, message="OK")


@router.get("/{patient_id}", response_model=ApiResponse[dict])
async def get_patient(request: Request, patient_id: str, session_store: SessionStoreDep):
    """Patient with full visit history, newest first."""
    patient = await session_store.get_patient(patient_id)
    return ok(request, data=patient.to_dict(), message="OK")


@router.post(
    "/{patient_id}/analyses",
    response_model=ApiResponse[dict],
    status_code=status.HTTP_201_CREATED,
)
async def record_analysis(
    request: Request,
    patient_id: str,
    payload: RecordAnalysisRequest,
    pipeline: VisitPipelineDep,
    session_store: SessionStoreDep,
):
    """Analyze a transcript and append the result to the patient's history."""
    analysis = await RecordVisitUseCase(pipeline, session_store).execute(
        RecordVisitRequest(transcript=payload.transcript, patient_id=patient_id)
    )
    return ok(request, data=analysis.to_dict(), message="Visit recorded")


@router.get("/{patient_id}/insights", response_model=ApiResponse[dict])
async def get_insights(
    request: Request,
    patient_id: str,
    session_store: SessionStoreDep,
    visit: Optional[str] = Query(None, description="Visit index, 0 = newest"),
):
    report = await BuildInsightsUseCase(session_store).execute(
        InsightsRequest(patient_id=patient_id, visit_index=visit)
    )
    return ok(request, data=report.to_dict(), message="OK")


@router.get("/{patient_id}/export", response_class=PlainTextResponse)
async def export_visit(
    patient_id: str,
    session_store: SessionStoreDep,
    kind: str = Query("emr", description="emr or summary"),
    visit: Optional[str] = Query(None, description="Visit index, 0 = newest"),
):
    """Plain-text EMR note or caregiver summary for one visit."""
    try:
        text = await ExportVisitUseCase(session_store).execute(
            InsightsRequest(patient_id=patient_id, visit_index=visit, export_kind=kind)
        )
    except ValueError as e:
        raise InvalidRequestError(str(e), {"kind": kind}) from e
    return PlainTextResponse(text)
