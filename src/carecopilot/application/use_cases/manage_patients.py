"""Patient management use cases for the session store."""

import logging
from typing import Any, Dict, List, Optional

from ...domain.entities import Patient
from ..ports.repositories.session_store import SessionStore

logger = logging.getLogger("carecopilot")


class AddPatientUseCase:
    def __init__(self, session_store: SessionStore):
        self._session_store = session_store

    async def execute(self, name: str, age: int) -> Patient:
        patient = await self._session_store.add_patient(name.strip(), age)
        logger.info(f"[AddPatient] Created patient={patient.id}")
        return patient


class ListPatientsUseCase:
    def __init__(self, session_store: SessionStore):
        self._session_store = session_store

    async def execute(self) -> Dict[str, Any]:
        patients: List[Patient] = await self._session_store.list_patients()
        active = await self._session_store.get_active()
        return {
            "patients": [p.to_summary_dict() for p in patients],
            "activePatientId": active.id if active else None,
        }


class SetActivePatientUseCase:
    def __init__(self, session_store: SessionStore):
        self._session_store = session_store

    async def execute(self, patient_id: Optional[str]) -> Optional[Patient]:
        await self._session_store.set_active(patient_id)
        return await self._session_store.get_active()
