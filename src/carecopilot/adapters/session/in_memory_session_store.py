"""
In-memory session store: one instance per browser session.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...application.ports.repositories.session_store import SessionStore
from ...domain.entities import AnalysisResult, Patient
from ...domain.errors import InvalidPatientDataError, PatientNotFoundError
from ...domain.value_objects import PatientId

logger = logging.getLogger("carecopilot")

# Demo record shipped by early builds; never restored.
LEGACY_DEMO_PATIENT_ID = "mary-thompson"


class InMemorySessionStore(SessionStore):
    """Patients, active selection and visit history held in process memory."""

    def __init__(self) -> None:
        self._patients: List[Patient] = []
        self._active_patient_id: Optional[str] = None
        self._patient_locks: Dict[str, asyncio.Lock] = {}

    def _find(self, patient_id: str) -> Optional[Patient]:
        for patient in self._patients:
            if patient.id == patient_id:
                return patient
        return None

    def _lock_for(self, patient_id: str) -> asyncio.Lock:
        lock = self._patient_locks.get(patient_id)
        if lock is None:
            lock = asyncio.Lock()
            self._patient_locks[patient_id] = lock
        return lock

    async def list_patients(self) -> List[Patient]:
        return list(self._patients)

    async def get_patient(self, patient_id: str) -> Patient:
        patient = self._find(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient

    async def add_patient(self, name: str, age: int) -> Patient:
        patient = Patient(id=PatientId.generate().value, name=name, age=age)
        self._patients.append(patient)
        self._active_patient_id = patient.id
        return patient

    async def set_active(self, patient_id: Optional[str]) -> None:
        if patient_id is not None and self._find(patient_id) is None:
            raise PatientNotFoundError(patient_id)
        self._active_patient_id = patient_id

    async def get_active(self) -> Optional[Patient]:
        if self._active_patient_id is None:
            return None
        return self._find(self._active_patient_id)

    async def append_analysis(self, patient_id: str, analysis: AnalysisResult) -> Patient:
        async with self._lock_for(patient_id):
            patient = await self.get_patient(patient_id)
            patient.record_analysis(analysis)
            return patient

    async def snapshot(self) -> Dict[str, Any]:
        return {
            "patients": [p.to_dict() for p in self._patients],
            "activePatientId": self._active_patient_id,
        }

    async def restore(self, state: Any) -> None:
        patients, active_id = self._hydrate(state)
        self._patients = patients
        self._active_patient_id = active_id
        self._patient_locks = {}

    @staticmethod
    def _hydrate(state: Any):
        if not isinstance(state, dict) or not isinstance(state.get("patients"), list):
            logger.warning("Session restore skipped: malformed state")
            return [], None
        try:
            patients = [
                Patient.from_dict(p)
                for p in state["patients"]
                if isinstance(p, dict) and p.get("id") != LEGACY_DEMO_PATIENT_ID
            ]
        except (KeyError, TypeError, ValueError, OverflowError, InvalidPatientDataError) as e:
            logger.warning(f"Session restore skipped: {e}")
            return [], None

        active_id = state.get("activePatientId")
        known_ids = {p.id for p in patients}
        if active_id not in known_ids:
            active_id = patients[0].id if patients else None
        return patients, active_id


class SessionRegistry:
    """Maps session ids to their stores, creating stores on first use.

    A session ends when it has been idle for ``idle_ttl_seconds`` or when it is
    the least recently used one and ``max_sessions`` is exceeded; its store,
    and every patient in it, is dropped.
    """

    def __init__(
        self,
        idle_ttl_seconds: float = 3600.0,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._idle_ttl_seconds = idle_ttl_seconds
        self._max_sessions = max_sessions
        self._clock = clock
        # session id -> (store, last access); least recently used first
        self._stores: "OrderedDict[str, Tuple[InMemorySessionStore, float]]" = OrderedDict()

    def get(self, session_id: str) -> InMemorySessionStore:
        now = self._clock()
        self.evict_idle(now)

        entry = self._stores.pop(session_id, None)
        if entry is None:
            store = InMemorySessionStore()
            logger.debug(f"Created session store for session={session_id}")
        else:
            store = entry[0]
        self._stores[session_id] = (store, now)

        while len(self._stores) > self._max_sessions:
            oldest = next(iter(self._stores))
            logger.info(f"Session limit reached; dropping least recently used session={oldest}")
            self.drop(oldest)
        return store

    def evict_idle(self, now: Optional[float] = None) -> int:
        """Drop every session idle for longer than the TTL. Returns how many went."""
        now = self._clock() if now is None else now
        expired = [
            sid for sid, (_, last_seen) in self._stores.items()
            if now - last_seen > self._idle_ttl_seconds
        ]
        for sid in expired:
            self.drop(sid)
        if expired:
            logger.info(f"Dropped {len(expired)} idle session(s)")
        return len(expired)

    def drop(self, session_id: str) -> None:
        self._stores.pop(session_id, None)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._stores

    def __len__(self) -> int:
        return len(self._stores)
