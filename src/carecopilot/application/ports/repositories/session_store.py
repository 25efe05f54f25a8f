"""
Session store interface: patients, active selection and visit history.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ....domain.entities import AnalysisResult, Patient


class SessionStore(ABC):
    """Abstract per-session patient store."""

    @abstractmethod
    async def list_patients(self) -> List[Patient]:
        pass

    @abstractmethod
    async def get_patient(self, patient_id: str) -> Patient:
        """Raises PatientNotFoundError when unknown."""
        pass

    @abstractmethod
    async def add_patient(self, name: str, age: int) -> Patient:
        """Create a patient and make it the active one."""
        pass

    @abstractmethod
    async def set_active(self, patient_id: Optional[str]) -> None:
        """Select a patient, or clear the selection with None."""
        pass

    @abstractmethod
    async def get_active(self) -> Optional[Patient]:
        pass

    @abstractmethod
    async def append_analysis(self, patient_id: str, analysis: AnalysisResult) -> Patient:
        """Prepend a completed analysis to one patient's history atomically."""
        pass

    @abstractmethod
    async def snapshot(self) -> Dict[str, Any]:
        """Serializable ``{patients, activePatientId}`` view of the session."""
        pass

    @abstractmethod
    async def restore(self, state: Any) -> None:
        """Replace the session contents from a previously taken snapshot."""
        pass
