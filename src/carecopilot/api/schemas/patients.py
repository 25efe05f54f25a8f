"""
Patient and visit request schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...domain.entities.patient import MAX_AGE, MAX_NAME_LENGTH


class CreatePatientRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH, description="Patient name")
    age: int = Field(..., ge=0, le=MAX_AGE, description="Age in years")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class SetActivePatientRequest(BaseModel):
    """``patientId: null`` clears the selection."""

    model_config = ConfigDict(populate_by_name=True)

    patient_id: Optional[str] = Field(None, alias="patientId")


class RecordAnalysisRequest(BaseModel):
    transcript: str = Field(..., description="Raw visit transcript")
