"""
Patient Schemas - Pydantic models for patient profile validation.
"""
from pydantic import BaseModel, Field

from .models import Patient

class PatientProfileCreate(BaseModel):
    """
    Patient Profile Creation Schema - Validated when a patient signs up

    Fields:
    - medical_history: Medical history notes (optional)
    - allergies: Known allergies (optional)
    - blood_group: Patient's blood group
    """
    medical_history: str = Field("", alias="medicalHistory", description="Medical history notes")
    allergies: str = Field("", description="Known allergies")
    blood_group: str = Field(..., min_length=1, alias="bloodGroup", description="Blood group")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True

    def to_model(self, user_id: int) -> Patient:
        """Build the ORM record linked to ``user_id``."""
        return Patient(
            user_id=user_id,
            medical_history=self.medical_history,
            allergies=self.allergies,
            blood_group=self.blood_group,
        )
