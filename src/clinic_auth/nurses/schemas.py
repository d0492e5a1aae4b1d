"""
Nurse Schemas - Pydantic models for nurse profile validation.
"""
from pydantic import BaseModel, Field

from .models import Nurse

class NurseProfileCreate(BaseModel):
    """
    Nurse Profile Creation Schema - Validated when a nurse signs up

    Fields:
    - department: Department the nurse works in
    - shift: Working shift
    """
    department: str = Field(..., min_length=1, description="Department")
    shift: str = Field(..., min_length=1, description="Working shift")

    class Config:
        str_strip_whitespace = True

    def to_model(self, user_id: int) -> Nurse:
        """Build the ORM record linked to ``user_id``."""
        return Nurse(user_id=user_id, department=self.department, shift=self.shift)
