"""
Role profile registry.

Each role tag maps to the schema that validates its signup fields and the
model that stores them. Adding a role means adding an entry here and to
``UserRole``.
"""
from dataclasses import dataclass
from typing import Dict, Type

from pydantic import BaseModel

from ..database import Base
from ..doctors.models import Doctor
from ..doctors.schemas import DoctorProfileCreate
from ..nurses.models import Nurse
from ..nurses.schemas import NurseProfileCreate
from ..patients.models import Patient
from ..patients.schemas import PatientProfileCreate
from .models import UserRole

@dataclass(frozen=True)
class RoleProfile:
    """Validator and storage model for one role's profile record."""
    schema: Type[BaseModel]
    model: Type[Base]


ROLE_PROFILES: Dict[UserRole, RoleProfile] = {
    UserRole.DOCTOR: RoleProfile(schema=DoctorProfileCreate, model=Doctor),
    UserRole.NURSE: RoleProfile(schema=NurseProfileCreate, model=Nurse),
    UserRole.PATIENT: RoleProfile(schema=PatientProfileCreate, model=Patient),
}
