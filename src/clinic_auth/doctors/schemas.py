"""
Doctor Schemas - Pydantic models for doctor profile validation.

Field aliases follow the JSON the frontend submits at signup
(``consultationFee``, ``availability.workingHours``); snake_case names are
accepted as well.
"""
from decimal import Decimal
from typing import List
import enum

from pydantic import BaseModel, Field, field_validator

from .models import Doctor

class Weekday(str, enum.Enum):
    """Days a doctor can be available."""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

class WorkingHours(BaseModel):
    """Start and end of a doctor's working day, e.g. "09:00" and "17:00"."""
    start: str = Field(..., min_length=1, description="Start time")
    end: str = Field(..., min_length=1, description="End time")

    class Config:
        str_strip_whitespace = True

class Availability(BaseModel):
    """
    Schema for a doctor's weekly availability

    Fields:
    - days: Weekdays the doctor works (at least one, duplicates collapsed)
    - working_hours: Daily working hours
    """
    days: List[Weekday] = Field(..., min_length=1, description="Available weekdays")
    working_hours: WorkingHours = Field(..., alias="workingHours")

    class Config:
        populate_by_name = True

    @field_validator("days", mode="before")
    @classmethod
    def normalize_day_names(cls, value):
        if isinstance(value, (list, tuple, set)):
            return [day.strip().capitalize() if isinstance(day, str) else day for day in value]
        return value

    @field_validator("days")
    @classmethod
    def collapse_duplicate_days(cls, value: List[Weekday]) -> List[Weekday]:
        return list(dict.fromkeys(value))

class DoctorProfileCreate(BaseModel):
    """
    Doctor Profile Creation Schema - Validated when a doctor signs up

    Fields:
    - specialization: Doctor's medical specialization
    - experience: Years of experience
    - availability: Weekly availability
    - consultation_fee: Consultation fee
    """
    specialization: str = Field(..., min_length=1, description="Doctor's medical specialization")
    experience: int = Field(..., ge=0, description="Years of experience")
    availability: Availability
    consultation_fee: Decimal = Field(
        ..., ge=0, max_digits=10, decimal_places=2, alias="consultationFee", description="Consultation fee"
    )

    class Config:
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("experience", mode="before")
    @classmethod
    def reject_boolean_experience(cls, value):
        if isinstance(value, bool):
            raise ValueError("Experience must be a whole number of years")
        return value

    def to_model(self, user_id: int) -> Doctor:
        """Build the ORM record linked to ``user_id``."""
        return Doctor(
            user_id=user_id,
            specialization=self.specialization,
            experience=self.experience,
            available_days=[day.value for day in self.availability.days],
            working_hours_start=self.availability.working_hours.start,
            working_hours_end=self.availability.working_hours.end,
            consultation_fee=self.consultation_fee,
        )
