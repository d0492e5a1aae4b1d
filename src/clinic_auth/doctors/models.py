"""
Doctor Model - Stores doctor-specific information and weekly availability.

This model extends the base User model with doctor-specific fields.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Numeric
from sqlalchemy.orm import relationship
from ..database import Base
from ..auth.models import utc_now

class Doctor(Base):
    """
    Doctor Model - Stores doctor-specific information

    Fields:
    - id: Primary key for doctor profile
    - user_id: Foreign key to User model
    - specialization: Doctor's medical specialization
    - experience: Years of experience
    - available_days: Weekday names the doctor works (JSON list)
    - working_hours_start: Start of the working day, as submitted
    - working_hours_end: End of the working day, as submitted
    - consultation_fee: Consultation fee
    - created_at: When the doctor profile was created
    - updated_at: When the doctor profile was last updated
    """
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    specialization = Column(String, nullable=False)
    experience = Column(Integer, nullable=False)
    available_days = Column(JSON, nullable=False)
    working_hours_start = Column(String, nullable=False)
    working_hours_end = Column(String, nullable=False)
    consultation_fee = Column(Numeric(10, 2), nullable=False)  # 10 digits total, 2 decimal places
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # Relationships
    user = relationship("User", back_populates="doctor_profile", uselist=False)

    def __repr__(self):
        """String representation of the Doctor model"""
        return f"<Doctor(id={self.id}, user_id={self.user_id}, specialization='{self.specialization}')>"

    @property
    def availability(self) -> dict:
        """Availability in the shape clients submit it."""
        return {
            "days": list(self.available_days or []),
            "workingHours": {"start": self.working_hours_start, "end": self.working_hours_end},
        }
