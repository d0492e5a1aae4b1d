"""
User Model - Stores the base identity shared by every role.

Role-specific details live in the doctor, nurse and patient profile tables,
each linked to exactly one user.
"""
from datetime import datetime, timezone
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.orm import relationship

from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the clinic system.

    Roles:
    - DOCTOR: Medical practitioners who provide consultations
    - NURSE: Nursing staff assigned to a department and shift
    - PATIENT: Patients receiving care
    """
    DOCTOR = "doctor"
    NURSE = "nurse"
    PATIENT = "patient"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    User Model - Stores identity and credential information

    Fields:
    - id: Primary key for user identification
    - name: User's display name
    - email: Unique, lower-cased email address used for login
    - age: User's age in years
    - password_hash: Securely hashed password (never store raw passwords)
    - role: Role tag selecting which profile table holds the user's details
    - created_at: Timestamp when user was created
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    age = Column(Integer, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships (at most one is populated, matching role)
    doctor_profile = relationship("Doctor", back_populates="user", uselist=False, cascade="all, delete-orphan")
    nurse_profile = relationship("Nurse", back_populates="user", uselist=False, cascade="all, delete-orphan")
    patient_profile = relationship("Patient", back_populates="user", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def profile(self):
        """The role-specific profile record for this user, if any."""
        return {
            UserRole.DOCTOR: self.doctor_profile,
            UserRole.NURSE: self.nurse_profile,
            UserRole.PATIENT: self.patient_profile,
        }.get(self.role)
