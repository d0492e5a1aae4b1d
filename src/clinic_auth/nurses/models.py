"""
Nurse Model - Stores nurse-specific information.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base
from ..auth.models import utc_now

class Nurse(Base):
    """
    Nurse Model - Stores nurse-specific information

    Fields:
    - id: Primary key for nurse profile
    - user_id: Foreign key to User model
    - department: Department the nurse is assigned to
    - shift: Working shift (e.g. day, night)
    - created_at: When the nurse profile was created
    - updated_at: When the nurse profile was last updated
    """
    __tablename__ = "nurses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    department = Column(String, nullable=False)
    shift = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # Relationships
    user = relationship("User", back_populates="nurse_profile", uselist=False)

    def __repr__(self):
        """String representation of the Nurse model"""
        return f"<Nurse(id={self.id}, user_id={self.user_id}, department='{self.department}')>"
