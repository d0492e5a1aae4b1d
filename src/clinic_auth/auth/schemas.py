"""
User Schemas - Pydantic models for identity validation and serialization.

Signup bodies carry the identity fields plus the role-specific profile fields
at the top level; the latter are collected from the extra keys.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .models import UserRole

MIN_PASSWORD_LENGTH = 6

class IdentityCreate(BaseModel):
    """
    Identity Creation Schema - Validated before a user row is written

    Fields:
    - name: User's name (non-empty)
    - email: User's email address (stored lower-cased)
    - age: Age in years (positive integer)
    - password: Plain text password (hashed before storage)
    - role: One of doctor, nurse, patient
    """
    name: str = Field(..., min_length=1)
    email: EmailStr
    age: int = Field(..., gt=0)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    role: UserRole

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("age", mode="before")
    @classmethod
    def reject_boolean_age(cls, value):
        if isinstance(value, bool):
            raise ValueError("Age must be a whole number")
        return value

class SignupRequest(BaseModel):
    """
    Signup Request Schema - Body of POST /signup

    Required-field checks happen in the service so that a missing field is
    reported as such rather than as a generic validation error. Any key not
    listed here is treated as a role profile field.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[Any] = None
    password: Optional[str] = None
    role: Optional[str] = None

    class Config:
        extra = "allow"

    @property
    def role_fields(self) -> Dict[str, Any]:
        """Role-specific profile fields submitted alongside the identity."""
        return dict(self.model_extra or {})

class LoginRequest(BaseModel):
    """
    Login Request Schema - Body of POST /login

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: Optional[str] = None
    password: Optional[str] = None

class SessionUserResponse(BaseModel):
    """
    Session User Schema - Identity returned by login and /me

    Fields:
    - id: User ID
    - name: User's name
    - email: Email address
    - role: User role
    """
    id: int
    name: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True

class UserResponse(SessionUserResponse):
    """
    User Response Schema - Identity returned after signup

    Extends SessionUserResponse with:
    - age: Age in years
    - created_at: When the account was created (serialized as ``createdAt``)
    """
    age: int
    created_at: datetime = Field(..., serialization_alias="createdAt")
