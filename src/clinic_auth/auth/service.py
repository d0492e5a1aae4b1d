"""
Authentication service layer for business logic.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..core.security import create_access_token, verify_password, dummy_verify
from . import store
from .exceptions import (
    AuthException,
    MissingFieldsException,
    EmailAlreadyExistsException,
    InvalidCredentialsException,
    InternalFaultException
)
from .models import User

# Set up logging
logger = logging.getLogger(__name__)

REGISTRATION_FAULT = "Server error during registration"

def _missing_fields(**fields: Any) -> list:
    return [
        name for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]

def register_user(
    db: Session,
    name: Any,
    email: Any,
    age: Any,
    password: Any,
    role: Any,
    role_fields: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Register a user together with the profile record for their role.

    The identity and its profile are written as one unit: either both are
    stored or neither is.

    Args:
        db: Database session
        name: User's name
        email: User's email address
        age: User's age
        password: User's password
        role: One of doctor, nurse, patient
        role_fields: Role-specific profile fields

    Returns:
        Dict with the stored user and a session token

    Raises:
        MissingFieldsException: If a required identity field is absent
        EmailAlreadyExistsException: If email already exists
        ValidationException: If identity or profile fields are invalid
        InternalFaultException: If storage fails
    """
    missing = _missing_fields(name=name, email=email, age=age, password=password, role=role)
    if missing:
        logger.warning(f"Registration rejected: missing fields {missing}")
        raise MissingFieldsException(missing)

    logger.info(f"Registration attempt for email: {email}")

    # Fast path only; the unique index still decides concurrent signups
    if store.find_by_email(db, email):
        logger.warning(f"Registration failed: Email {email} already registered")
        raise EmailAlreadyExistsException()

    if settings.transactional_registration:
        user = _create_in_transaction(db, name, email, age, password, role, role_fields)
    else:
        user = _create_with_compensation(db, name, email, age, password, role, role_fields)

    access_token = create_access_token(user.id, user.role)
    logger.info(f"Registration successful: User {user.id} ({user.role.value})")

    return {"user": user, "access_token": access_token}

def _create_in_transaction(db, name, email, age, password, role, role_fields) -> User:
    user = store.create_identity(db, name, email, age, password, role, commit=False)
    try:
        store.create_role_extension(db, user.role, user.id, role_fields, commit=False)
        db.commit()
    except AuthException:
        db.rollback()
        logger.warning(f"Registration for {email} rolled back: profile rejected")
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Registration for {email} rolled back after storage fault: {str(e)}")
        raise InternalFaultException(REGISTRATION_FAULT) from e
    db.refresh(user)
    return user

def _create_with_compensation(db, name, email, age, password, role, role_fields) -> User:
    user = store.create_identity(db, name, email, age, password, role, commit=True)
    user_id = user.id
    try:
        store.create_role_extension(db, user.role, user_id, role_fields, commit=True)
    except Exception as e:
        db.rollback()
        _compensate(db, user_id, email)
        if isinstance(e, AuthException):
            raise
        logger.error(f"Profile creation for user {user_id} failed: {str(e)}")
        raise InternalFaultException(REGISTRATION_FAULT) from e
    return user

def _compensate(db: Session, user_id: int, email: str) -> None:
    """Delete an identity whose profile could not be stored."""
    try:
        store.delete_identity(db, user_id)
    except Exception as e:
        logger.critical(
            f"Rollback failed: identity {user_id} ({email}) persists without a role profile: {str(e)}"
        )
        raise InternalFaultException(REGISTRATION_FAULT) from e
    logger.warning(f"Identity {user_id} ({email}) rolled back after profile failure")

def login_user(db: Session, email: Any, password: Any) -> Dict[str, Any]:
    """
    Authenticate a user and generate a session token.

    Unknown emails and wrong passwords produce the same exception, after
    roughly the same amount of hashing work.

    Args:
        db: Database session
        email: User's email address
        password: User's password

    Returns:
        Dict with the authenticated user and a session token

    Raises:
        MissingFieldsException: If email or password is absent
        InvalidCredentialsException: If credentials are invalid
    """
    missing = _missing_fields(email=email, password=password)
    if missing:
        raise MissingFieldsException(missing, detail="Please provide email and password")

    user = store.find_by_email(db, email)

    if user is None:
        dummy_verify()
        logger.warning(f"Login failed: Invalid credentials for {email}")
        raise InvalidCredentialsException()

    if not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: Invalid credentials for {email}")
        raise InvalidCredentialsException()

    access_token = create_access_token(user.id, user.role)
    logger.info(f"Login successful: User {user.id} ({user.email})")

    return {"user": user, "access_token": access_token}
