"""
Credential store - persistence of identities and their role profiles.

Functions take the request's database session first. With ``commit=False``
writes are only flushed, leaving the caller to commit or roll back the
surrounding transaction.
"""
import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, defer

from ..core.security import hash_password
from ..exceptions import format_validation_errors
from .exceptions import EmailAlreadyExistsException, ValidationException
from .models import User, UserRole
from .roles import ROLE_PROFILES
from .schemas import IdentityCreate

# Set up logging
logger = logging.getLogger(__name__)

def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()

def find_by_email(db: Session, email: Optional[str]) -> Optional[User]:
    """
    Look up a user by email, ignoring case and surrounding whitespace.

    Args:
        db: Database session
        email: Email address as submitted

    Returns:
        User or None
    """
    if not isinstance(email, str) or not email.strip():
        return None
    return db.query(User).filter(User.email == normalize_email(email)).first()

def find_by_id(db: Session, user_id: int) -> Optional[User]:
    """
    Look up a user by ID without loading the password hash.

    Args:
        db: Database session
        user_id: ID of the user

    Returns:
        User or None
    """
    return db.query(User).options(defer(User.password_hash)).filter(User.id == user_id).first()

def _save(db: Session, instance: Any, commit: bool) -> None:
    db.add(instance)
    if commit:
        db.commit()
        db.refresh(instance)
    else:
        db.flush()

def create_identity(
    db: Session,
    name: Any,
    email: Any,
    age: Any,
    password: Any,
    role: Any,
    commit: bool = True
) -> User:
    """
    Validate and store a new identity with a hashed password.

    Args:
        db: Database session
        name: User's name
        email: User's email address
        age: User's age
        password: Plain text password
        role: Role tag
        commit: Commit immediately (True) or only flush into the open transaction

    Returns:
        User: The stored identity

    Raises:
        ValidationException: Listing every violated field constraint
        EmailAlreadyExistsException: If the email is already registered
    """
    try:
        data = IdentityCreate(name=name, email=email, age=age, password=password, role=role)
    except PydanticValidationError as e:
        errors = format_validation_errors(e.errors())
        logger.warning(f"Identity validation failed: {errors}")
        raise ValidationException(errors)

    user = User(
        name=data.name,
        email=normalize_email(data.email),
        age=data.age,
        password_hash=hash_password(data.password),
        role=data.role,
    )

    try:
        _save(db, user, commit)
    except IntegrityError:
        # The unique index on email is the authoritative duplicate check
        db.rollback()
        logger.warning(f"Identity insert rejected by unique constraint for {data.email}")
        raise EmailAlreadyExistsException()

    logger.info(f"Identity stored: {user.id} ({user.role.value})")
    return user

def create_role_extension(
    db: Session,
    role: Union[UserRole, str],
    user_id: int,
    fields: Optional[Dict[str, Any]],
    commit: bool = True
):
    """
    Validate and store the role-specific profile for a user.

    Args:
        db: Database session
        role: Role tag selecting the profile variant
        user_id: ID of the owning user
        fields: Submitted profile fields
        commit: Commit immediately (True) or only flush into the open transaction

    Returns:
        The stored Doctor, Nurse or Patient record

    Raises:
        ValidationException: Naming every missing or invalid profile field
    """
    try:
        profile = ROLE_PROFILES[UserRole(role)]
    except (ValueError, KeyError):
        raise ValidationException([f"role: Unsupported role '{role}'"])

    try:
        data = profile.schema.model_validate(fields or {})
    except PydanticValidationError as e:
        errors = format_validation_errors(e.errors())
        logger.warning(f"{UserRole(role).value} profile validation failed for user {user_id}: {errors}")
        raise ValidationException(errors)

    extension = data.to_model(user_id)
    _save(db, extension, commit)
    logger.info(f"{UserRole(role).value} profile stored for user {user_id}")
    return extension

def find_role_extension(db: Session, role: Union[UserRole, str], user_id: int):
    """
    Fetch the profile record of the given role variant for a user.

    Args:
        db: Database session
        role: Role tag selecting the profile table
        user_id: ID of the owning user

    Returns:
        Doctor, Nurse, Patient or None
    """
    model = ROLE_PROFILES[UserRole(role)].model
    return db.query(model).filter(model.user_id == user_id).first()

def delete_identity(db: Session, user_id: int) -> None:
    """
    Delete a user and any profile rows. Deleting a missing user is a no-op.

    Args:
        db: Database session
        user_id: ID of the user to delete
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return
    db.delete(user)
    db.commit()
    logger.info(f"Identity deleted: {user_id}")
