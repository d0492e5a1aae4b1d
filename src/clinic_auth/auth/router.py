"""
Authentication routes for the clinic system.
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..exceptions import AppException
from . import service, store
from .dependencies import get_current_user
from .exceptions import InternalFaultException, ResourceNotFoundException
from .models import User
from .schemas import SignupRequest, LoginRequest, UserResponse, SessionUserResponse

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter()

def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )

def clear_session_cookie(response: Response) -> None:
    """Overwrite the session cookie with an empty, already-expired one."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        expires=datetime(1970, 1, 1, tzinfo=timezone.utc),
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )

@router.post("/signup", status_code=status.HTTP_201_CREATED, summary="Register a User")
def signup(
    signup_data: SignupRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Registration endpoint.

    Creates the user and the profile for their role (doctor, nurse or
    patient) and starts a session.

    Args:
        signup_data: Identity fields plus role-specific profile fields
        response: Response used to set the session cookie
        db: Database session

    Returns:
        Dict with the new user's public fields

    Raises:
        AppException: 400 on missing/invalid fields or duplicate email, 500 otherwise
    """
    try:
        result = service.register_user(
            db=db,
            name=signup_data.name,
            email=signup_data.email,
            age=signup_data.age,
            password=signup_data.password,
            role=signup_data.role,
            role_fields=signup_data.role_fields
        )
    except AppException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during registration: {str(e)}")
        raise InternalFaultException("Server error during registration")

    set_session_cookie(response, result["access_token"])
    return {
        "success": True,
        "message": "User registered successfully",
        "user": UserResponse.model_validate(result["user"]).model_dump(mode="json", by_alias=True)
    }

@router.post("/login", summary="User Login")
def login(
    login_data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    User login endpoint.

    Args:
        login_data: User login credentials
        response: Response used to set the session cookie
        db: Database session

    Returns:
        Dict with the authenticated user's public fields

    Raises:
        AppException: 400 on missing fields, 401 on invalid credentials, 500 otherwise
    """
    try:
        result = service.login_user(db=db, email=login_data.email, password=login_data.password)
    except AppException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during login: {str(e)}")
        raise InternalFaultException("Server error during login")

    set_session_cookie(response, result["access_token"])
    return {
        "success": True,
        "message": "Login successful",
        "user": SessionUserResponse.model_validate(result["user"]).model_dump(mode="json")
    }

@router.get("/logout", summary="User Logout")
def logout(response: Response):
    """
    Logout endpoint. Clears the session cookie; tokens are stateless, so
    there is nothing to revoke server-side.
    """
    clear_session_cookie(response)
    return {"success": True, "message": "Logged out successfully"}

@router.get("/me", summary="Get Current User Profile")
def read_current_user(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the current user's profile.

    Returns:
        Dict with the current user's public fields

    Raises:
        AppException: 401 without a valid session, 404 if the user was removed meanwhile
    """
    user = store.find_by_id(db, current_user.id)
    if user is None:
        raise ResourceNotFoundException("User not found")
    return {
        "success": True,
        "user": SessionUserResponse.model_validate(user).model_dump(mode="json")
    }
