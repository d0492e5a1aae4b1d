"""
FastAPI dependencies for authentication and authorization.

The session token is read from the session cookie, or from an
``Authorization: Bearer`` header for non-browser clients.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..config import settings
from ..core.security import decode_access_token
from ..database import get_db
from . import store
from .exceptions import (
    TokenExpiredException,
    InvalidTokenException,
    UnauthenticatedException,
    PermissionDeniedException
)
from .models import User, UserRole

# Set up logging
logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

def authenticate(db: Session, token: Optional[str]) -> User:
    """
    Resolve a session token to the user it identifies.

    Args:
        db: Database session
        token: Session token presented by the client

    Returns:
        User: Authenticated user (password hash not loaded)

    Raises:
        UnauthenticatedException: If the token is absent, expired, invalid,
            or names a user that no longer exists
    """
    if not token:
        raise UnauthenticatedException("Not authorized, no token")

    try:
        payload = decode_access_token(token)
    except TokenExpiredException:
        logger.info("Rejected expired session token")
        raise UnauthenticatedException("Not authorized, token failed")
    except InvalidTokenException:
        logger.warning("Rejected invalid session token")
        raise UnauthenticatedException("Not authorized, token failed")

    user = store.find_by_id(db, payload.user_id)
    if user is None:
        logger.warning(f"Session token for missing user {payload.user_id}")
        raise UnauthenticatedException("Not authorized, user not found")

    return user

def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[str]:
    """
    Extract the session token from the cookie or the Authorization header.

    Returns:
        str or None: Token if one was presented
    """
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    return None

def get_current_user(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user and attach it to ``request.state.user``.

    No role check happens here; use ``require_roles`` where one is needed.

    Returns:
        User: Current authenticated user

    Raises:
        UnauthenticatedException: If no valid session is presented
    """
    user = authenticate(db, token)
    request.state.user = user
    return user

def require_roles(*allowed_roles: UserRole):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: Roles that are allowed access

    Returns:
        Function that checks if user has required role
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise PermissionDeniedException(
                f"Access denied. Required roles: {[role.value for role in allowed_roles]}. "
                f"Your role: {current_user.role.value}"
            )
        return current_user
    return role_checker
