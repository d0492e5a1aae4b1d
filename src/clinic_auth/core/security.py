"""
Core security utilities for password hashing and session tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union
import logging

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from pydantic import BaseModel

from ..config import settings
from ..auth.models import UserRole
from ..auth.exceptions import TokenExpiredException, InvalidTokenException

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
# bcrypt alone ignores everything past 72 bytes; bcrypt_sha256 digests the
# full password first. Plain bcrypt hashes still verify.
pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    bcrypt_sha256__rounds=settings.bcrypt_rounds,
    bcrypt__rounds=settings.bcrypt_rounds,
)

class TokenPayload(BaseModel):
    """
    Decoded session token claims.

    Fields:
    - user_id: ID of the authenticated user (``id`` claim)
    - role: Role at issuance (``role`` claim)
    - issued_at: ``iat`` claim
    - expires_at: ``exp`` claim
    """
    user_id: int
    role: UserRole
    issued_at: datetime
    expires_at: datetime

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt over its SHA-256 digest.

    Every call generates a fresh salt, so hashing the same password twice
    yields two different strings of the same length.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash; False on mismatch or unreadable hash
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification against malformed hash: {type(e).__name__}")
        return False

def dummy_verify() -> None:
    """Spend the time of one password verification without a real hash."""
    pwd_context.dummy_verify()

def create_access_token(
    user_id: int,
    role: Union[UserRole, str],
    issued_at: Optional[datetime] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed session token.

    Args:
        user_id: ID of the user the token identifies
        role: User's role
        issued_at: Issue time (defaults to now)
        expires_delta: Token lifetime (defaults to the configured 24 hours)

    Returns:
        str: Encoded JWT token
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode = {
        "id": user_id,
        "role": UserRole(role).value,
        "iat": issued_at,
        "exp": expire,
    }

    return jwt.encode(to_encode, settings.get_signing_secret(), algorithm=settings.algorithm)

def decode_access_token(token: str) -> TokenPayload:
    """
    Verify and decode a session token.

    Args:
        token: JWT token string

    Returns:
        TokenPayload: Claims of a valid token

    Raises:
        TokenExpiredException: If the signature is valid but the token has expired
        InvalidTokenException: If the token is malformed, tampered with, or lacks claims
    """
    try:
        payload = jwt.decode(token, settings.get_signing_secret(), algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        raise TokenExpiredException()
    except (JWTError, AttributeError, TypeError) as e:
        logger.debug(f"Token rejected: {e}")
        raise InvalidTokenException()

    user_id = payload.get("id")
    role = payload.get("role")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")
    if not isinstance(user_id, int) or role not in {r.value for r in UserRole} \
            or not isinstance(issued_at, (int, float)) or not isinstance(expires_at, (int, float)):
        raise InvalidTokenException("Invalid token payload")

    return TokenPayload(
        user_id=user_id,
        role=UserRole(role),
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )
