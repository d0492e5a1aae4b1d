"""
Authentication-specific exceptions.
"""
from typing import List, Optional

from fastapi import status

from ..exceptions import AppException

class AuthException(AppException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, errors: Optional[List[str]] = None):
        super().__init__(status_code=status_code, detail=detail, errors=errors)

class MissingFieldsException(AuthException):
    """Exception raised when required request fields are absent."""
    def __init__(self, missing_fields: List[str], detail: str = "Please provide all required fields"):
        self.missing_fields = list(missing_fields)
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            errors=[f"{field}: Field required" for field in self.missing_fields]
        )

class ValidationException(AuthException):
    """Exception raised when submitted fields violate their constraints."""
    def __init__(self, errors: List[str], detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail or ", ".join(errors),
            errors=list(errors)
        )

class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "User with this email already exists"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidCredentialsException(AuthException):
    """Exception raised when credentials are invalid."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class TokenExpiredException(AuthException):
    """Exception raised when token has expired."""
    def __init__(self, detail: str = "Token has expired"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class InvalidTokenException(AuthException):
    """Exception raised when token is invalid."""
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class UnauthenticatedException(AuthException):
    """Exception raised when a protected request carries no usable session."""
    def __init__(self, detail: str = "Not authorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class PermissionDeniedException(AuthException):
    """Exception raised when user doesn't have required permissions."""
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class ResourceNotFoundException(AuthException):
    """Exception raised when a requested record does not exist."""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class InternalFaultException(AuthException):
    """Exception raised for storage or crypto faults; the detail stays generic."""
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
