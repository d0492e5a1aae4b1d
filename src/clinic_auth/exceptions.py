"""
Global exception handlers and custom exception classes.
"""
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.

    Attributes:
        status_code: HTTP status returned to the client
        detail: Client-safe message
        errors: Optional list of individual problems (field violations, missing fields)
    """
    def __init__(self, status_code: int, detail: str, errors: Optional[List[str]] = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.errors = errors


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """
    Flatten pydantic error dicts into readable "field: message" strings.

    Args:
        errors: Output of ``ValidationError.errors()`` or ``RequestValidationError.errors()``

    Returns:
        List[str]: One entry per violated constraint
    """
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def error_body(detail: str, errors: Optional[List[str]] = None) -> Dict[str, Any]:
    """Build the standard failure envelope."""
    body: Dict[str, Any] = {"success": False, "message": detail}
    if errors:
        body["errors"] = errors
    return body


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.url.path}: {exc.detail}")
    else:
        logger.info(f"Request rejected on {request.url.path}: {exc.status_code} {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.errors)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    errors = format_validation_errors(exc.errors())
    logger.warning(f"Validation error: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error", errors)
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
