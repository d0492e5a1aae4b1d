"""
Custom middleware for the FastAPI application.
"""
import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import uuid

# Set up logging
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

def session_user_label(request: Request) -> str:
    """Identify the caller for log lines: the authenticated user id, if any."""
    user = getattr(request.state, "user", None)
    return f"user {user.id}" if user is not None else "anonymous"

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID and logs its outcome.

    Only method, path, status and the session user are logged; bodies and
    cookies carry credentials and are never written out. Rejected sessions
    (401/403) are logged at WARNING.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request {request_id} failed: {request.method} {request.url.path} "
                f"({session_user_label(request)}) - {type(e).__name__} - "
                f"Duration: {time.time() - start_time:.4f}s"
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        response.headers[REQUEST_ID_HEADER] = request_id

        level = logging.WARNING if response.status_code in (401, 403) else logging.INFO
        logger.log(
            level,
            f"Request {request_id}: {request.method} {request.url.path} "
            f"({session_user_label(request)}) - Status: {response.status_code} - "
            f"Duration: {process_time:.4f}s"
        )
        return response


def setup_middlewares(app):
    """
    Set up all custom middlewares for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RequestLoggingMiddleware)
