"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn
from .auth.router import router as auth_router
from .database import Base, engine
from .config import settings, check_signing_secret
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Refuse to start a deployed environment without a signing secret
check_signing_secret()

# Create database tables if they don't exist (models are registered via the auth router imports)
Base.metadata.create_all(bind=engine)

logger.info(f"Starting Clinic Auth API ({settings.environment})...")

# Create FastAPI application
app = FastAPI(
    title="Clinic Auth API",
    description="Registration, login and session API for doctors, nurses and patients",
    version=API_VERSION
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Simple welcome message
    """
    return {"message": "API is running...", "version": API_VERSION}

# Health check endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy", "database": engine.dialect.name}

def run():
    """Serve the API with uvicorn on the configured port."""
    uvicorn.run("clinic_auth.main:app", host="0.0.0.0", port=settings.port)

if __name__ == "__main__":
    run()
