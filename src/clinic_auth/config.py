"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
import logging
from typing import Optional

from pydantic_settings import BaseSettings

# Set up logging
logger = logging.getLogger(__name__)

# Only ever handed out when ENVIRONMENT is development or test
DEFAULT_DEV_SECRET_KEY = "clinic-auth-insecure-development-secret"

NON_PRODUCTION_ENVIRONMENTS = ("development", "test")


class InsecureConfigurationError(RuntimeError):
    """Raised when a deployed environment is missing required security settings."""


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string for the credential store
        secret_key: Secret key for signing session tokens
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Session token lifetime in minutes (24 hours)
        environment: Deployment environment name (development, test, production, ...)
        frontend_url: Origin of the frontend allowed by CORS
        port: Port the API server listens on
        session_cookie_name: Name of the cookie carrying the session token
        bcrypt_rounds: Work factor for bcrypt password hashing
        transactional_registration: Create identity and role profile in one
            transaction; when False, fall back to compensating deletion
    """
    # Database settings
    database_url: str = "sqlite:///./clinic_auth.db"

    # JWT settings
    secret_key: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Deployment settings
    environment: str = "development"
    frontend_url: str = "http://localhost:3000"
    port: int = 5000

    # Session and credential settings
    session_cookie_name: str = "token"
    bcrypt_rounds: int = 12
    transactional_registration: bool = True

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_development(self) -> bool:
        """Whether the service runs in a non-production context."""
        return self.environment.strip().lower() in NON_PRODUCTION_ENVIRONMENTS

    @property
    def cookie_secure(self) -> bool:
        """Session cookies are marked Secure everywhere except development."""
        return self.environment.strip().lower() != "development"

    @property
    def session_max_age(self) -> int:
        return self.access_token_expire_minutes * 60

    def get_signing_secret(self) -> str:
        """
        Return the secret used to sign session tokens.

        Returns:
            str: Configured secret, or the development default when running
            in a non-production environment without one

        Raises:
            InsecureConfigurationError: If no secret is configured outside development
        """
        if self.secret_key:
            return self.secret_key
        if not self.is_development:
            raise InsecureConfigurationError(
                f"SECRET_KEY must be set when ENVIRONMENT is '{self.environment}'"
            )
        return DEFAULT_DEV_SECRET_KEY


def check_signing_secret(current: Optional[Settings] = None) -> None:
    """
    Start-up check for the token signing secret.

    Fails hard outside development and warns when the development
    fallback secret is in use.

    Args:
        current: Settings to check (defaults to the process-wide settings)

    Raises:
        InsecureConfigurationError: If the secret is missing in a deployed environment
    """
    current = current or settings
    current.get_signing_secret()
    if not current.secret_key:
        logger.warning(
            "SECRET_KEY is not set; using the built-in development secret. "
            "Tokens signed with it are forgeable and must never reach a deployed environment."
        )


# Create settings instance
settings = Settings()
