"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation.

    Uses Pydantic for configuration validation, preventing
    common security issues like wildcard CORS.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./liteblog.db",
        description="Database connection URL"
    )
    # Connection pool tuning (ignored for SQLite).
    db_pool_size: int = Field(
        default=5,
        description="Number of persistent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Extra connections allowed during traffic bursts"
    )
    db_pool_timeout: int = Field(
        default=30,
        description="Seconds to wait for a connection from the pool before raising"
    )
    db_pool_recycle: int = Field(
        default=1800,
        description="Seconds before a connection is recycled (prevents stale connections)"
    )

    # Authentication
    # Tokens are accepted from the Authorization header or, for browser
    # clients, from the cookie named by AUTH_COOKIE_NAME.
    jwt_secret_key: str = Field(
        default="dev-insecure-key-change-me",
        description="JWT signing secret (override in production)"
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_hours: int = Field(
        default=24,
        description="Hours until an issued login token expires"
    )
    auth_cookie_name: str = Field(
        default="token",
        description="Cookie carrying the login token for browser clients"
    )

    # Bootstrap admin, created on startup when both are set
    admin_email: str = Field(default="", description="Email of the initial admin account")
    admin_password: str = Field(default="", description="Password of the initial admin account")

    # Email verification
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Public site URL used to build verification links"
    )
    email_provider: str = Field(
        default="log",
        description="Email delivery provider ('log' writes messages to the application log)"
    )
    email_from: str = Field(
        default="noreply@liteblog.local",
        description="Sender address for outgoing email"
    )
    verification_token_minutes: int = Field(
        default=30,
        description="Minutes a verification token stays valid"
    )
    verification_resend_seconds: int = Field(
        default=60,
        description="Minimum seconds between verification emails for one user"
    )

    # Rate Limiting
    # RATE_LIMIT_PER_MINUTE: max requests per client per minute. 0 disables the limiter.
    rate_limit_per_minute: int = Field(
        default=120,
        description="Maximum requests per client per minute"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS origins as a list.

        Parses comma-separated string and validates no wildcards.
        """
        origins = [origin.strip() for origin in self.cors_allowed_origins.split(',') if origin.strip()]

        # SECURITY: Prevent wildcard CORS
        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in CORS_ALLOWED_ORIGINS"
            )

        return origins

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('email_provider')
    @classmethod
    def validate_email_provider(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower != "log":
            raise ValueError("Unsupported email provider. Must be: log")
        return v_lower

    def validate_production_config(self) -> None:
        """Validate configuration for production environment.

        In production, fails startup if security-critical settings use insecure defaults.
        In development, logs warnings but allows startup.

        Raises:
            ConfigurationError: If production config is insecure.
        """
        errors: list[str] = []

        # Check JWT secret
        if self.jwt_secret_key == "dev-insecure-key-change-me":
            errors.append(
                "JWT_SECRET_KEY is using the default insecure value. "
                "Generate a secure key: openssl rand -hex 32"
            )

        # Check for localhost CORS origins
        origins = self.get_cors_origins()
        localhost_origins = [o for o in origins if "localhost" in o or "127.0.0.1" in o]
        if localhost_origins:
            errors.append(
                f"CORS allows localhost origins: {localhost_origins}. "
                "Remove localhost origins for production."
            )

        if errors:
            if self.environment == Environment.PRODUCTION:
                raise ConfigurationError(
                    "Production configuration is insecure:\n  - " + "\n  - ".join(errors)
                )
            # In development, just return (main.py will log warnings)
            return

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        # Allow reading from environment variables with different case
        case_sensitive = False


# Global settings instance
settings = Settings()
