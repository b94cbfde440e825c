"""
Vehicle Registry Backend — Application Configuration
======================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Token verification:
    By default every bearer-token check (signature, issuer, audience,
    lifetime) is OFF. Any bearer string is accepted by the admin route and
    only the role claim of a decodable token is inspected. Set
    AUTH_VERIFY_TOKENS=true together with JWT_SECRET to turn real
    verification on.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for local development. Attributes are
    grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLAlchemy URL for the record store
    # Default: a private in-memory SQLite database (nothing touches disk)
    database_url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        description="Async SQLAlchemy URL for the vehicle record store",
    )

    # ── Bearer Tokens ─────────────────────────────────────────────────────
    # What: Master switch for signature, issuer, audience and lifetime checks
    # Default False: tokens are parsed for claims but never verified
    auth_verify_tokens: bool = Field(default=False)

    # What: Shared secret for HS* signatures (only used when verifying)
    jwt_secret: str = Field(default="")
    jwt_algorithm: str = Field(default="HS256")

    # Checked only when set AND auth_verify_tokens is on
    jwt_issuer: Optional[str] = Field(default=None)
    jwt_audience: Optional[str] = Field(default=None)

    # What: Role claim value required by POST /admin/vehicles
    admin_role: str = Field(default="admin")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only shared-secret algorithms are supported."""
        upper = v.upper()
        if upper not in {"HS256", "HS384", "HS512"}:
            raise ValueError(f"Unsupported jwt_algorithm '{v}'. Use HS256, HS384 or HS512.")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if self.auth_verify_tokens and not self.jwt_secret:
            errors.append(
                "AUTH_VERIFY_TOKENS is enabled but JWT_SECRET is not set. "
                "Every admin request will be rejected until a secret is configured."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    def security_warnings(self) -> List[str]:
        """Human-readable warnings about disabled token checks, logged at startup."""
        if self.auth_verify_tokens:
            return []
        return [
            "Bearer token validation is DISABLED (signature, issuer, audience and "
            "lifetime are not checked). Any bearer token is accepted on "
            "POST /admin/vehicles. Do not expose this configuration publicly."
        ]


settings = Settings()
