"""
NoteKeep Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       Missing OAuth or session secrets fail startup instead of silently
       producing a server nobody can sign in to.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from notekeep.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Security-sensitive values (GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET,
    SESSION_SECRET) have empty defaults and are checked by
    validate_required() during startup.
    """

    # ── Google OAuth ──────────────────────────────────────────────────────
    # How to obtain: https://console.cloud.google.com/apis/credentials
    google_client_id: str = Field(default="", description="Google OAuth client ID")
    google_client_secret: str = Field(default="", description="Google OAuth client secret")

    # What: Base URL Google redirects back to after consent
    # Must match an authorized redirect URI registered with the OAuth client
    oauth_redirect_base_url: str = Field(default="http://localhost:8000")

    google_authorize_url: str = Field(default="https://accounts.google.com/o/oauth2/v2/auth")
    google_token_url: str = Field(default="https://oauth2.googleapis.com/token")
    google_userinfo_url: str = Field(default="https://openidconnect.googleapis.com/v1/userinfo")

    # ── Session ───────────────────────────────────────────────────────────
    # What: Key used by SessionMiddleware to sign the session cookie
    session_secret: str = Field(default="", description="Secret used to sign session cookies")

    # Two weeks, same as Starlette's default
    session_max_age: int = Field(default=1_209_600, ge=60)

    # What: Internal numeric id given to every first-time login
    # Also the one filter value for which the notes list reports wow=False
    default_user_id: int = Field(default=101)

    # ── Notes ─────────────────────────────────────────────────────────────
    # What: Artificial delay applied before every notes operation resolves
    # Models a remote datastore; 0 disables it (tests)
    simulated_latency_ms: int = Field(default=500, ge=0, le=10_000)

    # ── Access Code Upstream ──────────────────────────────────────────────
    access_code_upstream_url: str = Field(
        default="https://www.opsglitch.com/api/v1/contest-submission/3"
    )
    upstream_timeout_seconds: float = Field(default=10.0, gt=0, le=60)

    # What: Attempts for transport-level failures (connect errors, timeouts)
    # HTTP error statuses from the upstream are passed through, never retried
    upstream_retry_attempts: int = Field(default=2, ge=1, le=5)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def reserved_user_id_literal(self) -> str:
        """The exact query string value that yields wow=False on the notes list."""
        return str(self.default_user_id)

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def missing_required(self) -> List[str]:
        """Returns a human-readable line for every required secret that is unset."""
        errors = []
        if not self.google_client_id:
            errors.append("GOOGLE_CLIENT_ID is not set.")
        if not self.google_client_secret:
            errors.append("GOOGLE_CLIENT_SECRET is not set.")
        if not self.session_secret:
            errors.append(
                "SESSION_SECRET is not set. Generate one with: "
                "python -c \"import secrets; print(secrets.token_urlsafe(32))\""
            )
        return errors

    def validate_required(self) -> None:
        """
        What:  Validates that OAuth and session secrets are configured.
        When:  Called during app startup (lifespan) and before every OAuth redirect.
        How:   Raises ConfigurationError listing every missing value.
        """
        errors = self.missing_required()
        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors),
                context={"missing": len(errors)},
            )


# Singleton instance, imported throughout the application
settings = Settings()
