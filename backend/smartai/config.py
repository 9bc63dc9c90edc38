"""
SmartAI Backend - Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from environment variables (or a .env file) and are
       validated once at import time; the module exposes a `settings`
       singleton.
Who:   Imported by every module that needs configuration values.

Variable names follow the deployment environments the backend already runs
in (PORT, MONGODB_URI / MONGO_URI, CLIENT_URL, FRONTEND_URL, VERCEL_URL,
ALLOW_VERCEL_PREVIEWS), so existing .env files keep working.
"""

from typing import Any, Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must set
    MONGODB_URI and JWT_SECRET at minimum.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    # Largest accepted request body, in bytes
    max_body_size: int = Field(default=5 * 1024 * 1024, ge=1024)

    # ── Database ──────────────────────────────────────────────────────────
    # MONGODB_URI wins over the legacy MONGO_URI name when both are set
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/quizapp",
        validation_alias=AliasChoices("MONGODB_URI", "MONGO_URI"),
    )

    # Used only when the URI does not name a database
    mongodb_db_name: str = Field(default="quizapp")

    mongodb_server_selection_timeout_ms: int = Field(default=10_000, ge=100)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Each may be a full origin or a bare host (normalized to https://host)
    client_url: Optional[str] = Field(default=None)
    frontend_url: Optional[str] = Field(default=None)
    vercel_url: Optional[str] = Field(default=None)

    # Allows every https://*.vercel.app origin. Only the literal "true"
    # (any case) enables it.
    allow_vercel_previews: bool = Field(default=False)

    # ── Auth tokens ───────────────────────────────────────────────────────
    jwt_secret: SecretStr = Field(default=SecretStr(DEFAULT_JWT_SECRET))
    jwt_algorithm: str = Field(default="HS256")
    auth_cookie_name: str = Field(default="token")

    # ── SMTP (connection check only) ──────────────────────────────────────
    smtp_host: Optional[str] = Field(default=None)
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_user: Optional[str] = Field(default=None)
    smtp_password: SecretStr = Field(default=SecretStr(""))
    smtp_secure: bool = Field(default=False)
    smtp_timeout: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("allow_vercel_previews", mode="before")
    @classmethod
    def parse_preview_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        return str(v or "").strip().lower() == "true"

    @field_validator("client_url", "frontend_url", "vercel_url", "smtp_host", "smtp_user", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def validate_required_for_production(self) -> None:
        """
        Validates that critical settings are configured.

        Called during app startup. Raises ValueError with one line per
        problem; the caller logs it and keeps serving.
        """
        errors = []
        if self.jwt_secret.get_secret_value() == DEFAULT_JWT_SECRET:
            errors.append("JWT_SECRET is not set; tokens are verified with the development default.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
