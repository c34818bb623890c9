"""Application settings."""

from __future__ import annotations

import json
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration entrypoint for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True

    # Server
    base_url: str = "http://127.0.0.1:5000"
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Observability
    log_level: str = "INFO"
    enable_tracing: bool = False
    otlp_endpoint: str | None = None
    otlp_headers: str | None = None

    # Metrics endpoint authentication
    metrics_username: str = "prometheus"
    metrics_password: str | None = None

    # Database
    database_url: str = Field(
        default="sqlite:///./data/folio.db",
        validation_alias=AliasChoices("DATABASE_URL"),
    )
    db_echo: bool = Field(
        default=False,
        validation_alias=AliasChoices("DB_ECHO", "SQL_ECHO"),
    )

    # Security
    secret_key: str = Field(
        default="dev-secret",
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"),
    )
    jwt_lifetime_seconds: int = 60 * 60 * 24
    jwt_issuer: str = "folio-api"
    jwt_audience: str = "folio-admin"
    registration_enabled: bool = True

    # Admin seeding (skipped when no password is configured)
    admin_username: str = "admin"
    admin_email: str = "admin@example.com"
    admin_password: str | None = None

    # Content
    default_author: str = "admin"

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize ALLOWED_ORIGINS env input into a list."""
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in raw.split(",") if item.strip()]
        return []

    @property
    def is_production(self) -> bool:
        """Return True when running in production."""
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Expose allowed CORS origins for middleware wiring."""
        return self.allowed_origins


settings = Settings()
