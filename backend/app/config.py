"""Application configuration using Pydantic Settings.

All settings are loaded from environment variables or .env file.
Credentials are handled via SecretStr to prevent accidental logging.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="GITFOLIO_",
        populate_by_name=True,
    )

    # Application
    app_name: str = "GitFolio"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://127.0.0.1:3000"])

    # GitHub API
    github_api_base: str = "https://api.github.com"
    github_timeout_seconds: float = 30.0
    github_token: SecretStr | None = None

    # Gemini
    gemini_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "GITFOLIO_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"
        ),
    )
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout_seconds: float = 60.0

    # Prometheus
    metrics_enabled: bool = True

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT


def first_credential(*candidates: str | SecretStr | None) -> str | None:
    """Return the first non-blank credential, in the order given.

    Callers pass request-supplied values before configured ones, so an
    explicit credential always wins over the environment.
    """
    for candidate in candidates:
        if isinstance(candidate, SecretStr):
            candidate = candidate.get_secret_value()
        if candidate and candidate.strip():
            return candidate.strip()
    return None


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
