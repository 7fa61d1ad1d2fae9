"""Environment configuration.

Values are loaded from environment variables (or a local ``.env`` file)
through pydantic-settings.  Field names are upper-case so they match the
variable names one-to-one.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Window sizes offered by the dashboard control surface (days).
WINDOW_CHOICES = (7, 30, 90)
DEFAULT_WINDOW_DAYS = 30

# Most-recent documents read per category on each fetch cycle.
DEFAULT_FETCH_LIMIT = 90


class Settings(BaseSettings):
    """wellboard settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==========================================================================
    # Log store
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "wellboard"
    APP_ID: str = "default-app-id"
    STORE_TIMEOUT_MS: int = 5000
    FETCH_LIMIT: int = Field(default=DEFAULT_FETCH_LIMIT, gt=0)

    # ==========================================================================
    # Dashboard
    # ==========================================================================
    DEFAULT_WINDOW_DAYS: int = Field(default=DEFAULT_WINDOW_DAYS, gt=0)

    # ==========================================================================
    # Comment service
    # ==========================================================================
    COMMENT_SERVICE_URL: str = "http://localhost:8000"
    COMMENT_TIMEOUT_SECONDS: float = 30.0

    # ==========================================================================
    # Logging
    # ==========================================================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
