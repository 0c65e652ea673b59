"""Client configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None

# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
# Tests set TESTING to keep a developer's .env out of the picture.
if _env_file and not os.getenv("TESTING"):
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class TimeUnit(str, Enum):
    """Granularity of the rate limit window. The window is one unit long."""

    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def seconds(self) -> float:
        return _UNIT_SECONDS[self]


_UNIT_SECONDS: dict[TimeUnit, float] = {
    TimeUnit.NANOSECONDS: 1e-9,
    TimeUnit.MICROSECONDS: 1e-6,
    TimeUnit.MILLISECONDS: 1e-3,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}


def _build_client_settings() -> "ClientSettings":
    """Build client settings from environment.

    BaseSettings populates fields from environment variables, but static type
    checkers still see required constructor arguments.
    """

    return ClientSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class ClientSettings(BaseSettings):
    """Document submission client configuration."""

    api_url: str = Field(
        "https://ismp.crpt.ru/api/v3/lk/documents/create",
        description="Endpoint that accepts document creation requests",
    )
    time_unit: TimeUnit = Field(
        TimeUnit.SECONDS,
        description="Length of one rate limit window",
    )
    request_limit: int = Field(
        10,
        description="Maximum number of requests dispatched per window",
        ge=1,
    )
    timeout_seconds: float = Field(
        30.0,
        description="HTTP request timeout in seconds",
    )
    transport: str = Field(
        "httpx",
        description="Transport implementation used to POST documents",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRPT_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="json or plain")
    output: str = Field("stdout", description="stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size; 0 disables rotation",
    )
    backup_count: int = Field(5, description="Rotated files to keep")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Loads from the appropriate .env.{APP_ENV} file. Raises validation errors
    on startup if values are malformed (e.g. CRPT_REQUEST_LIMIT=0).
    """

    app_env: str = APP_ENV
    client: ClientSettings = Field(default_factory=_build_client_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
