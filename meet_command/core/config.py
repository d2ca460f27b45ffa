"""
Application configuration models and helpers.

Centralizes settings management so both the FastAPI app and the Lambda
handlers share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import os

from pydantic import AnyHttpUrl, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class GoogleSettings(BaseSettings):
    """OAuth client registration used for the Google Calendar integration."""

    client_id: str = Field(..., validation_alias="GOOGLE_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="GOOGLE_CLIENT_SECRET")
    redirect_uri: AnyHttpUrl = Field(..., validation_alias="GOOGLE_REDIRECT_URI")


class StorageSettings(BaseSettings):
    """Where per-user authorization records are kept."""

    backend: Literal["s3", "sqlite"] = Field("s3", validation_alias="STORAGE_BACKEND")
    region_name: str = Field("us-east-1", validation_alias="AWS_REGION")
    bucket_name: Optional[str] = Field(None, validation_alias="S3_BUCKET_NAME")
    sqlite_path: str = Field(
        "data/auth_state.db",
        validation_alias="SQLITE_STORE_PATH",
        description="Local database file used when STORAGE_BACKEND=sqlite.",
    )

    @model_validator(mode="after")
    def _require_bucket_for_s3(self) -> "StorageSettings":
        if self.backend == "s3" and not self.bucket_name:
            raise ValueError("S3_BUCKET_NAME is required when STORAGE_BACKEND is 's3'.")
        return self


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored records. "
            "Records are stored as plain JSON when omitted."
        ),
    )


class AppSettings(BaseSettings):
    """Root settings object for the slash command service."""

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    command_base_url: AnyHttpUrl = Field(
        ...,
        validation_alias="COMMAND_BASE_URL",
        description="Public base URL serving the /auth leg, e.g. https://host/api.",
    )
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "SecuritySettings",
    "StorageSettings",
    "get_settings",
]
