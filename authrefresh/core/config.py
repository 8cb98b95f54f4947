"""
Configuration models and helpers.

Centralizes settings so the credential store, the refresh coordinator and the
HTTP auth hook share a consistent configuration surface.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Optional

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_STORAGE_KEY = "auth-tokens"


class RefreshSettings(BaseSettings):
    """Token refresh behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="AUTHREFRESH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage_key: str = DEFAULT_STORAGE_KEY
    expire_margin_seconds: int = Field(
        10,
        ge=0,
        description="Renew this many seconds before the access token expires.",
    )
    header_name: str = "Authorization"
    header_prefix: str = "Bearer "
    rejection_status_codes: Annotated[tuple[int, ...], NoDecode] = Field(
        (401, 422),
        description="Exchange failures with these statuses clear stored tokens.",
    )
    refresh_url: Optional[AnyHttpUrl] = Field(
        None,
        description="Endpoint used by the bundled refresh client.",
    )
    request_timeout_seconds: float = 10.0
    retry_attempts: int = Field(3, ge=1)
    retry_backoff_seconds: float = 0.5

    @field_validator("rejection_status_codes", mode="before")
    @classmethod
    def _split_status_codes(
        cls, value: str | tuple[int, ...] | list[int]
    ) -> tuple[int, ...]:
        """Support providing status codes as a comma-separated string."""
        if isinstance(value, (tuple, list)):
            return tuple(int(code) for code in value)
        return tuple(int(code.strip()) for code in value.split(",") if code.strip())


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description="Secret used to derive the key for encrypting stored tokens.",
    )
    previous_encryption_secrets: Annotated[tuple[str, ...], NoDecode] = Field(
        (),
        validation_alias="TOKEN_ENCRYPTION_PREVIOUS_SECRETS",
        description="Retired secrets still accepted when reading stored tokens.",
    )

    @field_validator("previous_encryption_secrets", mode="before")
    @classmethod
    def _split_secrets(cls, value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
        """Support providing retired secrets as a comma-separated string."""
        if isinstance(value, (tuple, list)):
            return tuple(value)
        return tuple(secret.strip() for secret in value.split(",") if secret.strip())


class AppSettings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    db_path: Optional[str] = Field(
        None,
        validation_alias="AUTHREFRESH_DB_PATH",
        description="SQLite file for stored tokens; kept in memory when unset.",
    )
    refresh: RefreshSettings = Field(default_factory=RefreshSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_STORAGE_KEY",
    "RefreshSettings",
    "SecuritySettings",
    "get_settings",
]
