"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file: the default expiration applied
when callers omit one, the logging level, and the bucket / public URL used by
the drive facade.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict

from .time_utils import RELATIVE_MAX


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    Values come from environment variables or a `.env` file. Blank bucket and
    public URL values are normalized to None so callers can test them for
    truthiness.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Expiration used when a caller passes no expiration at all (seconds).
    DEFAULT_EXPIRATION: int = Field(
        default=3600,
        ge=0,
        le=RELATIVE_MAX,
        description=(
            "Seconds until presigned URLs expire when no expiration is given "
            "(at most 10_000_000; larger values would read as epoch timestamps)"
        ),
    )

    # Storage
    S3_BUCKET: Optional[str] = Field(default=None, description="Default bucket name")
    S3_PUBLIC_URL: Optional[str] = Field(
        default=None,
        description=(
            "Custom public base URL used when building object URLs "
            "(otherwise https://<bucket>.s3.amazonaws.com)"
        ),
    )

    @field_validator("S3_BUCKET", "S3_PUBLIC_URL", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        """Trim whitespace and normalize blank -> None."""
        if v is None:
            return None
        if isinstance(v, str):
            trimmed = v.strip()
            return trimmed or None
        return v

    @field_validator("S3_PUBLIC_URL")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.rstrip("/") or None

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, singleton instance of the application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
