# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from beartype import beartype
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Portal settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POLICY_PORTAL_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # Backend API
    api_base_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the agent portal REST backend",
        min_length=1,
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP request timeout in seconds",
    )

    # Renewal tracking
    timezone: str = Field(
        default="UTC",
        description="IANA zone used to derive the calendar date for 'today'",
    )

    # Document extraction
    extraction_confidence_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Confidence below which extracted fields are flagged for review",
    )
    max_upload_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum policy document size in MB",
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        min_length=1,
        max_length=4,
        description="Currency symbol shown next to premiums",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls: type["Settings"], v: str) -> str:
        """Ensure the backend URL is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API base URL: {v}")
        return v.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls: type["Settings"], v: str) -> str:
        """Ensure the zone name resolves."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    @beartype
    def max_upload_size_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_upload_size_mb * 1024 * 1024

    @property
    @beartype
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)  # type: ignore[no-any-return]


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
