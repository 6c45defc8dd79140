"""Environment-based configuration using pydantic-settings.

Example:
    >>> from lookupresult.settings import get_settings
    >>> get_settings().logging.level
    'INFO'

    # Or with environment variables:
    # LOOKUPRESULT_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOOKUPRESULT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class LookupResultSettings(BaseSettings):
    """Root settings, loaded from environment variables with LOOKUPRESULT_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="LOOKUPRESULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> LookupResultSettings:
    """Get the global settings instance (cached)."""
    return LookupResultSettings()


def reset_settings() -> None:
    """Clear cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
