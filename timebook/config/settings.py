"""
Configuration Management for TimeBook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The save file location is required: the ledger has nowhere sensible to
live by default, so running without it fails loudly at startup.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SAVE_FILE_ENV_VAR = "TIMEBOOK_SAVE_FILE"


class TimeBookSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from TIMEBOOK_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    save_file: Path = Field(
        ...,
        description="Path to the JSON file holding the ledger"
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level of log records written to stderr"
    )
    json_indent: Optional[int] = Field(
        default=None,
        ge=0,
        le=8,
        description="Indentation of the save file (compact when unset)"
    )

    @field_validator('save_file')
    @classmethod
    def expand_save_file(cls, v: Path) -> Path:
        """Allow `~` in the configured path."""
        return v.expanduser()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> TimeBookSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TimeBookSettings()
