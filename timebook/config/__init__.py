"""Configuration package."""

from timebook.config.settings import (
    SAVE_FILE_ENV_VAR,
    TimeBookSettings,
    get_settings,
)

__all__ = [
    "SAVE_FILE_ENV_VAR",
    "TimeBookSettings",
    "get_settings",
]
