"""Ledger engine package."""

from timebook.ledger.engine import TimeBook, format_timestamp
from timebook.ledger.errors import (
    AlreadyRecordingTimeError,
    CategoryBeingRecordedError,
    CategoryDoesNotExistError,
    CategoryExistsError,
    LedgerError,
    NotRecordingTimeError,
    TimeUsageDoesNotExistError,
)

__all__ = [
    "TimeBook",
    "format_timestamp",
    # Errors
    "AlreadyRecordingTimeError",
    "CategoryBeingRecordedError",
    "CategoryDoesNotExistError",
    "CategoryExistsError",
    "LedgerError",
    "NotRecordingTimeError",
    "TimeUsageDoesNotExistError",
]
