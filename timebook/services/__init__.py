"""Services package."""

from timebook.services.storage import (
    CorruptLedgerError,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptLedgerError",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "StorageError",
]
