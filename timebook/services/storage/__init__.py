"""
Storage Services Package

Provides the abstract ledger storage interface and its implementations.
The JSON file backend is what the command line uses; the in-memory one is
for tests.
"""

from timebook.services.storage.interface import (
    CorruptLedgerError,
    LedgerStorageInterface,
    StorageError,
)
from timebook.services.storage.json_file import JsonFileLedgerStorage
from timebook.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "CorruptLedgerError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
