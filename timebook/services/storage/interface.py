"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger persistence.
This allows us to:
1. Keep the ledger engine free of any file handling
2. Use in-memory storage for testing
3. Swap the JSON file for another format later

The interface is intentionally small: the whole ledger is read and written
back as a single unit, once per command.
"""

from abc import ABC, abstractmethod

from timebook.models.ledger import LedgerSnapshot


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the ledger lives."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """
        Check whether a ledger has been saved before.

        Returns:
            True if `load` would read stored data
        """
        pass

    @abstractmethod
    def load(self) -> LedgerSnapshot:
        """
        Load the stored ledger.

        Returns:
            The stored snapshot, or an empty one if nothing is stored yet

        Raises:
            CorruptLedgerError: If stored data cannot be parsed
            StorageError: If the data cannot be read
        """
        pass

    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> bool:
        """
        Replace the stored ledger with `snapshot`.

        Args:
            snapshot: The complete ledger to store

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptLedgerError(StorageError):
    """Stored ledger data could not be parsed."""
    pass
