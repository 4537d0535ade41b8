"""In-memory ledger storage, for tests and dry runs."""

from typing import Optional

from timebook.models.ledger import LedgerSnapshot
from timebook.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Keeps a private copy of the last saved snapshot."""

    def __init__(self, snapshot: Optional[LedgerSnapshot] = None):
        self._snapshot = snapshot.model_copy(deep=True) if snapshot else None
        self.save_count = 0

    @property
    def location(self) -> str:
        return "memory"

    def exists(self) -> bool:
        return self._snapshot is not None

    def load(self) -> LedgerSnapshot:
        if self._snapshot is None:
            return LedgerSnapshot()
        return self._snapshot.model_copy(deep=True)

    def save(self, snapshot: LedgerSnapshot) -> bool:
        self._snapshot = snapshot.model_copy(deep=True)
        self.save_count += 1
        return True
