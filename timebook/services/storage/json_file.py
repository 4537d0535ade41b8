"""
JSON File Storage Implementation

DESIGN DECISION: The ledger is a single JSON file because:
1. The user can read and fix it by hand
2. No database setup required
3. The data is tiny (one person's time records)

TRADEOFFS:
- The whole file is rewritten on every command
- No transactions or crash safety (the save is a plain overwrite)
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from timebook.models.ledger import LedgerSnapshot
from timebook.services.storage.interface import (
    CorruptLedgerError,
    LedgerStorageInterface,
    StorageError,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    Stores the ledger as one JSON document.

    A missing file is not an error: it reads as an empty ledger and is
    created on the first save.
    """

    def __init__(self, path: Union[str, Path], indent: Optional[int] = None):
        self._path = Path(path)
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> LedgerSnapshot:
        """Read and parse the save file."""
        if not self.exists():
            return LedgerSnapshot()

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read save file '{self._path}': {e}")
        except UnicodeDecodeError as e:
            raise CorruptLedgerError(
                f"Could not parse json from file '{self._path}': {e}"
            )

        try:
            return LedgerSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptLedgerError(
                f"Could not parse json from file '{self._path}': {e}"
            )

    def save(self, snapshot: LedgerSnapshot) -> bool:
        """Serialize the snapshot and overwrite the save file."""
        data = snapshot.model_dump_json(indent=self._indent)
        try:
            self._write(data)
        except OSError as e:
            raise StorageError(f"Could not write save file '{self._path}': {e}")
        return True

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write(self, data: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(data, encoding="utf-8")
