"""
Main Orchestrator for TimeBook

This module ties together storage, the ledger engine, the command executor
and the audit log, and defines the one flow every invocation follows:

    load ledger -> execute ONE command -> save ledger

DESIGN DECISION: The orchestrator enforces the boundaries:
- The engine never touches storage
- Nothing is saved when a command fails
- Every step is audited
"""

from typing import Optional
from uuid import UUID

from timebook.audit import AuditLogger, create_correlation_id
from timebook.commands import CommandExecutor
from timebook.config import TimeBookSettings, get_settings
from timebook.ledger import TimeBook
from timebook.ledger.engine import Clock
from timebook.models.command import CommandResult, LedgerCommand
from timebook.services.storage import (
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)


class LedgerCommandFlow:
    """
    Orchestrates a single command invocation.

    Flow:
    1. Load → Read the whole ledger from storage (empty if none yet)
    2. Execute → Run the command against an in-memory TimeBook
    3. Save → Write the whole ledger back, only if the command succeeded

    Storage errors propagate to the caller after being audited.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._clock = clock

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    def run(
        self,
        command: LedgerCommand,
        correlation_id: Optional[UUID] = None,
    ) -> CommandResult:
        """
        Run one command against the stored ledger.

        Returns the command result; the ledger is saved only on success.
        """
        correlation_id = correlation_id or create_correlation_id()

        book = self._load(correlation_id)

        result = CommandExecutor(book).execute(command)

        # Audit: command outcome
        if self._audit_logger:
            self._audit_logger.log_command(command, result, correlation_id)

        if result.success:
            self._save(book, correlation_id)

        return result

    def _load(self, correlation_id: UUID) -> TimeBook:
        try:
            snapshot = self._storage.load()
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(
                    operation="load",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(
                location=self._storage.location,
                category_count=len(snapshot.categories),
                usage_count=snapshot.usage_count,
                correlation_id=correlation_id,
            )

        return TimeBook.from_snapshot(snapshot, clock=self._clock)

    def _save(self, book: TimeBook, correlation_id: UUID) -> None:
        snapshot = book.to_snapshot()
        try:
            self._storage.save(snapshot)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(
                    operation="save",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_ledger_saved(
                location=self._storage.location,
                category_count=len(snapshot.categories),
                usage_count=snapshot.usage_count,
                correlation_id=correlation_id,
            )


def create_app_components(
    settings: Optional[TimeBookSettings] = None,
) -> LedgerCommandFlow:
    """
    Factory function to create the command flow.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.

    Returns:
        A flow backed by the configured JSON save file
    """
    settings = settings or get_settings()

    storage = JsonFileLedgerStorage(
        settings.save_file,
        indent=settings.json_indent,
    )

    return LedgerCommandFlow(
        storage=storage,
        audit_logger=AuditLogger(),
    )
