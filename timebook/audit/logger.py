"""
Audit Logger

DESIGN DECISION: Every command run against the ledger is logged.
This provides:
1. Traceability of every change to the save file
2. Debugging capability when a command fails
3. Correlation of the load/execute/save steps of one invocation

Log records are structured JSON on stderr, so they never mix with the
command output printed on stdout.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from timebook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from timebook.models.command import CommandResult, LedgerCommand


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure stdlib logging and structlog for the command line.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class AuditLogger:
    """
    Central audit logging service.

    Writes every audit event to the structured local log.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("timebook.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_loaded(
        self,
        location: str,
        category_count: int,
        usage_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a successful ledger load."""
        self.log(AuditEventBuilder.ledger_loaded(
            location=location,
            category_count=category_count,
            usage_count=usage_count,
            correlation_id=correlation_id,
        ))

    def log_ledger_saved(
        self,
        location: str,
        category_count: int,
        usage_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a successful ledger save."""
        self.log(AuditEventBuilder.ledger_saved(
            location=location,
            category_count=category_count,
            usage_count=usage_count,
            correlation_id=correlation_id,
        ))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a failed load or save."""
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_command(
        self,
        command: LedgerCommand,
        result: CommandResult,
        correlation_id: UUID,
    ) -> None:
        """Log the outcome of a command."""
        if result.success:
            event = AuditEventBuilder.command_executed(command, result, correlation_id)
        else:
            event = AuditEventBuilder.command_failed(command, result, correlation_id)
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a command invocation and pass it through
    the load, execute and save steps.
    """
    return uuid4()
