"""
Data Models Package

This package contains all Pydantic models used in TimeBook.
All data flowing between the shell, the ledger and storage conforms to these schemas.
"""

from timebook.models.ledger import (
    LedgerSnapshot,
    RecordingSession,
    TimeSpan,
    TimeUsage,
)
from timebook.models.command import (
    CommandResult,
    CommandType,
    LedgerCommand,
)
from timebook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "LedgerSnapshot",
    "RecordingSession",
    "TimeSpan",
    "TimeUsage",
    # Command models
    "CommandResult",
    "CommandType",
    "LedgerCommand",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
