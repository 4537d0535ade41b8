"""
Audit Models for TimeBook

Every command run against the ledger is logged for audit purposes.
This provides:
1. Traceability of every change to the save file
2. Debugging information when a command fails
3. A way to reconstruct what happened to the ledger

DESIGN DECISION: Audit events are only ever emitted, never edited.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from timebook.models.command import CommandResult, LedgerCommand


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_SAVED = "ledger_saved"
    STORAGE_ERROR = "storage_error"

    # Commands
    COMMAND_EXECUTED = "command_executed"
    COMMAND_FAILED = "command_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every step of a command invocation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking the events of one invocation
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by every event of one command invocation"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.ledger_loaded(location, 3, 12, correlation_id)
        event = AuditEventBuilder.command_executed(command, result, correlation_id)
    """

    @staticmethod
    def ledger_loaded(
        location: str,
        category_count: int,
        usage_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Ledger loaded from {location}",
            details={
                "location": location,
                "category_count": category_count,
                "usage_count": usage_count,
            },
        )

    @staticmethod
    def ledger_saved(
        location: str,
        category_count: int,
        usage_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            correlation_id=correlation_id,
            description=f"Ledger saved to {location}",
            details={
                "location": location,
                "category_count": category_count,
                "usage_count": usage_count,
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
        )

    @staticmethod
    def command_executed(
        command: LedgerCommand,
        result: CommandResult,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_EXECUTED,
            correlation_id=correlation_id,
            description=f"Command executed: {command.command_type.value}",
            details={
                "command_id": str(command.command_id),
                "command_type": command.command_type.value,
                "category": command.category,
                "ledger_changed": result.ledger_changed,
            },
        )

    @staticmethod
    def command_failed(
        command: LedgerCommand,
        result: CommandResult,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Command failed: {command.command_type.value}",
            error_code=result.error_code,
            error_message=result.error_message,
            details={
                "command_id": str(command.command_id),
                "command_type": command.command_type.value,
                "category": command.category,
            },
        )
