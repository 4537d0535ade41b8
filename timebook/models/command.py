"""
Command Models

A LedgerCommand is one validated user request, e.g. "start recording to
category X" or "show the log for this week". The command line shell builds
one, the executor runs it against the ledger, and a CommandResult comes back.

DESIGN DECISION: The command is data, not a function call.
This keeps the shell thin and lets every command be audited the same way.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from timebook.models.ledger import TimeSpan


class CommandType(str, Enum):
    """Every command the ledger understands."""
    START = "start"
    STOP = "stop"
    STATUS = "status"
    CANCEL = "cancel"
    ADD = "add"
    REMOVE = "remove"
    SUMMARY = "summary"
    LOG = "log"
    ADD_CATEGORY = "add-category"
    REMOVE_CATEGORY = "remove-category"
    LIST_CATEGORIES = "list-categories"


# Fields each command type cannot run without
REQUIRED_FIELDS: dict[CommandType, tuple[str, ...]] = {
    CommandType.START: ("category",),
    CommandType.ADD: ("category", "start_time", "stop_time"),
    CommandType.REMOVE: ("category", "usage_id"),
    CommandType.ADD_CATEGORY: ("category",),
    CommandType.REMOVE_CATEGORY: ("category",),
}

MUTATING_COMMANDS = frozenset({
    CommandType.START,
    CommandType.STOP,
    CommandType.CANCEL,
    CommandType.ADD,
    CommandType.REMOVE,
    CommandType.ADD_CATEGORY,
    CommandType.REMOVE_CATEGORY,
})


class LedgerCommand(BaseModel):
    """
    A single command to run against the ledger.

    Optional timestamps mean "now" and are resolved by the engine's clock.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    command_id: UUID = Field(
        default_factory=uuid4
    )
    command_type: CommandType = Field(
        ...,
        description="Which ledger operation to run"
    )

    category: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Category to operate on (or filter by, for reports)"
    )
    start_time: Optional[datetime] = Field(
        default=None,
        description="Start of a time usage or recording"
    )
    stop_time: Optional[datetime] = Field(
        default=None,
        description="End of a time usage or recording"
    )
    description: Optional[str] = Field(
        default=None,
        description="Free-text description of a time usage"
    )
    usage_id: Optional[int] = Field(
        default=None,
        ge=0,
        description="Position of a time usage within its category"
    )
    span: TimeSpan = Field(
        default=TimeSpan.ALL,
        description="Time span for summary and log reports"
    )

    @model_validator(mode='after')
    def validate_required_fields(self) -> 'LedgerCommand':
        """Check that the command carries what its type needs."""
        missing = [
            name
            for name in REQUIRED_FIELDS.get(self.command_type, ())
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(
                f"Command '{self.command_type.value}' requires: {', '.join(missing)}"
            )
        return self

    @property
    def is_mutating(self) -> bool:
        """Whether running this command can change the ledger."""
        return self.command_type in MUTATING_COMMANDS


class CommandResult(BaseModel):
    """
    Result of running a LedgerCommand.

    Ledger errors end up here as data; the shell decides how to report them.
    """

    command_id: UUID
    executed_at: datetime = Field(
        default_factory=datetime.now
    )

    success: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    output: list[str] = Field(
        default_factory=list,
        description="Lines to show the user"
    )
    ledger_changed: bool = Field(
        default=False,
        description="Did the command modify the ledger?"
    )
