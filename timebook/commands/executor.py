"""
Command Execution Engine

DESIGN DECISION: Each command maps to exactly ONE ledger operation.
The shell turns user input into a LedgerCommand.
This engine runs that command on the ledger and renders its output.

Ledger errors are not raised past this point: they come back as a failed
CommandResult carrying the error's code and message. The ledger itself
guarantees that a failed operation changed nothing.
"""

from datetime import timedelta

from timebook.ledger import LedgerError, TimeBook
from timebook.models.command import (
    CommandResult,
    CommandType,
    LedgerCommand,
)


def format_duration(spent: timedelta) -> str:
    """Render a duration as `H h M min(s)`."""
    minutes = int(spent.total_seconds() // 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours} h {minutes} min(s)"


class CommandExecutor:
    """
    Executes ledger commands against a TimeBook.

    GUARANTEES:
    - One command, one ledger operation
    - Ledger errors are reported, never swallowed or retried
    - Output is plain text lines, ready to print
    """

    def __init__(self, book: TimeBook):
        self._book = book

    def execute(self, command: LedgerCommand) -> CommandResult:
        """Execute a command and return its result."""
        try:
            output = self._dispatch(command)
        except LedgerError as e:
            return CommandResult(
                command_id=command.command_id,
                success=False,
                error_code=e.code,
                error_message=str(e),
            )

        return CommandResult(
            command_id=command.command_id,
            success=True,
            output=output,
            ledger_changed=command.is_mutating,
        )

    def _dispatch(self, command: LedgerCommand) -> list[str]:
        """Route to the appropriate handler based on command type."""
        book = self._book
        command_type = command.command_type

        if command_type == CommandType.START:
            book.start(command.category, command.start_time)
        elif command_type == CommandType.STOP:
            book.stop(command.stop_time, command.description)
        elif command_type == CommandType.STATUS:
            return self._execute_status()
        elif command_type == CommandType.CANCEL:
            book.cancel()
        elif command_type == CommandType.ADD:
            book.add_time_usage(
                command.category,
                command.start_time,
                command.stop_time,
                command.description,
            )
        elif command_type == CommandType.REMOVE:
            book.remove_time_usage(command.category, command.usage_id)
        elif command_type == CommandType.SUMMARY:
            return self._execute_summary(command)
        elif command_type == CommandType.LOG:
            return [book.time_usage_log(command.span, command.category)]
        elif command_type == CommandType.ADD_CATEGORY:
            book.add_category(command.category)
        elif command_type == CommandType.REMOVE_CATEGORY:
            book.remove_category(command.category)
        elif command_type == CommandType.LIST_CATEGORIES:
            return sorted(book.categories())
        else:
            raise ValueError(f"Unknown command type: {command_type}")

        return []

    def _execute_status(self) -> list[str]:
        category, started = self._book.status()
        return [f"Since {started:%Y-%m-%d %H:%M:%S}: {category}"]

    def _execute_summary(self, command: LedgerCommand) -> list[str]:
        """Total time per category; a single line when filtered by category."""
        if command.category is not None:
            totals = {
                command.category: self._book.time_spent(
                    command.category, command.span
                )
            }
        else:
            totals = self._book.time_spent_by_category(command.span)

        return [
            f"{category}: {format_duration(totals[category])}"
            for category in sorted(totals)
        ]
