"""
Ledger Errors

Every error the engine can report. Each one carries the value that caused it
and a stable `code` so callers can tell them apart without parsing messages.
The message is meant to be shown to the user as-is.
"""


class LedgerError(Exception):
    """Base exception for ledger operations."""

    code = "ledger_error"


class CategoryExistsError(LedgerError):
    """Tried to create a category that already exists."""

    code = "category_exists"

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Category {category} already exists.")


class CategoryDoesNotExistError(LedgerError):
    """Referenced a category that doesn't exist."""

    code = "category_does_not_exist"

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Category {category} doesn't exist.")


class TimeUsageDoesNotExistError(LedgerError):
    """Referenced a time usage id that is out of range."""

    code = "time_usage_does_not_exist"

    def __init__(self, usage_id: int):
        self.usage_id = usage_id
        super().__init__(f"Time Usage with the id {usage_id} doesn't exist.")


class NotRecordingTimeError(LedgerError):
    """Stop, cancel or status while no time is being recorded."""

    code = "not_recording_time"

    def __init__(self):
        super().__init__("Time is not being recorded.")


class AlreadyRecordingTimeError(LedgerError):
    """Start while time is already being recorded."""

    code = "already_recording_time"

    def __init__(self):
        super().__init__("Time is already being recorded.")


class CategoryBeingRecordedError(LedgerError):
    """Tried to remove the category that time is being recorded to."""

    code = "category_being_recorded"

    def __init__(self, category: str):
        self.category = category
        super().__init__(
            f"Category {category} is being recorded. "
            "Stop or cancel the recording first."
        )
