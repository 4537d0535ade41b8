"""
Core Data Models for TimeBook

These models define the schemas for everything the ledger stores:
1. Finished time usages
2. The in-progress recording session
3. The serialized ledger snapshot
4. The time span filters used by reports

DESIGN DECISION: The snapshot is a plain Pydantic model.
The engine never touches JSON; the storage layer never touches the engine.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    Field,
    field_validator,
)


def to_naive_local(moment: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive ones pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TimeSpan(str, Enum):
    """
    Named filter windows applied to a time usage's start date.

    Comparisons use calendar dates, not elapsed durations.
    """
    ALL = "all"
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    YESTERDAY = "yesterday"
    TODAY = "today"

    def includes(self, start: datetime, today: date) -> bool:
        """Check whether a usage starting at `start` falls in this span."""
        start_date = start.date()

        if self is TimeSpan.ALL:
            return True
        if self is TimeSpan.YEAR:
            return today - start_date <= timedelta(days=365)
        if self is TimeSpan.MONTH:
            return today - start_date <= timedelta(weeks=4)
        if self is TimeSpan.WEEK:
            return today - start_date <= timedelta(weeks=1)
        if self is TimeSpan.YESTERDAY:
            return start_date == today - timedelta(days=1)
        return start_date == today


# =============================================================================
# CORE LEDGER MODELS
# =============================================================================

class TimeUsage(BaseModel):
    """
    A finished span of time spent on a category.

    `stop` is expected to be after `start` but this is not enforced;
    the user may correct a typo later by removing the usage.
    """

    start: datetime = Field(
        ...,
        description="When the time usage started (local time)"
    )
    stop: datetime = Field(
        ...,
        description="When the time usage ended (local time)"
    )
    desc: Optional[str] = Field(
        default=None,
        description="Optional description of what was done"
    )

    @field_validator("start", "stop")
    @classmethod
    def naive_local_times(cls, v: datetime) -> datetime:
        return to_naive_local(v)

    @property
    def duration(self) -> timedelta:
        """Time between start and stop."""
        return self.stop - self.start


class RecordingSession(BaseModel):
    """
    The in-progress recording.

    Both fields are required, so a session is either wholly present
    on the ledger or absent.
    """

    category: str = Field(
        ...,
        description="Category the time is being recorded to"
    )
    start: datetime = Field(
        ...,
        description="When the recording started (local time)"
    )

    @field_validator("start")
    @classmethod
    def naive_local_start(cls, v: datetime) -> datetime:
        return to_naive_local(v)


class LedgerSnapshot(BaseModel):
    """
    Serializable state of a whole ledger.

    This is what the storage layer reads and writes. Field names are
    part of the save file format and must stay stable.
    """

    categories: dict[str, list[TimeUsage]] = Field(
        default_factory=dict,
        description="Time usages per category, sorted by start"
    )
    recording: Optional[RecordingSession] = Field(
        default=None,
        description="Active recording session, if any"
    )

    @property
    def usage_count(self) -> int:
        """Total number of time usages across all categories."""
        return sum(len(usages) for usages in self.categories.values())
