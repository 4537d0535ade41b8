"""
Ledger Engine

The TimeBook keeps every category's time usages and the optional recording
session. It is a pure in-memory aggregate: the caller loads it from a
LedgerSnapshot, runs exactly one operation, and serializes it back.

GUARANTEES:
- Every category's usages are sorted by start after every mutation
- A failed operation leaves the ledger untouched
- At most one recording session exists, and its category exists
"""

from datetime import datetime, timedelta
from operator import attrgetter
from typing import Callable, Iterator, Optional

from timebook.ledger.errors import (
    AlreadyRecordingTimeError,
    CategoryBeingRecordedError,
    CategoryDoesNotExistError,
    CategoryExistsError,
    NotRecordingTimeError,
    TimeUsageDoesNotExistError,
)
from timebook.models.ledger import (
    LedgerSnapshot,
    RecordingSession,
    TimeSpan,
    TimeUsage,
)


Clock = Callable[[], datetime]

_by_start = attrgetter("start")


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp for the log, e.g. `1/1/2022 09:00`."""
    return f"{moment.day}/{moment.month}/{moment.year} {moment:%H:%M}"


class TimeBook:
    """
    Keeps track of all time usages, their categories and the current recording.

    Usage ids are positions in a category's sorted usage list. They shift
    whenever a usage is added or removed, so an id is only meaningful for
    the command it was looked up for.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._time_map: dict[str, list[TimeUsage]] = {}
        self._recording: Optional[RecordingSession] = None
        self._clock = clock or datetime.now

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    @classmethod
    def from_snapshot(
        cls,
        snapshot: LedgerSnapshot,
        clock: Optional[Clock] = None,
    ) -> "TimeBook":
        """Build a TimeBook from a deserialized snapshot."""
        book = cls(clock=clock)
        for category, usages in snapshot.categories.items():
            book._time_map[category] = sorted(
                (usage.model_copy() for usage in usages),
                key=_by_start,
            )
        if snapshot.recording is not None:
            book._recording = snapshot.recording.model_copy()
        return book

    def to_snapshot(self) -> LedgerSnapshot:
        """Serialize the whole ledger."""
        return LedgerSnapshot(
            categories={
                category: [usage.model_copy() for usage in usages]
                for category, usages in self._time_map.items()
            },
            recording=self._recording.model_copy() if self._recording else None,
        )

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, category: str) -> None:
        """Add a new, empty category."""
        if category in self._time_map:
            raise CategoryExistsError(category)
        self._time_map[category] = []

    def remove_category(self, category: str) -> None:
        """Remove a category together with all of its time usages."""
        self._usages(category)
        if self._recording is not None and self._recording.category == category:
            raise CategoryBeingRecordedError(category)
        del self._time_map[category]

    def categories(self) -> list[str]:
        """All category names, in no particular order."""
        return list(self._time_map)

    def time_usages(self, category: str) -> list[TimeUsage]:
        """A copy of a category's usages, oldest first."""
        return list(self._usages(category))

    # -------------------------------------------------------------------------
    # Time usages
    # -------------------------------------------------------------------------

    def add_time_usage(
        self,
        category: str,
        start: datetime,
        stop: datetime,
        desc: Optional[str] = None,
    ) -> TimeUsage:
        """Add a finished time usage to a category."""
        usages = self._usages(category)
        usage = TimeUsage(start=start, stop=stop, desc=desc)
        self._time_map[category] = sorted([*usages, usage], key=_by_start)
        return usage

    def remove_time_usage(self, category: str, usage_id: int) -> TimeUsage:
        """Remove the usage at position `usage_id` of a category."""
        usages = self._usages(category)
        if not 0 <= usage_id < len(usages):
            raise TimeUsageDoesNotExistError(usage_id)
        return usages.pop(usage_id)

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    @property
    def is_recording(self) -> bool:
        return self._recording is not None

    def start(
        self,
        category: str,
        start_time: Optional[datetime] = None,
    ) -> RecordingSession:
        """
        Start recording time to a category.

        `start_time` defaults to the current moment.
        """
        if self._recording is not None:
            raise AlreadyRecordingTimeError()
        self._usages(category)

        self._recording = RecordingSession(
            category=category,
            start=start_time or self._clock(),
        )
        return self._recording

    def stop(
        self,
        stop_time: Optional[datetime] = None,
        desc: Optional[str] = None,
    ) -> TimeUsage:
        """
        Stop recording and store the recorded time as a usage.

        `stop_time` defaults to the current moment.
        """
        session = self._current_session()
        usage = self.add_time_usage(
            session.category,
            session.start,
            stop_time or self._clock(),
            desc,
        )
        self._recording = None
        return usage

    def cancel(self) -> RecordingSession:
        """Discard the current recording without storing anything."""
        if self._recording is None:
            raise NotRecordingTimeError()
        session = self._recording
        self._recording = None
        return session

    def status(self) -> tuple[str, datetime]:
        """The category being recorded and when the recording started."""
        session = self._current_session()
        return session.category, session.start

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def time_spent(
        self,
        category: str,
        span: TimeSpan = TimeSpan.ALL,
    ) -> timedelta:
        """Total time spent on a category within a time span."""
        today = self._clock().date()
        total = timedelta(0)
        for usage in self._usages(category):
            if span.includes(usage.start, today):
                total += usage.duration
        return total

    def time_spent_by_category(
        self,
        span: TimeSpan = TimeSpan.ALL,
    ) -> dict[str, timedelta]:
        """Total time spent on every category within a time span."""
        return {
            category: self.time_spent(category, span)
            for category in self._time_map
        }

    def time_usage_log(
        self,
        span: TimeSpan = TimeSpan.ALL,
        category: Optional[str] = None,
    ) -> str:
        """
        A log of time usages within a time span, newest first.

        Without a category the usages of every category are interleaved
        chronologically. Each entry is tagged with its id inside its own
        category.
        """
        if category is not None:
            entries = (
                (category, usage_id, usage)
                for usage_id, usage in enumerate(self._usages(category))
            )
        else:
            entries = self._merged_usages()

        today = self._clock().date()
        log = ""
        for entry_category, usage_id, usage in entries:
            if span.includes(usage.start, today):
                log = self._format_entry(entry_category, usage_id, usage) + log
        return log

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _usages(self, category: str) -> list[TimeUsage]:
        try:
            return self._time_map[category]
        except KeyError:
            raise CategoryDoesNotExistError(category) from None

    def _current_session(self) -> RecordingSession:
        if self._recording is None:
            raise NotRecordingTimeError()
        # The category may have been removed from a hand-edited save file
        self._usages(self._recording.category)
        return self._recording

    def _merged_usages(self) -> Iterator[tuple[str, int, TimeUsage]]:
        """
        Yield (category, id, usage) for all usages, oldest first.

        Every category's list is already sorted, so each step only compares
        the first unconsumed usage of each category.
        """
        positions = {category: 0 for category in self._time_map}
        remaining = sum(len(usages) for usages in self._time_map.values())

        for _ in range(remaining):
            oldest: Optional[str] = None
            for category, position in positions.items():
                usages = self._time_map[category]
                if position >= len(usages):
                    continue
                if oldest is None or (
                    usages[position].start
                    < self._time_map[oldest][positions[oldest]].start
                ):
                    oldest = category

            usage_id = positions[oldest]
            positions[oldest] = usage_id + 1
            yield oldest, usage_id, self._time_map[oldest][usage_id]

    @staticmethod
    def _format_entry(category: str, usage_id: int, usage: TimeUsage) -> str:
        entry = (
            f"{format_timestamp(usage.start)} - {format_timestamp(usage.stop)}: "
            f"{category} (ID: {usage_id})"
        )
        if usage.desc is not None:
            entry = f"{entry}\n\t{usage.desc}"
        return f"{entry}\n\n"
