"""Tests for the command executor."""

import pytest
from datetime import datetime, timedelta

from timebook.commands import CommandExecutor, format_duration
from timebook.ledger import TimeBook
from timebook.models.command import CommandType, LedgerCommand
from timebook.models.ledger import TimeSpan


NOW = datetime(2022, 1, 1, 18, 0)


@pytest.fixture
def book() -> TimeBook:
    book = TimeBook(clock=lambda: NOW)
    book.add_category("work")
    book.add_category("reading")
    book.add_time_usage("work", datetime(2022, 1, 1, 9), datetime(2022, 1, 1, 11, 15))
    book.add_time_usage("reading", datetime(2021, 12, 31, 20), datetime(2021, 12, 31, 20, 45), "Novel")
    return book


def run(book: TimeBook, command_type: CommandType, **fields):
    command = LedgerCommand(command_type=command_type, **fields)
    return CommandExecutor(book).execute(command)


class TestFormatDuration:

    def test_hours_and_minutes(self):
        assert format_duration(timedelta(hours=2, minutes=15)) == "2 h 15 min(s)"

    def test_zero(self):
        assert format_duration(timedelta(0)) == "0 h 0 min(s)"

    def test_seconds_are_truncated(self):
        assert format_duration(timedelta(minutes=59, seconds=59)) == "0 h 59 min(s)"


class TestCommandExecutor:
    """Tests for routing commands to the ledger."""

    def test_add_category(self, book):
        result = run(book, CommandType.ADD_CATEGORY, category="chores")
        assert result.success is True
        assert result.ledger_changed is True
        assert result.output == []
        assert "chores" in book.categories()

    def test_failed_command_reports_error(self, book):
        result = run(book, CommandType.ADD_CATEGORY, category="work")
        assert result.success is False
        assert result.error_code == "category_exists"
        assert result.error_message == "Category work already exists."
        assert result.ledger_changed is False

    def test_start_status_stop(self, book):
        result = run(book, CommandType.START, category="work", start_time=datetime(2022, 1, 1, 14))
        assert result.success is True

        status = run(book, CommandType.STATUS)
        assert status.output == ["Since 2022-01-01 14:00:00: work"]
        assert status.ledger_changed is False

        stop = run(book, CommandType.STOP, description="Meeting")
        assert stop.success is True
        assert book.time_usages("work")[-1].stop == NOW
        assert book.time_usages("work")[-1].desc == "Meeting"

    def test_status_while_idle(self, book):
        result = run(book, CommandType.STATUS)
        assert result.success is False
        assert result.error_code == "not_recording_time"

    def test_cancel(self, book):
        run(book, CommandType.START, category="work")
        result = run(book, CommandType.CANCEL)
        assert result.success is True
        assert book.is_recording is False

    def test_add_and_remove(self, book):
        result = run(
            book,
            CommandType.ADD,
            category="work",
            start_time=datetime(2022, 1, 1, 7),
            stop_time=datetime(2022, 1, 1, 8),
        )
        assert result.success is True
        assert len(book.time_usages("work")) == 2

        result = run(book, CommandType.REMOVE, category="work", usage_id=0)
        assert result.success is True
        assert book.time_usages("work")[0].start == datetime(2022, 1, 1, 9)

    def test_remove_missing_usage(self, book):
        result = run(book, CommandType.REMOVE, category="work", usage_id=5)
        assert result.success is False
        assert result.error_message == "Time Usage with the id 5 doesn't exist."

    def test_summary_for_all_categories(self, book):
        result = run(book, CommandType.SUMMARY)
        assert result.output == [
            "reading: 0 h 45 min(s)",
            "work: 2 h 15 min(s)",
        ]

    def test_summary_for_one_category_and_span(self, book):
        result = run(book, CommandType.SUMMARY, category="reading", span=TimeSpan.TODAY)
        assert result.output == ["reading: 0 h 0 min(s)"]

    def test_summary_for_missing_category(self, book):
        result = run(book, CommandType.SUMMARY, category="chores")
        assert result.success is False
        assert result.error_code == "category_does_not_exist"

    def test_log(self, book):
        result = run(book, CommandType.LOG)
        assert result.output == [
            "1/1/2022 09:00 - 1/1/2022 11:15: work (ID: 0)\n\n"
            "31/12/2021 20:00 - 31/12/2021 20:45: reading (ID: 0)\n\tNovel\n\n"
        ]

    def test_log_filtered(self, book):
        result = run(book, CommandType.LOG, span=TimeSpan.YESTERDAY)
        assert result.output == [
            "31/12/2021 20:00 - 31/12/2021 20:45: reading (ID: 0)\n\tNovel\n\n"
        ]

    def test_remove_category(self, book):
        result = run(book, CommandType.REMOVE_CATEGORY, category="reading")
        assert result.success is True
        assert book.categories() == ["work"]

    def test_list_categories_sorted(self, book):
        result = run(book, CommandType.LIST_CATEGORIES)
        assert result.output == ["reading", "work"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
