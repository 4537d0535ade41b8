"""Tests for the command line interface."""

import logging

import pytest
import structlog

from timebook.cli import build_command, build_parser, confirm, main
from timebook.models.command import CommandType
from timebook.models.ledger import TimeSpan


@pytest.fixture(autouse=True)
def reset_logging():
    """main() configures global logging; undo it after every test."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


@pytest.fixture
def save_file(tmp_path, monkeypatch):
    path = tmp_path / "ledger.json"
    monkeypatch.setenv("TIMEBOOK_SAVE_FILE", str(path))
    return path


def answers(*replies):
    """An input() replacement returning the given replies in order."""
    pending = list(replies)
    return lambda prompt: pending.pop(0)


class TestParser:

    def test_start_command(self):
        args = build_parser().parse_args(["start", "work", "-s", "2022-01-01T09:00"])
        command = build_command(args)
        assert command.command_type == CommandType.START
        assert command.category == "work"
        assert command.start_time.hour == 9

    def test_stop_command(self):
        args = build_parser().parse_args(["stop", "Wrote tests", "--stop-time", "2022-01-01 10:30:00"])
        command = build_command(args)
        assert command.description == "Wrote tests"
        assert command.stop_time.minute == 30

    def test_report_span_defaults_to_all(self):
        command = build_command(build_parser().parse_args(["log"]))
        assert command.span == TimeSpan.ALL
        assert command.category is None

    def test_report_span_and_category(self):
        command = build_command(build_parser().parse_args(["summary", "Week", "-c", "work"]))
        assert command.span == TimeSpan.WEEK
        assert command.category == "work"

    def test_invalid_timestamp_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["start", "work", "-s", "nine o'clock"])
        assert exc_info.value.code == 2
        assert "invalid timestamp" in capsys.readouterr().err

    def test_invalid_span_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["log", "decade"])


class TestConfirm:

    def test_repeats_until_valid(self, capsys):
        assert confirm("? ", answers("maybe", " Y ")) is True
        assert "Invalid option." in capsys.readouterr().err

    def test_no(self):
        assert confirm("? ", answers("n")) is False


class TestMain:
    """End-to-end runs of the command line against a temporary save file."""

    def test_missing_save_file_setting(self, monkeypatch, capsys):
        monkeypatch.delenv("TIMEBOOK_SAVE_FILE", raising=False)

        assert main(["list-categories"]) == 1
        assert "Environment variable 'TIMEBOOK_SAVE_FILE' is not defined." in capsys.readouterr().err

    def test_first_run_creates_save_file(self, save_file, capsys):
        assert main(["add-category", "work"]) == 0
        assert "Save file doesn't exist. It will be created." in capsys.readouterr().out
        assert save_file.exists()

        assert main(["list-categories"]) == 0
        out = capsys.readouterr().out
        assert "will be created" not in out
        assert out == "work\n"

    def test_file_option_overrides_environment(self, save_file, tmp_path):
        other = tmp_path / "other.json"
        assert main(["--file", str(other), "add-category", "work"]) == 0
        assert other.exists()
        assert not save_file.exists()

    def test_ledger_error_exits_with_message(self, save_file, capsys):
        main(["add-category", "work"])
        capsys.readouterr()

        assert main(["add-category", "work"]) == 1
        assert capsys.readouterr().err.strip().endswith("Category work already exists.")

    def test_recording_across_invocations(self, save_file, capsys):
        main(["add-category", "work"])
        assert main(["start", "work", "-s", "2022-01-01T09:00"]) == 0
        capsys.readouterr()

        assert main(["status"]) == 0
        assert capsys.readouterr().out == "Since 2022-01-01 09:00:00: work\n"

        assert main(["stop", "Planning", "-s", "2022-01-01T10:30"]) == 0
        assert main(["summary", "-c", "work"]) == 0
        assert capsys.readouterr().out == "work: 1 h 30 min(s)\n"

        assert main(["status"]) == 1
        assert "Time is not being recorded." in capsys.readouterr().err

    def test_add_log_and_remove(self, save_file, capsys):
        main(["add-category", "work"])
        main(["add-category", "fun"])
        main(["add", "work", "2022-01-01T10:00", "2022-01-01T11:00"])
        main(["add", "fun", "2022-01-01T09:00", "2022-01-01T10:00", "Chess"])
        capsys.readouterr()

        assert main(["log"]) == 0
        assert capsys.readouterr().out == (
            "1/1/2022 10:00 - 1/1/2022 11:00: work (ID: 0)\n\n"
            "1/1/2022 09:00 - 1/1/2022 10:00: fun (ID: 0)\n\tChess\n\n\n"
        )

        assert main(["remove", "fun", "0"]) == 0
        assert main(["remove", "fun", "0"]) == 1
        assert "Time Usage with the id 0 doesn't exist." in capsys.readouterr().err

    def test_remove_category_asks_for_confirmation(self, save_file, capsys):
        main(["add-category", "work"])
        capsys.readouterr()

        assert main(["remove-category", "work"], input_fn=answers("huh", "n")) == 0
        captured = capsys.readouterr()
        assert "Abort!" in captured.out
        assert "Invalid option." in captured.err

        main(["list-categories"])
        assert capsys.readouterr().out == "work\n"

        assert main(["remove-category", "work"], input_fn=answers("y")) == 0
        main(["list-categories"])
        assert capsys.readouterr().out == ""

    def test_remove_category_with_yes_flag(self, save_file, capsys):
        main(["add-category", "work"])

        def no_input(prompt):
            raise AssertionError("should not prompt")

        assert main(["remove-category", "work", "--yes"], input_fn=no_input) == 0

    def test_corrupt_save_file(self, save_file, capsys):
        save_file.write_text("[]", encoding="utf-8")

        assert main(["list-categories"]) == 1
        assert "Could not parse json" in capsys.readouterr().err
        assert save_file.read_text(encoding="utf-8") == "[]"

    def test_save_file_that_is_not_utf8(self, save_file, capsys):
        save_file.write_bytes(b'{"categories": {"\xff": []}}')

        assert main(["list-categories"]) == 1
        assert "Could not parse json" in capsys.readouterr().err

    def test_timestamp_with_utc_offset_is_rejected(self, save_file, capsys):
        main(["add-category", "work"])
        main(["add", "work", "2022-01-01T09:00", "2022-01-01T10:00"])
        capsys.readouterr()

        with pytest.raises(SystemExit) as exc_info:
            main(["add", "work", "2022-01-01T11:00+02:00", "2022-01-01T12:00+02:00"])
        assert exc_info.value.code == 2
        assert "without a UTC offset" in capsys.readouterr().err

        assert main(["summary", "-c", "work"]) == 0
        assert capsys.readouterr().out == "work: 1 h 0 min(s)\n"

    def test_invalid_log_level(self, save_file, capsys):
        assert main(["--log-level", "loud", "list-categories"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
