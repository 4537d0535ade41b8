"""
Command Line Interface for TimeBook

The shell around the ledger: it parses arguments into a LedgerCommand, asks
for confirmation where a command destroys data, runs the command through the
LedgerCommandFlow and prints the result.

Exit status: 0 on success, 1 on any ledger, storage or configuration error,
2 on invalid arguments.
"""

import argparse
import sys
from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError

from timebook import __version__
from timebook.audit import configure_logging
from timebook.config import SAVE_FILE_ENV_VAR, TimeBookSettings
from timebook.models.command import CommandType, LedgerCommand
from timebook.models.ledger import TimeSpan
from timebook.orchestrator import create_app_components
from timebook.services.storage import StorageError


def parse_timestamp(value: str) -> datetime:
    """Parse a local ISO 8601 timestamp such as `2022-01-01T09:00`."""
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid timestamp '{value}' (expected e.g. 2022-01-01T09:00)"
        )
    if moment.tzinfo is not None:
        raise argparse.ArgumentTypeError(
            f"invalid timestamp '{value}' (use local time without a UTC offset)"
        )
    return moment


def parse_span(value: str) -> TimeSpan:
    try:
        return TimeSpan(value.lower())
    except ValueError:
        choices = ", ".join(span.value for span in TimeSpan)
        raise argparse.ArgumentTypeError(
            f"invalid time span '{value}' (choose from {choices})"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timebook",
        description="Track the time you spend on things.",
    )
    parser.add_argument(
        "--file",
        default=None,
        help=f"Path to the save file (default: ${SAVE_FILE_ENV_VAR}).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for the audit log on stderr (default: WARNING).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    start_p = sub.add_parser("start", help="Start recording time for a category.")
    start_p.add_argument("category", help="The category to record time to.")
    start_p.add_argument(
        "-s", "--start-time",
        type=parse_timestamp,
        default=None,
        help="The starting point of the recording (default: now).",
    )

    stop_p = sub.add_parser("stop", help="Stop recording time.")
    stop_p.add_argument("desc", nargs="?", default=None, help="An optional description of the spent time.")
    stop_p.add_argument(
        "-s", "--stop-time",
        type=parse_timestamp,
        default=None,
        help="The ending point of the recording (default: now).",
    )

    sub.add_parser("status", help="Show whether time is currently being recorded.")
    sub.add_parser("cancel", help="Cancel the current time recording.")

    add_p = sub.add_parser("add", help="Add spent time to a category.")
    add_p.add_argument("category", help="The category to add the spent time to.")
    add_p.add_argument("start_time", type=parse_timestamp, help="The starting point.")
    add_p.add_argument("stop_time", type=parse_timestamp, help="The ending point.")
    add_p.add_argument("desc", nargs="?", default=None, help="An optional description of the spent time.")

    remove_p = sub.add_parser("remove", help="Remove spent time from a category.")
    remove_p.add_argument("category", help="The category to remove the spent time from.")
    remove_p.add_argument("id", type=int, help="The id of the spent time, as shown by `log`.")

    for name, help_text in (
        ("summary", "Print a summary of time spent."),
        ("log", "Print a log of spent times."),
    ):
        report_p = sub.add_parser(name, help=help_text)
        report_p.add_argument(
            "span",
            nargs="?",
            type=parse_span,
            default=TimeSpan.ALL,
            help="Time span: " + ", ".join(span.value for span in TimeSpan) + " (default: all).",
        )
        report_p.add_argument("-c", "--category", default=None, help="Only show this category.")

    add_cat_p = sub.add_parser("add-category", help="Add a new category.")
    add_cat_p.add_argument("category", help="The category to add.")

    remove_cat_p = sub.add_parser("remove-category", help="Remove a category and all of its spent time.")
    remove_cat_p.add_argument("category", help="The category to remove.")
    remove_cat_p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")

    sub.add_parser("list-categories", help="Print all categories.")

    return parser


def build_command(args: argparse.Namespace) -> LedgerCommand:
    """Translate parsed arguments into a LedgerCommand."""
    command_type = CommandType(args.command)
    fields = {"command_type": command_type}

    if command_type in (
        CommandType.START,
        CommandType.ADD,
        CommandType.REMOVE,
        CommandType.SUMMARY,
        CommandType.LOG,
        CommandType.ADD_CATEGORY,
        CommandType.REMOVE_CATEGORY,
    ):
        fields["category"] = args.category
    if command_type in (CommandType.START, CommandType.ADD):
        fields["start_time"] = args.start_time
    if command_type in (CommandType.STOP, CommandType.ADD):
        fields["stop_time"] = args.stop_time
        fields["description"] = args.desc
    if command_type == CommandType.REMOVE:
        fields["usage_id"] = args.id
    if command_type in (CommandType.SUMMARY, CommandType.LOG):
        fields["span"] = args.span

    return LedgerCommand(**fields)


def confirm(prompt: str, input_fn: Callable[[str], str] = input) -> bool:
    """Ask a y/n question until the answer is y or n."""
    while True:
        answer = input_fn(prompt).strip().lower()
        if answer in ("y", "n"):
            return answer == "y"
        print("Invalid option.", file=sys.stderr)


def main(
    argv: Optional[list[str]] = None,
    input_fn: Callable[[str], str] = input,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.file:
        overrides["save_file"] = args.file
    if args.log_level:
        overrides["log_level"] = args.log_level

    try:
        settings = TimeBookSettings(**overrides)
    except ValidationError as e:
        if any(error["loc"] == ("save_file",) for error in e.errors()):
            print(f"Environment variable '{SAVE_FILE_ENV_VAR}' is not defined.", file=sys.stderr)
        else:
            print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    try:
        command = build_command(args)
    except ValidationError as e:
        print(f"Invalid command: {e}", file=sys.stderr)
        return 1

    if command.command_type == CommandType.REMOVE_CATEGORY and not args.yes:
        if not confirm(f"Remove category {command.category} (y/n)? ", input_fn):
            print("Abort!")
            return 0

    flow = create_app_components(settings)
    if not flow.storage.exists():
        print("Save file doesn't exist. It will be created.")

    try:
        result = flow.run(command)
    except StorageError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not result.success:
        print(result.error_message, file=sys.stderr)
        return 1

    for line in result.output:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
