"""Command execution package."""

from timebook.commands.executor import CommandExecutor, format_duration

__all__ = ["CommandExecutor", "format_duration"]
