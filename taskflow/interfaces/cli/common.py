"""Shared utilities for taskflow CLI commands.

- Input loading (JSON exports of tasks and schedules)
- Reference time handling (--now)
- Formatted output helpers (error, success, info, warning)
- Notification sink construction against the user's preferences file
"""

from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from taskflow.application import NotificationSink
from taskflow.config import get_config, get_preferences_path
from taskflow.domain.shared.result import Err
from taskflow.domain.types import parse_datetime
from taskflow.infrastructure.platform import Permission, TerminalBell, TerminalNotifier
from taskflow.infrastructure.storage import JsonFileStore, JsonStorage

# Reusable reference-time option for CLI commands
# Usage: def my_command(now: str | None = now_option) -> None:
now_option = typer.Option(
    None,
    "--now",
    help="Reference time as ISO 8601 (defaults to the current local time)",
    envvar="TASKFLOW_NOW",
)

json_option = typer.Option(
    False,
    "--json",
    help="Print machine-readable JSON instead of text",
)


def resolve_now(value: str | None) -> datetime:
    """Parse the --now option, exiting with an error if it is malformed.

    Raises:
        typer.Exit: If the value is not an ISO 8601 date/time.
    """
    if value is None:
        return datetime.now()
    result = parse_datetime(value)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load a JSON array of records from a file.

    Raises:
        typer.Exit: If the file is missing, unreadable or not an array.
    """
    result = JsonStorage().load_records(path)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def open_sink(with_effects: bool = True) -> NotificationSink:
    """Create a NotificationSink bound to the user's preferences file.

    Args:
        with_effects: Ring the terminal bell and echo native notifications.
            A terminal needs no permission prompt, so the notifier starts
            out granted.
    """
    config = get_config()
    return NotificationSink(
        JsonFileStore(get_preferences_path()),
        sound_player=TerminalBell() if with_effects else None,
        platform_notifier=TerminalNotifier(Permission.GRANTED) if with_effects else None,
        expiry_seconds=config.expiry_seconds,
        history_limit=config.history_limit,
    )


def _styled(msg: str, color: str, err: bool = False) -> None:
    typer.echo(typer.style(msg, fg=color), err=err)


def print_error(msg: str) -> None:
    _styled(f"Error: {msg}", typer.colors.RED, err=True)


def print_warning(msg: str) -> None:
    _styled(f"Warning: {msg}", typer.colors.YELLOW, err=True)


def print_success(msg: str) -> None:
    _styled(msg, typer.colors.GREEN)


def print_info(msg: str) -> None:
    _styled(msg, typer.colors.BLUE)


def print_header(title: str, width: int = 60) -> None:
    """Print a title between two rules of "=" characters."""
    rule = "=" * width
    typer.echo(f"{rule}\n{title}\n{rule}")


def print_rule(width: int = 60) -> None:
    typer.echo("-" * width)
