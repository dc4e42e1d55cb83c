"""CLI interface for taskflow using Typer.

Usage:
    taskflow calendar show tasks.json schedules.json
    taskflow calendar next tasks.json schedules.json
    taskflow tasks tree tasks.json --hide-completed
    taskflow tasks alerts tasks.json --deliver
    taskflow notifications settings --mute

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (calendar, tasks, notifications)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from taskflow import __version__
from taskflow.interfaces.cli.commands import calendar, notifications, tasks

# Create the main Typer application
app = typer.Typer(
    name="taskflow",
    help="Calendar, task hierarchy and notification engine",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped records and other details"),
) -> None:
    """taskflow - calendars, task trees and due-date alerts from task exports."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(calendar.app, name="calendar")
app.add_typer(tasks.app, name="tasks")
app.add_typer(notifications.app, name="notifications")
