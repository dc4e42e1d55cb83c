"""Calendar CLI commands.

Synthesise the calendar from exported task and schedule files and show
either the full event list or the next upcoming event.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from taskflow.application import build_calendar
from taskflow.config import get_config
from taskflow.domain.calendar import CalendarEvent, SourceKind
from taskflow.interfaces.cli.common import (
    json_option,
    load_records,
    now_option,
    print_header,
    print_info,
    resolve_now,
)

app = typer.Typer(help="Calendar commands")


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def format_event(event: CalendarEvent) -> str:
    """Format an event as a single line."""
    if event.all_day:
        when = f"{event.start:%a %b %d, %Y} (all day)"
    elif event.is_instant:
        when = f"{event.start:%a %b %d, %Y %H:%M}"
    else:
        when = f"{event.start:%a %b %d, %Y %H:%M} - {event.end:%H:%M}"
    kind = "Task" if event.source_kind == SourceKind.TASK else "Schedule Block"
    return f"{when}  {event.title}  [{kind}]"


def _build(tasks: Path, schedules: Optional[Path], now: datetime, window_years: Optional[int]):
    years = window_years if window_years is not None else get_config().window_years
    schedule_records = load_records(schedules) if schedules else []
    return build_calendar(load_records(tasks), schedule_records, now, years)


# =============================================================================
# Commands
# =============================================================================


@app.command("show")
def show(
    tasks: Path = typer.Argument(..., help="JSON file with the task list"),
    schedules: Optional[Path] = typer.Argument(None, help="JSON file with the schedule list"),
    now: Optional[str] = now_option,
    window_years: Optional[int] = typer.Option(
        None, "--window-years", "-w", min=0, help="Years of recurrence on each side of now"
    ),
    upcoming: bool = typer.Option(False, "--upcoming", "-u", help="Only show events from now on"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum events to show"),
    as_json: bool = json_option,
) -> None:
    """Show every calendar event in chronological order."""
    reference = resolve_now(now)
    view = _build(tasks, schedules, reference, window_years)

    events = view.events
    if upcoming:
        events = [event for event in events if event.start >= reference]
    if limit is not None:
        events = events[:limit]

    if as_json:
        typer.echo(view.model_copy(update={"events": events}).model_dump_json(indent=2))
        return

    if not view.has_events:
        print_info("No tasks with due dates or schedule blocks to display.")
        return

    print_header(f"CALENDAR ({len(events)} of {len(view.events)} events)")
    for event in events:
        typer.echo(format_event(event))


@app.command("next")
def next_event(
    tasks: Path = typer.Argument(..., help="JSON file with the task list"),
    schedules: Optional[Path] = typer.Argument(None, help="JSON file with the schedule list"),
    now: Optional[str] = now_option,
    window_years: Optional[int] = typer.Option(
        None, "--window-years", "-w", min=0, help="Years of recurrence on each side of now"
    ),
    as_json: bool = json_option,
) -> None:
    """Show the next upcoming event."""
    view = _build(tasks, schedules, resolve_now(now), window_years)

    if as_json:
        payload = view.next_upcoming.model_dump_json(indent=2) if view.next_upcoming else "null"
        typer.echo(payload)
        return

    if view.next_upcoming is None:
        if view.has_events:
            print_info("No upcoming tasks with due dates or schedule blocks found.")
        else:
            print_info("No tasks with due dates or schedule blocks to display.")
        return

    print_header("NEXT UPCOMING")
    typer.echo(format_event(view.next_upcoming))
