"""Calendar synthesis.

Merges dated tasks and expanded schedule blocks into one chronologically
ordered event list and picks the next upcoming event. Every function here
is total over well-typed input: malformed records are logged and left out,
never raised.
"""

import logging
from datetime import datetime

from taskflow.domain.schedule import Schedule
from taskflow.domain.shared.result import Err
from taskflow.domain.task import Task
from taskflow.domain.types import align_to, shift_years

from .models import CalendarEvent, CalendarView, SourceKind, SourceRef
from .recurrence import expand_schedules

logger = logging.getLogger(__name__)

COMPLETED_SUFFIX = " (Completed)"


def task_event(task: Task, now: datetime) -> CalendarEvent | None:
    """Project a task onto the calendar as an all-day event.

    Args:
        task: Task to project
        now: Reference instant; the due date is expressed in its timezone

    Returns:
        The event, or None if the task has no usable due date
    """
    if task.due_date is None:
        return None
    due = task.due_at()
    if isinstance(due, Err):
        logger.warning(f"Skipping task {task.text!r}: {due.error}")
        return None

    moment = align_to(due.value, now)
    title = f"{task.text}{COMPLETED_SUFFIX}" if task.completed else task.text
    return CalendarEvent(
        title=title,
        start=moment,
        end=moment,
        all_day=True,
        source_kind=SourceKind.TASK,
        source_ref=SourceRef(task_id=task.id),
        completed=task.completed,
        tag=task.tag,
    )


def find_next_upcoming(events: list[CalendarEvent], now: datetime) -> CalendarEvent | None:
    """Return the first event starting at or after now.

    Args:
        events: Events sorted by start
        now: Reference instant; an event starting exactly now counts

    Returns:
        The next upcoming event, or None
    """
    for event in events:
        if event.start >= now:
            return event
    return None


def synthesize(
    tasks: list[Task],
    schedules: list[Schedule],
    now: datetime,
    window_years: int = 1,
) -> CalendarView:
    """Build the calendar for a set of tasks and schedules.

    Schedule blocks are expanded from the first matching weekday on or
    after (today - window_years) up to and including (today + window_years).
    Task events come first in the merged list, then schedule events; the
    stable sort by start keeps that order for ties.

    Args:
        tasks: Task snapshots
        schedules: Schedule snapshots
        now: Reference instant
        window_years: Half-width of the expansion window, in years

    Returns:
        CalendarView with sorted events and the next upcoming one
    """
    window_years = max(0, window_years)
    today = now.date()

    events = [event for event in (task_event(task, now) for task in tasks) if event is not None]
    task_count = len(events)

    events.extend(
        expand_schedules(
            schedules,
            shift_years(today, -window_years),
            shift_years(today, window_years),
            now.tzinfo,
        )
    )
    logger.debug(f"Synthesised {task_count} task event(s) and {len(events) - task_count} schedule event(s)")

    events.sort(key=lambda event: event.start)
    return CalendarView(events=events, next_upcoming=find_next_upcoming(events, now))
