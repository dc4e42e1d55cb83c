"""Calendar application service.

Builds calendar views straight from backend records, combining ingestion
and synthesis. All functions are pure - no I/O, no side effects.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from taskflow.domain.calendar import CalendarView, synthesize
from taskflow.domain.schedule import ingest_schedules
from taskflow.domain.task import ingest_tasks


def build_calendar(
    task_records: Iterable[Mapping[str, Any]],
    schedule_records: Iterable[Mapping[str, Any]],
    now: datetime,
    window_years: int = 1,
) -> CalendarView:
    """Validate raw task and schedule records and synthesise their calendar.

    Malformed records are dropped during ingestion; the rest flow through
    synthesize() unchanged.

    Args:
        task_records: Task dictionaries in backend wire format.
        schedule_records: Schedule dictionaries in backend wire format.
        now: Reference instant.
        window_years: Half-width of the recurrence window, in years.

    Returns:
        CalendarView with sorted events and the next upcoming one.
    """
    return synthesize(
        ingest_tasks(task_records),
        ingest_schedules(schedule_records),
        now,
        window_years,
    )
