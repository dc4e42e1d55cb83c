"""Task list filters.

Predicates used by task list views before the forest is built. Filtering
happens on the flat list, so a child whose parent is filtered out shows up
as a root in the resulting forest.
"""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel

from taskflow.domain.shared.result import Ok
from taskflow.domain.types import align_to

from .models import Task

ALL_TAGS = "All"


class DueFilter(str, Enum):
    """Due-date buckets a task list can be narrowed to."""

    ALL = "all"
    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    DUE_THIS_WEEK = "due-this-week"
    NO_DUE_DATE = "no-due-date"


class TaskFilter(BaseModel):
    """Active filters of a task list view.

    ``tag`` and ``owner`` of None mean "any"; a tag of "All" does too.
    """

    tag: str | None = None
    due: DueFilter = DueFilter.ALL
    hide_completed: bool = False
    owner: str | None = None


def _end_of_week(now: datetime) -> datetime:
    # Weeks run Sunday through Saturday
    days_left = (5 - now.weekday()) % 7
    return now + timedelta(days=days_left)


def matches_due(task: Task, due: DueFilter, now: datetime) -> bool:
    """Check a task against a due-date bucket, comparing calendar days."""
    if due == DueFilter.ALL:
        return True
    if due == DueFilter.NO_DUE_DATE:
        return task.due_date is None

    result = task.due_at()
    if not isinstance(result, Ok):
        return False
    day = align_to(result.value, now).date()
    today = now.date()

    if due == DueFilter.OVERDUE:
        return day < today
    if due == DueFilter.DUE_TODAY:
        return day == today
    return today <= day <= _end_of_week(now).date()


def filter_tasks(tasks: list[Task], task_filter: TaskFilter, now: datetime) -> list[Task]:
    """Apply a TaskFilter to a flat task list, preserving order.

    Args:
        tasks: Tasks to filter
        task_filter: Active filters
        now: Reference instant for the due-date buckets

    Returns:
        Matching tasks in input order
    """
    selected = []
    for task in tasks:
        if task_filter.tag not in (None, ALL_TAGS) and task.tag != task_filter.tag:
            continue
        if not matches_due(task, task_filter.due, now):
            continue
        if task_filter.hide_completed and task.completed:
            continue
        if task_filter.owner is not None and task.owner != task_filter.owner:
            continue
        selected.append(task)
    return selected
