"""Task notification derivation.

Pure classification of tasks into overdue / due-today / due-soon alerts,
comparing calendar days rather than instants.
"""

import logging
from datetime import datetime

from taskflow.domain.shared.result import Err
from taskflow.domain.task import Task
from taskflow.domain.types import align_to

from .models import Notification, NotificationKind

logger = logging.getLogger(__name__)

DUE_SOON_DAYS = 3


def _days(n: int) -> str:
    return "1 day" if n == 1 else f"{n} days"


def classify(due: datetime, now: datetime, due_soon_days: int = DUE_SOON_DAYS) -> NotificationKind | None:
    """Classify a due instant relative to now.

    First match wins: overdue, then due today, then due within
    due_soon_days calendar days.
    """
    delta = (align_to(due, now).date() - now.date()).days
    if delta < 0:
        return NotificationKind.OVERDUE
    if delta == 0:
        return NotificationKind.DUE_TODAY
    if delta <= due_soon_days:
        return NotificationKind.DUE_SOON
    return None


def derive_task_notifications(
    tasks: list[Task],
    now: datetime,
    due_soon_days: int = DUE_SOON_DAYS,
) -> list[Notification]:
    """Derive at most one alert per incomplete, dated task.

    Args:
        tasks: Task snapshots
        now: Reference instant
        due_soon_days: How many calendar days ahead count as "due soon"

    Returns:
        Notifications in input order
    """
    notifications: list[Notification] = []
    for task in tasks:
        if task.completed or task.due_date is None:
            continue
        due = task.due_at()
        if isinstance(due, Err):
            logger.warning(f"Not deriving alerts for task {task.text!r}: {due.error}")
            continue

        kind = classify(due.value, now, due_soon_days)
        if kind is None:
            continue

        moment = align_to(due.value, now)
        delta = abs((moment.date() - now.date()).days)
        if kind == NotificationKind.OVERDUE:
            message = f"{task.text} is overdue (was due {_days(delta)} ago)"
        elif kind == NotificationKind.DUE_TODAY:
            message = f"{task.text} is due today at {moment:%H:%M}"
        else:
            message = f"{task.text} is due in {_days(delta)}"

        notifications.append(Notification(kind=kind, message=message, related_task_id=task.id))
    return notifications
