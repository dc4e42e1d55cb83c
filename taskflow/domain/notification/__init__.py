"""Notification domain - derived alerts and their delivery records.

Key Types:
    NotificationKind - overdue / due-today / due-soon
    Notification - Derived alert about one task
    NotificationSettings - User delivery preferences
    NotifyOptions - Explicit options for a notify call
    HistoryEntry / DisplayEntry - Shown and on-screen notifications

Functions:
    classify - Bucket a due instant relative to now
    derive_task_notifications - Alerts for a task list

Domain Events:
    MessageArrived - New chat message in an unfocused conversation
"""

from .derivation import DUE_SOON_DAYS, classify, derive_task_notifications
from .events import MessageArrived
from .models import (
    DisplayEntry,
    HistoryEntry,
    Notification,
    NotificationKind,
    NotificationSettings,
    NotifyOptions,
)

__all__ = [
    # Models
    "NotificationKind",
    "Notification",
    "NotificationSettings",
    "NotifyOptions",
    "HistoryEntry",
    "DisplayEntry",
    # Derivation
    "DUE_SOON_DAYS",
    "classify",
    "derive_task_notifications",
    # Events
    "MessageArrived",
]
