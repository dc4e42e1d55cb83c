"""Application service layer for taskflow.

Services orchestrate domain functions for the interfaces layer.

Services:
    calendar_service - Calendar views from raw backend records
    task_service - Filtered task forests and dashboard summaries
    notification_service - Notification delivery sink
    chat_service - New-message detection feeding the sink

Example usage:
    >>> from taskflow.application import NotificationSink
    >>> from taskflow.infrastructure.storage import MemoryStore
    >>>
    >>> sink = NotificationSink(MemoryStore())
    >>> entry_id = sink.notify("Standup in 5 minutes")
"""

from taskflow.application.calendar_service import build_calendar
from taskflow.application.chat_service import (
    ChatMessage,
    ConversationSnapshot,
    alert_new_messages,
    detect_new_messages,
)
from taskflow.application.notification_service import (
    EXPIRY_SECONDS,
    HISTORY_LIMIT,
    NotificationSink,
)
from taskflow.application.task_service import (
    TagCount,
    TaskSummary,
    build_task_view,
    summarize_tasks,
)

__all__ = [
    # Calendar service
    "build_calendar",
    # Task service
    "build_task_view",
    "summarize_tasks",
    "TaskSummary",
    "TagCount",
    # Notification service
    "NotificationSink",
    "EXPIRY_SECONDS",
    "HISTORY_LIMIT",
    # Chat service
    "ChatMessage",
    "ConversationSnapshot",
    "detect_new_messages",
    "alert_new_messages",
]
