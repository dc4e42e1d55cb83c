"""Request/Response schemas for the taskflow API.

These Pydantic models define the API contract for request and response
bodies. Task and schedule payloads use the backend wire format and are
ingested record by record, so one malformed record does not reject the
request.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from taskflow.domain.notification import HistoryEntry, NotificationSettings
from taskflow.domain.task import DueFilter


# =============================================================================
# Calendar Schemas
# =============================================================================


class CalendarRequest(BaseModel):
    """Synthesise a calendar from raw task and schedule records."""

    tasks: list[dict[str, Any]] = Field(default_factory=list)
    schedules: list[dict[str, Any]] = Field(default_factory=list)
    now: Optional[datetime] = None
    window_years: int = Field(default=1, ge=0)


# =============================================================================
# Task Schemas
# =============================================================================


class TaskListRequest(BaseModel):
    """A raw task list plus the reference time."""

    tasks: list[dict[str, Any]] = Field(default_factory=list)
    now: Optional[datetime] = None


class ForestRequest(TaskListRequest):
    """Task list plus task view filters."""

    tag: Optional[str] = None
    due: DueFilter = DueFilter.ALL
    hide_completed: bool = False
    owner: Optional[str] = None


class DeriveRequest(TaskListRequest):
    deliver: bool = False


# =============================================================================
# Notification Schemas
# =============================================================================


class NotifyRequest(BaseModel):
    message: str = Field(min_length=1)
    related_entity_id: Optional[str] = None


class NotifyResponse(BaseModel):
    """Id of the displayed entry; null when notifications are muted."""

    id: Optional[str] = None


class SettingsUpdate(BaseModel):
    sound: Optional[bool] = None
    browser_push: Optional[bool] = None
    mute: Optional[bool] = None


class QueuedNotification(BaseModel):
    """A notification currently on screen."""

    id: str
    message: str
    related_entity_id: Optional[str] = None


class SinkState(BaseModel):
    """Everything the presentation layer needs to render notifications."""

    notifications: list[QueuedNotification]
    history: list[HistoryEntry]
    settings: NotificationSettings
