"""Notification domain models."""

from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class NotificationKind(str, Enum):
    """Time-based alert categories derived from task due dates."""

    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    DUE_SOON = "due-soon"


class Notification(BaseModel):
    """A derived, transient alert about one task."""

    model_config = {"frozen": True}

    kind: NotificationKind
    message: str
    related_task_id: str


class NotificationSettings(BaseModel):
    """User delivery preferences.

    ``mute`` overrides everything else. The stored form written by older
    clients used the key ``browser`` for ``browser_push``; both are read.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sound: bool = True
    browser_push: bool = Field(
        default=False,
        validation_alias=AliasChoices("browser_push", "browserPush", "browser"),
    )
    mute: bool = False


class NotifyOptions(BaseModel):
    """Options accepted by the sink's notify call.

    Anything other than these two fields is dropped.
    """

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    related_entity_id: str | None = None
    on_activate: Callable[[], None] | None = Field(default=None, exclude=True)


class HistoryEntry(BaseModel):
    """A notification that has already been shown.

    Older clients stored numeric ids and kept the related entity under
    ``relatedEntityId`` or ``groupId``; all of these are accepted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    message: str
    timestamp: datetime
    related_entity_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("related_entity_id", "relatedEntityId", "groupId"),
    )

    @field_validator("id", "related_entity_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class DisplayEntry(BaseModel):
    """A notification currently on screen."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    message: str
    related_entity_id: str | None = None
    on_activate: Callable[[], None] | None = Field(default=None, exclude=True)
