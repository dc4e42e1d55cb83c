"""Calendar domain models.

Calendar events are read-only projections of tasks and schedule blocks.
They are recomputed from scratch whenever their sources change and are
never persisted.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    """What a calendar event was synthesised from."""

    TASK = "task"
    SCHEDULE_BLOCK = "scheduleBlock"


class SourceRef(BaseModel):
    """Back-reference from an event to the record it came from.

    Task events set ``task_id``; schedule events set ``schedule_id`` and
    ``block_id``. Used for lookups only.
    """

    model_config = {"frozen": True}

    task_id: str | None = None
    schedule_id: str | None = None
    block_id: str | None = None


class CalendarEvent(BaseModel):
    """A single concrete calendar entry."""

    model_config = {"frozen": True}

    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    source_kind: SourceKind
    source_ref: SourceRef
    completed: bool | None = None
    tag: str | None = None
    location: str | None = None

    @property
    def is_instant(self) -> bool:
        """True when the event has zero length."""
        return self.start == self.end


class CalendarView(BaseModel):
    """Result of a synthesis run: every event plus the next upcoming one."""

    events: list[CalendarEvent] = Field(default_factory=list)
    next_upcoming: CalendarEvent | None = None

    @property
    def has_events(self) -> bool:
        return len(self.events) > 0

    @property
    def has_upcoming(self) -> bool:
        return self.next_upcoming is not None
