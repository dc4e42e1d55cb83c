"""Calendar domain - event synthesis from tasks and weekly schedules.

Key Types:
    CalendarEvent - One concrete calendar entry
    CalendarView - Sorted events plus the next upcoming one
    SourceKind / SourceRef - Where an event came from

Functions:
    synthesize - Merge tasks and expanded schedules
    find_next_upcoming - First event at or after a given instant
    expand_schedules / expand_block - Weekly recurrence expansion
"""

from .models import CalendarEvent, CalendarView, SourceKind, SourceRef
from .recurrence import expand_block, expand_schedules, make_occurrence, occurrence_dates
from .synthesis import COMPLETED_SUFFIX, find_next_upcoming, synthesize, task_event

__all__ = [
    # Models
    "CalendarEvent",
    "CalendarView",
    "SourceKind",
    "SourceRef",
    # Recurrence
    "occurrence_dates",
    "make_occurrence",
    "expand_block",
    "expand_schedules",
    # Synthesis
    "COMPLETED_SUFFIX",
    "task_event",
    "find_next_upcoming",
    "synthesize",
]
