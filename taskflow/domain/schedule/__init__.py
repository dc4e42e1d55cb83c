"""Schedule domain - recurring weekly blocks."""

from .models import Schedule, ScheduleBlock, ingest_schedules

__all__ = ["Schedule", "ScheduleBlock", "ingest_schedules"]
