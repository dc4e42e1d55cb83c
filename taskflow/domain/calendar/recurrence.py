"""Recurring block expansion.

Turns weekly schedule blocks into concrete calendar events over a bounded
window of dates. Pure functions; anomalies are logged and skipped.
"""

import logging
from collections.abc import Iterator
from datetime import date, datetime, time, timedelta, tzinfo

from taskflow.domain.schedule import Schedule, ScheduleBlock
from taskflow.domain.shared.result import Err
from taskflow.domain.types import ClockTime, Weekday

from .models import CalendarEvent, SourceKind, SourceRef

logger = logging.getLogger(__name__)

WEEK = timedelta(days=7)


def occurrence_dates(weekday: Weekday, window_start: date, window_end: date) -> Iterator[date]:
    """Yield every date with the given weekday inside [window_start, window_end]."""
    current = weekday.first_on_or_after(window_start)
    while current is not None and current <= window_end:
        yield current
        current = current + WEEK if window_end - current >= WEEK else None


def make_occurrence(
    block: ScheduleBlock,
    schedule_id: str | None,
    day: date,
    tz: tzinfo | None = None,
) -> CalendarEvent | None:
    """Build the event for one occurrence of a block.

    Clock fields are parsed per occurrence; a malformed value drops this
    occurrence only.

    Args:
        block: The recurring block
        schedule_id: Id of the owning schedule, for the back-reference
        day: Date the occurrence starts on
        tz: Timezone to attach to the resulting instants

    Returns:
        The event, or None if the block's times cannot be parsed
    """
    start_clock = ClockTime.parse(block.start_time)
    end_clock = ClockTime.parse(block.end_time)
    for result in (start_clock, end_clock):
        if isinstance(result, Err):
            logger.debug(f"Skipping {block.activity!r} on {day}: {result.error}")
            return None

    start = start_clock.value.on(day, tz)
    end = end_clock.value.on(day, tz)
    if end < start:
        if day == date.max:
            end = datetime.combine(day, time.max, tzinfo=tz)
        else:
            end += timedelta(days=1)

    return CalendarEvent(
        title=block.activity,
        start=start,
        end=end,
        all_day=False,
        source_kind=SourceKind.SCHEDULE_BLOCK,
        source_ref=SourceRef(schedule_id=schedule_id, block_id=block.id),
        tag=block.tag,
        location=block.location,
    )


def expand_block(
    block: ScheduleBlock,
    schedule_id: str | None,
    window_start: date,
    window_end: date,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """Expand one block into its occurrences within the window.

    Returns:
        Events in chronological order; empty for an unknown weekday name
    """
    weekday = Weekday.parse(block.day)
    if isinstance(weekday, Err):
        logger.warning(f"Skipping block {block.activity!r}: {weekday.error}")
        return []

    events: list[CalendarEvent] = []
    skipped = 0
    for day in occurrence_dates(weekday.value, window_start, window_end):
        event = make_occurrence(block, schedule_id, day, tz)
        if event is None:
            skipped += 1
            continue
        events.append(event)

    if skipped:
        logger.warning(
            f"Skipped {skipped} occurrence(s) of block {block.activity!r} "
            f"with unparseable times {block.start_time!r}-{block.end_time!r}"
        )
    return events


def expand_schedules(
    schedules: list[Schedule],
    window_start: date,
    window_end: date,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """Expand every block of every schedule, in schedule/block order."""
    events: list[CalendarEvent] = []
    for schedule in schedules:
        for block in schedule.blocks:
            events.extend(expand_block(block, schedule.id, window_start, window_end, tz))
    return events
