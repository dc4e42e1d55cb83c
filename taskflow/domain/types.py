"""Domain value objects for taskflow.

Immutable value objects for the calendar vocabulary (weekdays, wall-clock
times) plus the small amount of date arithmetic the domain needs.
Parsing helpers return Result types so a single malformed record can be
skipped without aborting the computation it belongs to.
"""

import re
from calendar import isleap
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from typing import ClassVar

from taskflow.domain.shared.result import Err, Ok, Result

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class Weekday:
    """A day of the week, identified by its English name.

    Names are matched exactly ("Monday", not "monday" or "Mon"), since
    that is how schedule blocks are stored by the backend.

    Example:
        Weekday.parse("Friday")  # Ok(Weekday(name="Friday", index=4))
    """

    name: str
    index: int  # Monday == 0, as in datetime.weekday()

    NAMES: ClassVar[tuple[str, ...]] = (
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    )

    @classmethod
    def parse(cls, name: str) -> Result["Weekday", str]:
        """Parse a weekday name.

        Args:
            name: Weekday name, case-sensitive

        Returns:
            Ok(Weekday) for one of the seven names, Err(str) otherwise
        """
        if name not in cls.NAMES:
            return Err(f"Unrecognized weekday: {name!r}")
        return Ok(cls(name=name, index=cls.NAMES.index(name)))

    def first_on_or_after(self, day: date) -> date | None:
        """Return the first date with this weekday on or after day.

        None when that date would fall past date.max.
        """
        offset = (self.index - day.weekday()) % 7
        if (date.max - day).days < offset:
            return None
        return day + timedelta(days=offset)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ClockTime:
    """A wall-clock time of day in 24-hour HH:MM form.

    Attributes:
        hour: 0-23
        minute: 0-59
    """

    hour: int
    minute: int

    @classmethod
    def parse(cls, text: str) -> Result["ClockTime", str]:
        """Parse an "HH:MM" string.

        Single-digit hours ("9:30") are accepted; anything else that does
        not look like a valid 24-hour clock reading is rejected.

        Args:
            text: Clock string such as "23:05"

        Returns:
            Ok(ClockTime) on success, Err(str) describing the problem
        """
        if not isinstance(text, str):
            return Err(f"Clock time must be a string, got {type(text).__name__}")
        match = _CLOCK_PATTERN.match(text.strip())
        if match is None:
            return Err(f"Malformed clock time: {text!r}")
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return Err(f"Clock time out of range: {text!r}")
        return Ok(cls(hour=hour, minute=minute))

    def on(self, day: date, tzinfo=None) -> datetime:
        """Combine this clock reading with a calendar date."""
        return datetime.combine(day, time(self.hour, self.minute), tzinfo=tzinfo)

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def __lt__(self, other: "ClockTime") -> bool:
        return self.minutes < other.minutes

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def parse_datetime(value: object) -> Result[datetime, str]:
    """Parse a due-date value coming from the backend.

    Accepts datetime objects, date objects (midnight) and ISO 8601 text,
    including a trailing "Z" for UTC.

    Args:
        value: Raw value from a task record

    Returns:
        Ok(datetime) or Err(str) if the value is not a usable point in time
    """
    if isinstance(value, datetime):
        return Ok(value)
    if isinstance(value, date):
        return Ok(datetime.combine(value, time()))
    if not isinstance(value, str) or not value.strip():
        return Err(f"Not a date: {value!r}")
    try:
        return Ok(datetime.fromisoformat(value.strip()))
    except ValueError:
        return Err(f"Unparseable date: {value!r}")


def align_to(moment: datetime, reference: datetime) -> datetime:
    """Express moment so it can be compared with reference.

    Aware values are converted into the reference's timezone. An aware
    value compared against a naive reference is converted to local time
    and made naive; a naive value against an aware reference is assumed
    to already be in the reference's timezone.
    """
    if reference.tzinfo is None:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone().replace(tzinfo=None)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    return moment.astimezone(reference.tzinfo)


def shift_years(day: date, years: int) -> date:
    """Move a date by whole years, clamping Feb 29 to Feb 28.

    Results outside the representable range clamp to date.min or date.max.
    """
    year = day.year + years
    if year < MINYEAR:
        return date.min
    if year > MAXYEAR:
        return date.max
    if day.month == 2 and day.day == 29 and not isleap(year):
        return day.replace(year=year, day=28)
    return day.replace(year=year)


def reference_id(value: object) -> str | None:
    """Collapse an id-or-expanded-object reference into a plain id string.

    The backend sometimes populates references (``{"_id": ..., "text": ...}``)
    and sometimes sends bare ids.
    """
    if value is None or value == "":
        return None
    if isinstance(value, Mapping):
        inner = value.get("_id", value.get("id"))
        return None if inner is None else str(inner)
    return str(value)
