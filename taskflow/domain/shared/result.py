"""Result type for per-item parsing outcomes.

Parsing a due date, a weekday name or a clock time can fail for a single
record without the whole computation failing. Those helpers return a
Result (Ok or Err) instead of raising, so callers can log the problem,
skip the record and keep going.

Example usage:
    >>> def parse_minutes(text: str) -> Result[int, str]:
    ...     if not text.isdigit():
    ...         return Err(f"Not a number: {text!r}")
    ...     return Ok(int(text))
    ...
    >>> result = parse_minutes("15")
    >>> if isinstance(result, Ok):
    ...     print(result.value)
    15
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful parse carrying its value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed parse carrying a description of what was wrong."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007

