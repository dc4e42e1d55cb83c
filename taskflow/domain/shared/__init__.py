"""Shared domain building blocks.

- Result type (Ok / Err) for per-item parse outcomes
- DomainEvent base for externally signalled occurrences
"""

from taskflow.domain.shared.events import DomainEvent
from taskflow.domain.shared.result import Err, Ok, Result

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    # Events
    "DomainEvent",
]
