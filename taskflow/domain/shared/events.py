"""Base domain event.

Domain events are immutable records of something that happened outside
the pure computations, e.g. a chat message arriving in a conversation
the user is not looking at. They carry their own id and timestamp so a
consumer can deduplicate and order them.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
