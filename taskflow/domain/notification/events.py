"""Notification domain events.

Occurrences signalled from outside the task data that should still reach
the user as an alert.
"""

from taskflow.domain.shared.events import DomainEvent


class MessageArrived(DomainEvent):
    """Event raised when a new chat message lands in a conversation the
    user is not currently viewing.
    """

    conversation_id: str
    conversation_name: str
    sender_id: str | None = None
    content: str = ""
