"""Chat arrival alerts.

Conversation polling is done elsewhere; this service compares successive
snapshots to spot new messages in conversations the user is not viewing,
and forwards them to the notification sink.
"""

from collections.abc import Callable
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from taskflow.application.notification_service import NotificationSink
from taskflow.domain.notification import MessageArrived, NotifyOptions
from taskflow.domain.types import reference_id

PREVIEW_LENGTH = 60


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sender_id: str | None = Field(default=None, validation_alias=AliasChoices("sender_id", "sender"))
    content: str = ""

    @field_validator("sender_id", mode="before")
    @classmethod
    def _sender_reference(cls, value: Any) -> str | None:
        return reference_id(value)


class ConversationSnapshot(BaseModel):
    """Messages of one conversation as of the latest poll."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    messages: list[ChatMessage] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return value if value is None else str(value)


def detect_new_messages(
    previous_counts: dict[str, int],
    conversations: list[ConversationSnapshot],
    selected_id: str | None,
    user_id: str | None,
) -> tuple[list[MessageArrived], dict[str, int]]:
    """Compare a poll against the previous message counts.

    A conversation seen for the first time only records its count. After
    that, growth in a conversation other than the selected one produces
    an event for its newest message, unless the user sent it.

    Args:
        previous_counts: Message count per conversation from the last poll.
        conversations: Current snapshots.
        selected_id: Conversation currently on screen.
        user_id: The current user, whose own messages never alert.

    Returns:
        (events, counts) where counts should be passed to the next call.
    """
    events: list[MessageArrived] = []
    counts = dict(previous_counts)
    for conversation in conversations:
        count = len(conversation.messages)
        previous = previous_counts.get(conversation.id)
        if conversation.id != selected_id and previous is not None and count > previous:
            newest = conversation.messages[-1]
            if newest.sender_id != user_id:
                events.append(
                    MessageArrived(
                        conversation_id=conversation.id,
                        conversation_name=conversation.name,
                        sender_id=newest.sender_id,
                        content=newest.content,
                    )
                )
        counts[conversation.id] = count
    return events, counts


def alert_new_messages(
    sink: NotificationSink,
    events: list[MessageArrived],
    open_conversation: Callable[[str], None] | None = None,
) -> list[str]:
    """Deliver one notification per arrival event.

    Args:
        sink: Notification sink to deliver through.
        events: Events from detect_new_messages().
        open_conversation: Called with the conversation id when the user
            activates the notification.

    Returns:
        Ids of the displayed entries (empty when muted).
    """
    ids = []
    for event in events:
        on_activate = None
        if open_conversation is not None:
            on_activate = lambda cid=event.conversation_id: open_conversation(cid)  # noqa: E731
        entry_id = sink.notify(
            f"New message in {event.conversation_name}: {event.content[:PREVIEW_LENGTH]}",
            NotifyOptions(related_entity_id=event.conversation_id, on_activate=on_activate),
        )
        if entry_id is not None:
            ids.append(entry_id)
    return ids
