"""Tests for chat arrival detection and alerts."""

from taskflow.application import ConversationSnapshot, alert_new_messages, detect_new_messages


def _conversation(cid, name, *senders):
    return ConversationSnapshot.model_validate(
        {
            "_id": cid,
            "name": name,
            "messages": [{"sender": {"_id": sender}, "content": f"hi from {sender}"} for sender in senders],
        }
    )


def test_first_poll_only_records_counts():
    events, counts = detect_new_messages({}, [_conversation("c1", "Team", "u2")], None, "u1")
    assert events == []
    assert counts == {"c1": 1}


def test_growth_in_background_conversation():
    events, counts = detect_new_messages(
        {"c1": 1, "c2": 0},
        [_conversation("c1", "Team", "u2", "u3"), _conversation("c2", "Ops", "u4")],
        "c2",
        "u1",
    )

    assert [(e.conversation_id, e.conversation_name, e.sender_id, e.content) for e in events] == [
        ("c1", "Team", "u3", "hi from u3")
    ]
    assert counts == {"c1": 2, "c2": 1}


def test_own_messages_do_not_alert():
    events, _ = detect_new_messages({"c1": 1}, [_conversation("c1", "Team", "u2", "u1")], None, "u1")
    assert events == []


def test_alerts_through_sink(sink):
    opened = []
    events, _ = detect_new_messages(
        {"c1": 0},
        [ConversationSnapshot.model_validate({"_id": "c1", "name": "Team", "messages": [{"sender": "u2", "content": "x" * 80}]})],
        None,
        "u1",
    )
    ids = alert_new_messages(sink, events, open_conversation=opened.append)

    assert len(ids) == 1
    entry = sink.notifications[0]
    assert entry.message == "New message in Team: " + "x" * 60
    assert entry.related_entity_id == "c1"

    sink.activate(ids[0])
    assert opened == ["c1"]


def test_muted_sink_returns_no_ids(sink):
    sink.update_settings(mute=True)
    events, _ = detect_new_messages({"c1": 0}, [_conversation("c1", "Team", "u2")], None, "u1")
    assert alert_new_messages(sink, events) == []
