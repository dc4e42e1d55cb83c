"""Tests for the terminal platform adapters."""

import threading
import time

from taskflow.application import NotificationSink
from taskflow.infrastructure.platform import Permission, TerminalNotifier, TimerScheduler
from taskflow.infrastructure.storage import MemoryStore


def test_timer_fires():
    scheduler = TimerScheduler()
    fired = threading.Event()
    scheduler.call_later(0.01, fired.set)
    assert fired.wait(2.0)


def test_cancelled_timer_does_not_fire():
    scheduler = TimerScheduler()
    fired = threading.Event()
    handle = scheduler.call_later(0.2, fired.set)
    handle.cancel()
    assert not fired.wait(0.4)


def test_close_cancels_everything():
    scheduler = TimerScheduler()
    fired = threading.Event()
    scheduler.call_later(0.2, fired.set)
    scheduler.call_later(0.2, fired.set)
    scheduler.close()
    assert not fired.wait(0.4)


def test_run_background():
    done = threading.Event()
    TimerScheduler().run_background(done.set)
    assert done.wait(2.0)


def test_terminal_notifier_permission():
    notifier = TerminalNotifier()
    assert notifier.permission() == Permission.DEFAULT
    assert notifier.request_permission() == Permission.GRANTED

    refusing = TerminalNotifier(grant_on_request=False)
    assert refusing.request_permission() == Permission.DENIED
    assert refusing.request_permission() == Permission.DENIED


def test_sink_entries_expire_on_real_timers():
    sink = NotificationSink(MemoryStore(), expiry_seconds=0.05)
    sink.notify("short lived")

    deadline = time.monotonic() + 2.0
    while sink.notifications and time.monotonic() < deadline:
        time.sleep(0.01)

    assert sink.notifications == []
    assert len(sink.history) == 1
    sink.close()
