"""Shared fixtures and fakes for taskflow tests."""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from taskflow.application import NotificationSink
from taskflow.infrastructure.platform import Permission
from taskflow.infrastructure.storage import MemoryStore


class ManualHandle:
    def __init__(self, scheduler: "ManualScheduler", callback: Callable[[], None], delay: float) -> None:
        self._scheduler = scheduler
        self.callback = callback
        self.delay = delay
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []
        self.background_calls = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self, callback, delay)
        self.handles.append(handle)
        return handle

    def run_background(self, callback: Callable[[], None]) -> None:
        self.background_calls += 1
        callback()

    @property
    def pending(self) -> list[ManualHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def fire_all(self) -> None:
        """Run every timer, including cancelled ones, as a late timer would."""
        for handle in list(self.handles):
            handle.callback()


class FakeSoundPlayer:
    def __init__(self, fail: bool = False) -> None:
        self.plays = 0
        self.fail = fail

    def play(self) -> None:
        self.plays += 1
        if self.fail:
            raise OSError("no audio device")


class FakeNotifier:
    def __init__(self, permission: Permission = Permission.GRANTED, answer: Permission = Permission.GRANTED) -> None:
        self._permission = permission
        self.answer = answer
        self.requests = 0
        self.shown: list[tuple[str, str]] = []

    def permission(self) -> Permission:
        return self._permission

    def request_permission(self) -> Permission:
        self.requests += 1
        self._permission = self.answer
        return self._permission

    def show(self, title: str, body: str) -> None:
        self.shown.append((title, body))


FIXED_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sound():
    return FakeSoundPlayer()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def sink(store, scheduler, sound, notifier):
    sink = NotificationSink(
        store,
        sound_player=sound,
        platform_notifier=notifier,
        scheduler=scheduler,
        clock=lambda: FIXED_TIME,
    )
    yield sink
    sink.close()


@pytest.fixture
def taskflow_home(tmp_path, monkeypatch):
    """Point the config directory at a temporary folder."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("TASKFLOW_HOME", str(home))
    monkeypatch.delenv("TASKFLOW_NOW", raising=False)
    return home
