"""Platform port abstractions used by the notification sink."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Protocol


class Permission(str, Enum):
    """Platform notification permission state."""

    GRANTED = "granted"
    DENIED = "denied"
    DEFAULT = "default"


class SoundPlayer(Protocol):
    """Port for playing the notification sound."""

    def play(self) -> None:
        """Start playback. May raise; callers ignore failures."""


class PlatformNotifier(Protocol):
    """Port for native desktop/browser notifications."""

    def permission(self) -> Permission:
        """Return the current permission state without prompting."""

    def request_permission(self) -> Permission:
        """Prompt for permission and return the user's answer. May block."""

    def show(self, title: str, body: str) -> None:
        """Display a native notification."""


class Cancellable(Protocol):
    def cancel(self) -> None:
        """Cancel the pending call. Cancelling twice is a no-op."""


class Scheduler(Protocol):
    """Port for deferred and background execution."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Run callback once after delay seconds."""

    def run_background(self, callback: Callable[[], None]) -> None:
        """Run callback without blocking the caller."""
