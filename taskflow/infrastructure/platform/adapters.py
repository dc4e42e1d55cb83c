"""Concrete platform adapters.

Terminal-friendly implementations of the platform ports: a bell for
sound, a notifier that echoes to the terminal, and a scheduler built on
threading.Timer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock, Thread, Timer
from uuid import uuid4

import typer

from .ports import Permission

logger = logging.getLogger(__name__)


class TerminalBell:
    """Rings the terminal bell."""

    def play(self) -> None:
        typer.echo("\a", nl=False)


class TerminalNotifier:
    """Platform notifier that prints notifications to the terminal.

    Permission is fixed at construction; a DEFAULT permission is resolved
    to ``grant_on_request`` the first time it is requested.
    """

    def __init__(self, permission: Permission = Permission.DEFAULT, grant_on_request: bool = True) -> None:
        self._permission = permission
        self._grant_on_request = grant_on_request

    def permission(self) -> Permission:
        return self._permission

    def request_permission(self) -> Permission:
        if self._permission == Permission.DEFAULT:
            self._permission = Permission.GRANTED if self._grant_on_request else Permission.DENIED
        return self._permission

    def show(self, title: str, body: str) -> None:
        typer.echo(typer.style(f"[{title}] {body}", fg=typer.colors.CYAN))


class _TimerHandle:
    __slots__ = ("_scheduler", "_timer_id")

    def __init__(self, scheduler: TimerScheduler, timer_id: str) -> None:
        self._scheduler = scheduler
        self._timer_id = timer_id

    def cancel(self) -> None:
        self._scheduler.cancel(self._timer_id)


class TimerScheduler:
    """Scheduler backed by daemon threading.Timer instances.

    Every pending timer is tracked so close() can cancel them all.
    """

    __slots__ = ("_timers", "_lock")

    def __init__(self) -> None:
        self._timers: dict[str, Timer] = {}
        self._lock = Lock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        timer_id = str(uuid4())
        timer = Timer(max(0.0, delay), self._fire, args=(timer_id, callback))
        timer.daemon = True

        with self._lock:
            self._timers[timer_id] = timer

        timer.start()
        return _TimerHandle(self, timer_id)

    def cancel(self, timer_id: str) -> None:
        with self._lock:
            timer = self._timers.pop(timer_id, None)
        if timer is not None:
            timer.cancel()

    def run_background(self, callback: Callable[[], None]) -> None:
        Thread(target=callback, daemon=True).start()

    def close(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()

    def _fire(self, timer_id: str, callback: Callable[[], None]) -> None:
        with self._lock:
            self._timers.pop(timer_id, None)
        callback()
