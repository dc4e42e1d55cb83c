"""Notification delivery service.

The sink turns notification requests into on-screen entries, subject to
the user's preferences, and keeps a capped history of what was shown.
Settings and history are read from the injected store at construction
and written back on every change.

Every displayed entry expires on its own timer. Expiry timers run on
other threads, so the live queue and history share one lock.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from threading import Lock
from typing import Any
from uuid import uuid4

from taskflow.domain.notification import (
    DUE_SOON_DAYS,
    DisplayEntry,
    HistoryEntry,
    NotificationSettings,
    NotifyOptions,
    derive_task_notifications,
)
from taskflow.domain.task import Task
from taskflow.infrastructure.platform import (
    Cancellable,
    Permission,
    PlatformNotifier,
    Scheduler,
    SoundPlayer,
    TimerScheduler,
)
from taskflow.infrastructure.storage import KeyValueStore, PreferencesRepository

logger = logging.getLogger(__name__)

EXPIRY_SECONDS = 5.0
HISTORY_LIMIT = 50
NOTIFICATION_TITLE = "Taskflow"


class NotificationSink:
    """Delivers notifications to the live queue, history and platform.

    Example:
        sink = NotificationSink(MemoryStore())
        entry_id = sink.notify("Report is due today")
        sink.dismiss(entry_id)
    """

    def __init__(
        self,
        store: KeyValueStore,
        sound_player: SoundPlayer | None = None,
        platform_notifier: PlatformNotifier | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] | None = None,
        expiry_seconds: float = EXPIRY_SECONDS,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        """Initialize the sink and load persisted preferences.

        Args:
            store: Durable key-value store for settings and history.
            sound_player: Plays the alert sound. No sound if not provided.
            platform_notifier: Native notifications. None disables them.
            scheduler: Runs expiry timers and permission prompts.
                Creates a TimerScheduler if not provided.
            clock: Source of history timestamps. Defaults to UTC now.
            expiry_seconds: How long an entry stays on screen.
            history_limit: Maximum number of history entries kept.
        """
        self._repository = PreferencesRepository(store)
        self._sound_player = sound_player
        self._platform_notifier = platform_notifier
        self._scheduler = scheduler or TimerScheduler()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._expiry_seconds = expiry_seconds
        self._history_limit = history_limit

        self._lock = Lock()
        self._settings = self._repository.load_settings()
        self._history = self._repository.load_history()[:history_limit]
        self._queue: list[DisplayEntry] = []
        self._expiries: dict[str, Cancellable] = {}

    # =========================================================================
    # State
    # =========================================================================

    @property
    def settings(self) -> NotificationSettings:
        with self._lock:
            return self._settings.model_copy()

    @property
    def notifications(self) -> list[DisplayEntry]:
        """Entries currently on screen, oldest first."""
        with self._lock:
            return list(self._queue)

    @property
    def history(self) -> list[HistoryEntry]:
        """Shown notifications, newest first."""
        with self._lock:
            return list(self._history)

    def update_settings(self, **changes: Any) -> NotificationSettings:
        """Merge changes over the current settings and persist them.

        Args:
            **changes: Any of sound, browser_push, mute.

        Returns:
            The updated settings.

        Raises:
            ValueError: If a key is not a known setting.
            pydantic.ValidationError: If a value has the wrong type.
        """
        unknown = set(changes) - set(NotificationSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown notification settings: {sorted(unknown)}")
        with self._lock:
            merged = NotificationSettings.model_validate({**self._settings.model_dump(), **changes})
            self._settings = merged
        self._repository.save_settings(merged)
        return merged.model_copy()

    def clear_history(self) -> None:
        with self._lock:
            self._history = []
        self._repository.save_history([])

    # =========================================================================
    # Delivery
    # =========================================================================

    def notify(
        self,
        message: str,
        options: NotifyOptions | Mapping[str, Any] | None = None,
    ) -> str | None:
        """Show a notification.

        Muted settings turn this into a no-op. Otherwise the entry is
        queued for display, recorded in history, and the sound and native
        notification side effects run according to settings.

        Args:
            message: Text to show.
            options: related_entity_id and on_activate; other keys are dropped.

        Returns:
            Id of the displayed entry, or None when muted.
        """
        if options is None:
            options = NotifyOptions()
        elif not isinstance(options, NotifyOptions):
            options = NotifyOptions.model_validate(dict(options))

        with self._lock:
            settings = self._settings.model_copy()
            if settings.mute:
                return None

            entry_id = str(uuid4())
            self._queue.append(
                DisplayEntry(
                    id=entry_id,
                    message=message,
                    related_entity_id=options.related_entity_id,
                    on_activate=options.on_activate,
                )
            )
            record = HistoryEntry(
                id=entry_id,
                message=message,
                timestamp=self._clock(),
                related_entity_id=options.related_entity_id,
            )
            self._history = [record, *self._history][: self._history_limit]
            self._repository.save_history(self._history)

        if settings.sound:
            self._play_sound()
        if settings.browser_push:
            self._push(message)

        handle = self._scheduler.call_later(self._expiry_seconds, lambda: self._expire(entry_id))
        with self._lock:
            if any(entry.id == entry_id for entry in self._queue):
                self._expiries[entry_id] = handle
                handle = None
        if handle is not None:
            handle.cancel()
        return entry_id

    def notify_tasks(
        self,
        tasks: list[Task],
        now: datetime,
        due_soon_days: int = DUE_SOON_DAYS,
    ) -> list[str]:
        """Derive due-date alerts for tasks and deliver each one.

        Returns:
            Ids of the displayed entries (empty when muted).
        """
        ids = []
        for notification in derive_task_notifications(tasks, now, due_soon_days):
            entry_id = self.notify(
                notification.message,
                NotifyOptions(related_entity_id=notification.related_task_id),
            )
            if entry_id is not None:
                ids.append(entry_id)
        return ids

    def dismiss(self, entry_id: str) -> None:
        """Remove an entry from the screen. Unknown ids are ignored."""
        with self._lock:
            self._remove(entry_id)
            handle = self._expiries.pop(entry_id, None)
        if handle is not None:
            handle.cancel()

    def activate(self, entry_id: str) -> None:
        """Run an entry's on_activate callback, then dismiss it."""
        with self._lock:
            entry = next((e for e in self._queue if e.id == entry_id), None)
        if entry is not None and entry.on_activate is not None:
            try:
                entry.on_activate()
            except Exception as e:
                logger.error(f"Notification activation handler failed: {e}")
        self.dismiss(entry_id)

    def close(self) -> None:
        """Cancel every pending expiry timer."""
        with self._lock:
            handles = list(self._expiries.values())
            self._expiries.clear()
        for handle in handles:
            handle.cancel()

    # =========================================================================
    # Internals
    # =========================================================================

    def _remove(self, entry_id: str) -> bool:
        # Caller holds the lock
        before = len(self._queue)
        self._queue = [entry for entry in self._queue if entry.id != entry_id]
        return len(self._queue) != before

    def _expire(self, entry_id: str) -> None:
        with self._lock:
            self._expiries.pop(entry_id, None)
            if self._remove(entry_id):
                logger.debug(f"Notification {entry_id} expired")

    def _play_sound(self) -> None:
        if self._sound_player is None:
            return
        try:
            self._sound_player.play()
        except Exception as e:
            logger.debug(f"Notification sound failed: {e}")

    def _push(self, message: str) -> None:
        notifier = self._platform_notifier
        if notifier is None:
            return
        permission = notifier.permission()
        if permission == Permission.GRANTED:
            self._show(notifier, message)
        elif permission == Permission.DEFAULT:
            self._scheduler.run_background(lambda: self._request_and_show(notifier, message))

    def _request_and_show(self, notifier: PlatformNotifier, message: str) -> None:
        try:
            permission = notifier.request_permission()
        except Exception as e:
            logger.warning(f"Notification permission request failed: {e}")
            return
        if permission == Permission.GRANTED:
            self._show(notifier, message)

    def _show(self, notifier: PlatformNotifier, message: str) -> None:
        try:
            notifier.show(NOTIFICATION_TITLE, message)
        except Exception as e:
            logger.warning(f"Native notification failed: {e}")
