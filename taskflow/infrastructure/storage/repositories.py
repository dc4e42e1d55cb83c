"""Repository for notification preferences.

Reads and writes the user's notification settings and shown-notification
history through a KeyValueStore, returning Result types on writes and
falling back to defaults when stored values are missing or corrupt.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from taskflow.domain.notification import HistoryEntry, NotificationSettings
from taskflow.domain.shared.result import Err, Result

from .key_value import KeyValueStore

logger = logging.getLogger(__name__)

SETTINGS_KEY = "notifSettings"
HISTORY_KEY = "notifHistory"
BROWSER_KEY = "browser"

_history_adapter = TypeAdapter(list[HistoryEntry])


class PreferencesRepository:
    """Persistence for NotificationSettings and the history list."""

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize the repository.

        Args:
            store: Key-value store the preferences live in.
        """
        self._store = store

    def load_settings(self) -> NotificationSettings:
        """Load settings, merging stored values over the defaults.

        Returns:
            Stored settings, or defaults if nothing usable is stored.
        """
        raw = self._store.get(SETTINGS_KEY)
        if raw is None:
            return NotificationSettings()
        try:
            return NotificationSettings.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Stored notification settings are invalid, using defaults: {e.error_count()} error(s)")
            return NotificationSettings()

    def save_settings(self, settings: NotificationSettings) -> Result[None, str]:
        """Persist settings.

        ``browser_push`` is stored under ``browser``, the key other clients
        of the same preferences read.
        """
        stored = settings.model_dump(mode="json")
        stored[BROWSER_KEY] = stored.pop("browser_push")
        result = self._store.set(SETTINGS_KEY, stored)
        if isinstance(result, Err):
            logger.error(f"Failed to save notification settings: {result.error}")
        return result

    def load_history(self) -> list[HistoryEntry]:
        """Load history, newest first.

        Entries are validated one at a time; an unusable entry is dropped
        without affecting the rest.

        Returns:
            The usable stored entries, or an empty list if nothing is stored.
        """
        raw = self._store.get(HISTORY_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Stored notification history is not a list, starting empty: {type(raw).__name__}")
            return []

        history: list[HistoryEntry] = []
        for position, item in enumerate(raw):
            try:
                history.append(HistoryEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping stored notification #{position}: {e.error_count()} error(s)")
        return history

    def save_history(self, history: list[HistoryEntry]) -> Result[None, str]:
        """Persist history."""
        result = self._store.set(HISTORY_KEY, _history_adapter.dump_python(history, mode="json"))
        if isinstance(result, Err):
            logger.error(f"Failed to save notification history: {result.error}")
        return result
