"""Storage infrastructure for taskflow.

Persistence for user preferences, using Result types for explicit error
handling on writes.
"""

from taskflow.infrastructure.storage.json_storage import JsonStorage
from taskflow.infrastructure.storage.key_value import JsonFileStore, KeyValueStore, MemoryStore
from taskflow.infrastructure.storage.repositories import (
    HISTORY_KEY,
    SETTINGS_KEY,
    PreferencesRepository,
)

__all__ = [
    "JsonStorage",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "PreferencesRepository",
    "SETTINGS_KEY",
    "HISTORY_KEY",
]
