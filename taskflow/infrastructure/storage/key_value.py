"""Durable key-value stores for user preferences.

The notification sink only needs get/set of JSON values by key. Two
implementations: an in-memory store (tests, ephemeral sessions) and a
single JSON file holding every key.
"""

import logging
from pathlib import Path
from threading import Lock
from typing import Any, Protocol

from taskflow.domain.shared.result import Err, Ok, Result

from .json_storage import JsonStorage

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Port for durable key-value persistence."""

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if the key is absent."""

    def set(self, key: str, value: Any) -> Result[None, str]:
        """Store a JSON-serialisable value under key."""


class MemoryStore:
    """Key-value store kept in a plain dict."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> Result[None, str]:
        self._data[key] = value
        return Ok(None)


class JsonFileStore:
    """Key-value store backed by one JSON object on disk.

    The file is read lazily on first access and rewritten in full on
    every set.
    """

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the store.

        Args:
            path: JSON file holding the key-value object.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._path = path
        self._storage = storage or JsonStorage()
        self._data: dict[str, Any] | None = None
        self._lock = Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _loaded(self) -> dict[str, Any]:
        if self._data is None:
            result = self._storage.load_json(self._path)
            if isinstance(result, Ok) and isinstance(result.value, dict):
                self._data = result.value
            else:
                if isinstance(result, Err) and self._path.exists():
                    logger.warning(f"Ignoring unreadable preferences: {result.error}")
                self._data = {}
        return self._data

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._loaded().get(key)

    def set(self, key: str, value: Any) -> Result[None, str]:
        with self._lock:
            data = self._loaded()
            data[key] = value
            return self._storage.save_json(self._path, data)
