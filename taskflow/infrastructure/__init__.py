"""Infrastructure layer for taskflow.

Adapters to the outside world:
- storage: JSON files and key-value stores for user preferences
- platform: sound, native notifications and timers
"""

from taskflow.infrastructure.platform import (
    Permission,
    PlatformNotifier,
    Scheduler,
    SoundPlayer,
    TimerScheduler,
)
from taskflow.infrastructure.storage import (
    JsonFileStore,
    JsonStorage,
    KeyValueStore,
    MemoryStore,
    PreferencesRepository,
)

__all__ = [
    # Storage
    "JsonStorage",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "PreferencesRepository",
    # Platform
    "Permission",
    "SoundPlayer",
    "PlatformNotifier",
    "Scheduler",
    "TimerScheduler",
]
