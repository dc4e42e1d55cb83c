"""Platform side effects: sound, native notifications, timers."""

from taskflow.infrastructure.platform.adapters import (
    TerminalBell,
    TerminalNotifier,
    TimerScheduler,
)
from taskflow.infrastructure.platform.ports import (
    Cancellable,
    Permission,
    PlatformNotifier,
    Scheduler,
    SoundPlayer,
)

__all__ = [
    # Ports
    "Permission",
    "SoundPlayer",
    "PlatformNotifier",
    "Scheduler",
    "Cancellable",
    # Adapters
    "TerminalBell",
    "TerminalNotifier",
    "TimerScheduler",
]
