from .controller import (
    BreakDisplay,
    BreakTimerController,
    Notifier,
    TimerEvent,
    TimerObserver,
    TimerSnapshot,
    break_notification_text,
)
from .settings import BreakSettings, merge_settings
from .settings_store import JsonSettingsStore

__all__ = [
    "BreakDisplay",
    "BreakSettings",
    "BreakTimerController",
    "JsonSettingsStore",
    "Notifier",
    "TimerEvent",
    "TimerObserver",
    "TimerSnapshot",
    "break_notification_text",
    "merge_settings",
]
