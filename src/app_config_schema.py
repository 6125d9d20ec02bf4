"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

from break_timer.constants import (
    DEFAULT_AUTO_START_NEXT,
    DEFAULT_BREAK_SECONDS,
    DEFAULT_PULSE_INTERVAL_MS,
    DEFAULT_WORK_MINUTES,
)

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Initial durations and heartbeat tuning from `[timer]`."""
    work_minutes: float = DEFAULT_WORK_MINUTES
    break_seconds: float = DEFAULT_BREAK_SECONDS
    auto_start_next: bool = DEFAULT_AUTO_START_NEXT
    pulse_interval_ms: int = DEFAULT_PULSE_INTERVAL_MS
    settings_file: str = ""


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    app_name: str = "Break Alarm"
    timeout_seconds: int = 5


@dataclass(frozen=True)
class BreakDisplaySettings:
    """Break page behaviour from `[break_display]`."""
    enabled: bool = True
    open_browser: bool = True


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    ui_root: str = ""
    open_browser: bool = False


@dataclass(frozen=True)
class LoggingSettings:
    """Root log level from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings
    notifications: NotificationSettings
    break_display: BreakDisplaySettings
    ui_server: UIServerSettings
    logging: LoggingSettings
    source_file: str
