"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    BreakDisplaySettings,
    LoggingSettings,
    NotificationSettings,
    TimerSettings,
    UIServerSettings,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        timer=_parse_timer_settings(_section(raw, "timer"), base_dir=base_dir),
        notifications=_parse_notification_settings(_section(raw, "notifications")),
        break_display=_parse_break_display_settings(_section(raw, "break_display")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_timer_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> TimerSettings:
    # Durations are only type-checked here; range clamping belongs to the controller.
    settings_file = _as_str(section.get("settings_file", ""), "timer.settings_file")
    pulse_interval_ms = _as_int(
        section.get("pulse_interval_ms", 200),
        "timer.pulse_interval_ms",
    )
    if pulse_interval_ms <= 0:
        raise AppConfigurationError("timer.pulse_interval_ms must be greater than zero.")
    return TimerSettings(
        work_minutes=_as_float(section.get("work_minutes", 20), "timer.work_minutes"),
        break_seconds=_as_float(section.get("break_seconds", 20), "timer.break_seconds"),
        auto_start_next=_as_bool(
            section.get("auto_start_next", True),
            "timer.auto_start_next",
        ),
        pulse_interval_ms=pulse_interval_ms,
        settings_file=_resolve_path(base_dir, settings_file),
    )


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", True), "notifications.enabled"),
        app_name=_as_str(
            section.get("app_name", "Break Alarm"),
            "notifications.app_name",
        ),
        timeout_seconds=_as_int(
            section.get("timeout_seconds", 5),
            "notifications.timeout_seconds",
        ),
    )


def _parse_break_display_settings(section: Mapping[str, Any]) -> BreakDisplaySettings:
    return BreakDisplaySettings(
        enabled=_as_bool(section.get("enabled", True), "break_display.enabled"),
        open_browser=_as_bool(
            section.get("open_browser", True),
            "break_display.open_browser",
        ),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    ui_root = _as_str(section.get("ui_root", ""), "ui_server.ui_root")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        ui_root=_resolve_path(base_dir, ui_root),
        open_browser=_as_bool(
            section.get("open_browser", False),
            "ui_server.open_browser",
        ),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a number.") from error
    raise AppConfigurationError(f"{field} must be a number.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
