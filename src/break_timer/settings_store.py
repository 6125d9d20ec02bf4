"""JSON file persistence for user settings across restarts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .constants import EVENT_SETTINGS, SETTINGS_FIELDS
from .controller import TimerEvent
from .settings import BreakSettings


class JsonSettingsStore:
    """Loads and saves settings; never raises on I/O or decode problems."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger("settings_store")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[dict[str, Any]]:
        if not self._path.is_file():
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            self._logger.warning("Ignoring unreadable settings file %s: %s", self._path, error)
            return None
        if not isinstance(raw, dict):
            self._logger.warning("Ignoring settings file %s: root is not an object", self._path)
            return None
        return {key: value for key, value in raw.items() if key in SETTINGS_FIELDS}

    def save(self, settings: BreakSettings) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(settings.to_dict(), indent=2),
                encoding="utf-8",
            )
        except OSError as error:
            self._logger.warning("Failed to save settings to %s: %s", self._path, error)
            return
        self._logger.debug("Saved settings to %s", self._path)

    def handle_event(self, event: TimerEvent) -> None:
        if event.kind == EVENT_SETTINGS:
            self.save(event.snapshot.settings)
