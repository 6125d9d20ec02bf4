"""Phase, event, and settings bound constants used by the break timer."""

from __future__ import annotations

PHASE_WORK = "work"
PHASE_BREAK = "break"

PHASE_LABELS: dict[str, str] = {
    PHASE_WORK: "Working",
    PHASE_BREAK: "On break",
}

EVENT_TICK = "tick"
EVENT_PHASE = "phase"
EVENT_RUNNING = "running"
EVENT_SETTINGS = "settings"

DEFAULT_WORK_MINUTES = 20
DEFAULT_BREAK_SECONDS = 20
DEFAULT_AUTO_START_NEXT = True

MIN_WORK_MINUTES = 1
MAX_WORK_MINUTES = 180
MIN_BREAK_SECONDS = 5
MAX_BREAK_SECONDS = 600

DEFAULT_PULSE_INTERVAL_MS = 200

SETTINGS_FIELDS: frozenset[str] = frozenset(
    {"work_minutes", "break_seconds", "auto_start_next"}
)
