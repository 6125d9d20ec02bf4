"""Web UI websocket event and command constants."""

from __future__ import annotations

from break_timer.constants import EVENT_PHASE, EVENT_RUNNING, EVENT_SETTINGS, EVENT_TICK

# Websocket event types (server -> view)
EVENT_HELLO = "hello"
EVENT_TIMER_TICK = EVENT_TICK
EVENT_TIMER_PHASE = EVENT_PHASE
EVENT_TIMER_RUNNING = EVENT_RUNNING
EVENT_TIMER_SETTINGS = EVENT_SETTINGS
EVENT_BREAK_DISPLAY = "break_display"
EVENT_ERROR = "error"

# View commands (view -> server)
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESET = "reset"
COMMAND_SKIP_TO_BREAK = "skip_to_break"
COMMAND_SKIP_TO_WORK = "skip_to_work"
COMMAND_UPDATE_SETTINGS = "update_settings"
COMMAND_GET_STATE = "get_state"
COMMAND_GET_SETTINGS = "get_settings"

COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_RESET,
        COMMAND_SKIP_TO_BREAK,
        COMMAND_SKIP_TO_WORK,
        COMMAND_UPDATE_SETTINGS,
        COMMAND_GET_STATE,
        COMMAND_GET_SETTINGS,
    }
)

# Sticky events are cached per slot and replayed to new views in the order they
# were last published. Tick and phase both carry a full snapshot, so they share
# a slot and only the newest survives.
STICKY_EVENT_SLOTS: dict[str, str] = {
    EVENT_TIMER_TICK: "snapshot",
    EVENT_TIMER_PHASE: "snapshot",
    EVENT_TIMER_RUNNING: "running",
    EVENT_TIMER_SETTINGS: "settings",
    EVENT_BREAK_DISPLAY: "break_display",
}
