from __future__ import annotations

from typing import Any, Optional, Protocol

from break_timer import TimerEvent, TimerSnapshot
from break_timer.constants import EVENT_TICK
from contracts.ui_protocol import EVENT_BREAK_DISPLAY, EVENT_ERROR


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    """Timer observer that forwards controller events to the websocket views."""
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def handle_timer_event(self, event: TimerEvent) -> None:
        self.publish(event.kind, **event.payload())

    def publish_snapshot(self, snapshot: TimerSnapshot) -> None:
        self.publish(EVENT_TICK, **snapshot.to_dict())

    def publish_break_display(self, visible: bool) -> None:
        self.publish(EVENT_BREAK_DISPLAY, visible=visible)

    def publish_error(self, message: str) -> None:
        self.publish(EVENT_ERROR, message=message)
