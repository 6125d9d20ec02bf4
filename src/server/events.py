"""Utilities for serializing UI events and preserving sticky state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable

from contracts.ui_protocol import STICKY_EVENT_SLOTS


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        slot = STICKY_EVENT_SLOTS.get(event_type)
        if slot is None:
            return
        with self._lock:
            # Re-insert so iteration order follows publish recency.
            self._events.pop(slot, None)
            self._events[slot] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return list(self._events.values())
