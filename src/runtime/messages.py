"""Status text builders for timer log lines."""

from __future__ import annotations

import math

from break_timer import TimerSnapshot


def format_remaining(remaining_ms: int) -> str:
    """Format milliseconds as `MM:SS`, rounding partial seconds up."""
    total_seconds = math.ceil(max(0, int(remaining_ms)) / 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def status_message(snapshot: TimerSnapshot) -> str:
    state = "running" if snapshot.running else "paused"
    return f"{snapshot.phase_label}, {format_remaining(snapshot.remaining_ms)} left ({state})"
