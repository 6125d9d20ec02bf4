"""In-memory work/break state machine driven by heartbeat pulses."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol

from .constants import (
    EVENT_PHASE,
    EVENT_RUNNING,
    EVENT_SETTINGS,
    EVENT_TICK,
    PHASE_BREAK,
    PHASE_LABELS,
    PHASE_WORK,
)
from .settings import BreakSettings, merge_settings


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable copy of timer state handed to observers and query callers."""
    phase: str
    remaining_ms: int
    running: bool
    settings: BreakSettings

    @property
    def phase_label(self) -> str:
        return PHASE_LABELS.get(self.phase, self.phase)

    @property
    def duration_ms(self) -> int:
        return self.settings.duration_ms(self.phase)

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "phase_label": self.phase_label,
            "remaining_ms": self.remaining_ms,
            "running": self.running,
            "settings": self.settings.to_dict(),
        }


@dataclass(frozen=True)
class TimerEvent:
    """State-change notification delivered to every registered observer."""
    kind: str
    snapshot: TimerSnapshot

    def payload(self) -> dict[str, Any]:
        if self.kind == EVENT_RUNNING:
            return {"running": self.snapshot.running}
        if self.kind == EVENT_SETTINGS:
            return {"settings": self.snapshot.settings.to_dict()}
        return self.snapshot.to_dict()


TimerObserver = Callable[[TimerEvent], None]


class BreakDisplay(Protocol):
    def open(self) -> None:
        ...

    def close(self) -> None:
        ...


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None:
        ...


def _monotonic() -> float:
    return time.monotonic()


def break_notification_text(phase: str, settings: BreakSettings) -> tuple[str, str]:
    """Return the (title, body) announced when `phase` begins."""
    if phase == PHASE_BREAK:
        return (
            "Time for a break",
            f"Rest for {settings.break_seconds} seconds. Relax your eyes and neck.",
        )
    return ("Break is over", "Starting a new round of focused work.")


class BreakTimerController:
    """Owns settings and timer state and is their only mutator.

    Not thread-safe: every command and pulse must come from the same thread.
    Collaborator failures are logged and swallowed so timer progression never
    stops because a view or notification backend went away.
    """

    def __init__(
        self,
        *,
        settings: Optional[BreakSettings] = None,
        break_display: Optional[BreakDisplay] = None,
        notifier: Optional[Notifier] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._settings = settings or BreakSettings()
        self._clock = clock or _monotonic
        self._break_display = break_display
        self._notifier = notifier
        self._logger = logger or logging.getLogger("break_timer")
        self._observers: list[TimerObserver] = []

        self._phase = PHASE_WORK
        self._remaining_ms = self._settings.work_duration_ms
        self._running = False
        self._last_pulse_ms = 0

    @property
    def clock(self) -> Callable[[], float]:
        """Monotonic seconds source shared with whatever drives `on_pulse`."""
        return self._clock

    def now_ms(self) -> int:
        return int(self._clock() * 1000)

    def subscribe(self, observer: TimerObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: TimerObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def get_state(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            remaining_ms=self._remaining_ms,
            running=self._running,
            settings=self._settings,
        )

    def get_settings(self) -> BreakSettings:
        return self._settings

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._last_pulse_ms = self.now_ms()
        self._logger.info(
            "Timer started: phase=%s remaining=%sms", self._phase, self._remaining_ms
        )
        self._emit(EVENT_RUNNING)

    def pause(self) -> None:
        if not self._running:
            return
        self._running = False
        self._logger.info(
            "Timer paused: phase=%s remaining=%sms", self._phase, self._remaining_ms
        )
        self._emit(EVENT_RUNNING)

    def reset(self) -> None:
        self.pause()
        self._phase = PHASE_WORK
        self._remaining_ms = self._settings.work_duration_ms
        self._logger.info("Timer reset to work phase")
        self._close_break_display()
        self._emit(EVENT_PHASE)

    def skip_to_phase(self, phase: str) -> None:
        if phase not in (PHASE_WORK, PHASE_BREAK):
            self._logger.warning("Ignoring skip to unknown phase: %s", phase)
            return
        self._logger.info("Skipping to %s phase", phase)
        self._enter_phase(phase)

    def skip_to_break(self) -> None:
        self.skip_to_phase(PHASE_BREAK)

    def skip_to_work(self) -> None:
        self.skip_to_phase(PHASE_WORK)

    def update_settings(self, partial: Mapping[str, Any]) -> BreakSettings:
        self._settings = merge_settings(self._settings, partial)
        # Shortening a phase truncates the countdown; lengthening never adds time back.
        self._remaining_ms = min(
            self._remaining_ms,
            self._settings.duration_ms(self._phase),
        )
        self._logger.info(
            "Settings updated: work=%smin break=%ss auto_start_next=%s",
            self._settings.work_minutes,
            self._settings.break_seconds,
            self._settings.auto_start_next,
        )
        self._emit(EVENT_SETTINGS)
        self._emit(EVENT_TICK)
        return self._settings

    def on_pulse(self, now_ms: float) -> None:
        now = int(now_ms)
        if not self._running:
            self._last_pulse_ms = now
            return

        elapsed = max(0, now - self._last_pulse_ms)
        self._last_pulse_ms = now
        self._remaining_ms -= elapsed
        if self._remaining_ms <= 0:
            next_phase = PHASE_BREAK if self._phase == PHASE_WORK else PHASE_WORK
            self._enter_phase(next_phase)
            return

        self._emit(EVENT_TICK)

    def _enter_phase(self, phase: str) -> None:
        was_running = self._running
        self._phase = phase
        self._remaining_ms = self._settings.duration_ms(phase)
        if not self._settings.auto_start_next:
            self._running = False

        self._logger.info(
            "Entered %s phase: remaining=%sms running=%s",
            phase,
            self._remaining_ms,
            self._running,
        )
        self._emit(EVENT_PHASE)
        if was_running and not self._running:
            self._emit(EVENT_RUNNING)

        if phase == PHASE_BREAK:
            self._open_break_display()
        else:
            self._close_break_display()

        title, body = break_notification_text(phase, self._settings)
        self._notify(title, body)

    def _emit(self, kind: str) -> None:
        event = TimerEvent(kind=kind, snapshot=self.get_state())
        for observer in tuple(self._observers):
            try:
                observer(event)
            except Exception as error:
                self._logger.warning("Observer failed on %s event: %s", kind, error)

    def _open_break_display(self) -> None:
        if self._break_display is None:
            return
        try:
            self._break_display.open()
        except Exception as error:
            self._logger.warning("Break display could not be opened: %s", error)

    def _close_break_display(self) -> None:
        if self._break_display is None:
            return
        try:
            self._break_display.close()
        except Exception as error:
            self._logger.warning("Break display could not be closed: %s", error)

    def _notify(self, title: str, body: str) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(title, body)
        except Exception as error:
            self._logger.warning("Notification failed: %s", error)
