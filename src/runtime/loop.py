"""Heartbeat loop that pulses the timer and applies view commands in order."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional

from break_timer import BreakTimerController, JsonSettingsStore
from break_timer.constants import DEFAULT_PULSE_INTERVAL_MS
from server import UIServer

from .break_display import WebBreakDisplay
from .commands import RuntimeCommandDispatcher
from .messages import status_message
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup."""
    setup_signal_handlers: Callable[["RuntimeEngine"], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    controller: BreakTimerController
    ui: RuntimeUIPublisher
    ui_server: Optional[UIServer]
    break_display: Optional[WebBreakDisplay]
    settings_store: Optional[JsonSettingsStore]
    hooks: RuntimeHooks
    pulse_interval_ms: int = DEFAULT_PULSE_INTERVAL_MS


class RuntimeEngine:
    """Single thread of control for every timer mutation.

    The UI server thread only enqueues commands through `submit_command`;
    this loop drains every queued command between pulses, so a command always
    lands before the next pulse computes elapsed time. Pulses read the
    controller's own clock.
    """

    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._controller = bootstrap.controller
        self._clock = bootstrap.controller.clock
        self._pulse_interval = max(1, bootstrap.pulse_interval_ms) / 1000.0
        self._commands: Queue[dict[str, Any]] = Queue()
        self._stop_requested = threading.Event()

        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            controller=self._controller,
            ui=bootstrap.ui,
        )
        self._controller.subscribe(bootstrap.ui.handle_timer_event)
        if bootstrap.settings_store is not None:
            self._controller.subscribe(bootstrap.settings_store.handle_event)
        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_sink(self.submit_command)

    def submit_command(self, command: dict[str, Any]) -> None:
        """Thread-safe entry point for commands coming from views."""
        self._commands.put(command)

    def stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        self._publish_startup_sync()

        try:
            self._bootstrap.hooks.setup_signal_handlers(self)
            self._logger.info("Ready: %s", status_message(self._controller.get_state()))

            next_pulse = self._clock()
            while not self._stop_requested.is_set():
                timeout = max(0.0, next_pulse - self._clock())
                try:
                    command = self._commands.get(timeout=timeout)
                except Empty:
                    command = None
                if command is not None:
                    self._dispatch(command)
                    self.drain_commands()

                now = self._clock()
                if now >= next_pulse:
                    self.pulse(now)
                    next_pulse = now + self._pulse_interval

            self._logger.info("Stop requested.")
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def pulse(self, now_seconds: float) -> None:
        self._controller.on_pulse(int(now_seconds * 1000))

    def drain_commands(self) -> int:
        """Apply every queued command without blocking; returns how many ran."""
        handled = 0
        while True:
            try:
                command = self._commands.get_nowait()
            except Empty:
                return handled
            self._dispatch(command)
            handled += 1

    def _dispatch(self, command: dict[str, Any]) -> None:
        try:
            self._dispatcher.handle_command(command)
        except Exception as error:
            self._logger.error("Command %r failed: %s", command, error, exc_info=True)
            self._bootstrap.ui.publish_error(f"Command failed: {error}")

    def _publish_startup_sync(self) -> None:
        self._bootstrap.ui.publish_snapshot(self._controller.get_state())
        if self._bootstrap.break_display is not None:
            self._bootstrap.break_display.sync()

    def _shutdown(self) -> None:
        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
