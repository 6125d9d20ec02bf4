"""Dispatcher that applies view commands to the break timer controller."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from break_timer import BreakTimerController
from contracts.ui_protocol import (
    COMMAND_GET_SETTINGS,
    COMMAND_GET_STATE,
    COMMAND_NAMES,
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SKIP_TO_BREAK,
    COMMAND_SKIP_TO_WORK,
    COMMAND_START,
    COMMAND_UPDATE_SETTINGS,
    EVENT_TIMER_SETTINGS,
)

from .ui import RuntimeUIPublisher


class RuntimeCommandDispatcher:
    """Routes `{"command": ...}` mappings to controller operations."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        controller: BreakTimerController,
        ui: RuntimeUIPublisher,
    ):
        self._logger = logger
        self._controller = controller
        self._ui = ui

    def handle_command(self, command: Mapping[str, Any]) -> bool:
        """Apply one command; returns False when it was not recognised."""
        name = command.get("command")
        if not isinstance(name, str):
            self._logger.warning("Ignoring command without a name: %r", command)
            return False
        if name not in COMMAND_NAMES:
            self._logger.warning("Unsupported command: %s", name)
            self._ui.publish_error(f"Unsupported command: {name}")
            return False

        controller = self._controller
        if name == COMMAND_START:
            controller.start()
        elif name == COMMAND_PAUSE:
            controller.pause()
        elif name == COMMAND_RESET:
            controller.reset()
        elif name == COMMAND_SKIP_TO_BREAK:
            controller.skip_to_break()
        elif name == COMMAND_SKIP_TO_WORK:
            controller.skip_to_work()
        elif name == COMMAND_UPDATE_SETTINGS:
            raw_settings = command.get("settings")
            partial = raw_settings if isinstance(raw_settings, Mapping) else {}
            controller.update_settings(partial)
        elif name == COMMAND_GET_STATE:
            self._ui.publish_snapshot(controller.get_state())
        elif name == COMMAND_GET_SETTINGS:
            self._ui.publish(
                EVENT_TIMER_SETTINGS,
                settings=controller.get_settings().to_dict(),
            )

        self._logger.debug("Handled command: %s", name)
        return True
