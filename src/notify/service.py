"""Desktop notification delivery via plyer."""

import logging
from typing import Optional

from plyer import notification

from .config import NotifierConfig


class DesktopNotifier:
    """Fire-and-forget notifier; delivery failures are logged, never raised."""
    def __init__(
        self,
        config: NotifierConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("notify")

    def notify(self, title: str, body: str) -> None:
        try:
            notification.notify(
                title=title,
                message=body,
                app_name=self._config.app_name,
                timeout=self._config.timeout_seconds,
            )
        except Exception as error:
            # NotImplementedError on platforms without a backend.
            self._logger.warning("Desktop notification failed: %s", error)
            return
        self._logger.debug("Notification sent: %s", title)
