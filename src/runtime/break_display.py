"""Break display that surfaces the always-on-top break page of the web UI."""

from __future__ import annotations

import logging
import webbrowser
from typing import Callable, Optional

from .ui import RuntimeUIPublisher

BrowserOpener = Callable[[str], object]


class WebBreakDisplay:
    """Shows and hides the break view.

    Visibility is published as a sticky `break_display` event so every view,
    including ones that connect mid-break, knows whether the break page should
    be on screen. On open it can also launch the break page in the system
    browser, once per break.
    """

    def __init__(
        self,
        ui: RuntimeUIPublisher,
        *,
        break_url: Optional[str] = None,
        open_browser: bool = False,
        browser_opener: BrowserOpener = webbrowser.open,
        logger: Optional[logging.Logger] = None,
    ):
        self._ui = ui
        self._break_url = break_url
        self._open_browser = open_browser
        self._browser_opener = browser_opener
        self._logger = logger or logging.getLogger("break_display")
        self._visible = False

    @property
    def is_visible(self) -> bool:
        return self._visible

    def open(self) -> None:
        if self._visible:
            return
        self._visible = True
        self._ui.publish_break_display(True)
        self._logger.info("Break display opened")
        if self._open_browser and self._break_url:
            try:
                self._browser_opener(self._break_url)
            except Exception as error:
                self._logger.warning("Could not launch break page: %s", error)

    def close(self) -> None:
        if not self._visible:
            return
        self._visible = False
        self._ui.publish_break_display(False)
        self._logger.info("Break display closed")

    def sync(self) -> None:
        self._ui.publish_break_display(self._visible)
