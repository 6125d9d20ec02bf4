"""Configuration model for static UI and websocket server runtime."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


WEBSOCKET_PATH = "/ws"
ROOT_PATH = "/"
INDEX_PATH = "/index.html"
BREAK_PATH = "/break"
HEALTHZ_PATH = "/healthz"
INDEX_FILE_NAME = "index.html"
BREAK_FILE_NAME = "break.html"


def _default_ui_root() -> Path:
    base_dir = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parents[2]))
    return base_dir / "web_ui"


@dataclass(frozen=True)
class UIServerConfig:
    """Validated UI server configuration derived from app settings."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    ui_root: str = ""
    open_browser: bool = False

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("ui_server.host cannot be empty")

        if not 1 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"ui_server.port must be in [1, 65535], got: {self.port}"
            )

        if self.enabled:
            if not self.ui_root:
                raise ServerConfigurationError("ui_server.ui_root cannot be empty")

            root = Path(self.ui_root)
            if not root.is_dir():
                raise ServerConfigurationError(f"UI root directory not found: {root}")
            for name in (INDEX_FILE_NAME, BREAK_FILE_NAME):
                if not (root / name).is_file():
                    raise ServerConfigurationError(f"UI page not found: {root / name}")

    @property
    def websocket_path(self) -> str:
        return WEBSOCKET_PATH

    @property
    def index_file(self) -> Path:
        return Path(self.ui_root) / INDEX_FILE_NAME

    @property
    def break_file(self) -> Path:
        return Path(self.ui_root) / BREAK_FILE_NAME

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def break_url(self) -> str:
        return f"{self.base_url}{BREAK_PATH}"

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        ui_root = settings.ui_root.strip() if settings.ui_root else ""
        if not ui_root:
            ui_root = str(_default_ui_root())
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host,
            port=settings.port,
            ui_root=ui_root,
            open_browser=bool(getattr(settings, "open_browser", False)),
        )
