"""UI server module for the static web UI and websocket timer events."""

from .config import ServerConfigurationError, UIServerConfig
from .service import CommandSink, UIServer

__all__ = [
    "CommandSink",
    "ServerConfigurationError",
    "UIServerConfig",
    "UIServer",
]
