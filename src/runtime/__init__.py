"""Runtime engine exports."""

from .break_display import WebBreakDisplay
from .commands import RuntimeCommandDispatcher
from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from .ui import RuntimeUIPublisher

__all__ = [
    "RuntimeBootstrap",
    "RuntimeCommandDispatcher",
    "RuntimeEngine",
    "RuntimeHooks",
    "RuntimeUIPublisher",
    "WebBreakDisplay",
]
