"""Public exports for phase-transition notifications."""

from .config import NotifierConfig, NotifierConfigurationError
from .service import DesktopNotifier

__all__ = [
    "DesktopNotifier",
    "NotifierConfig",
    "NotifierConfigurationError",
]
