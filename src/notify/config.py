"""Configuration model for desktop phase-transition notifications."""

from dataclasses import dataclass


class NotifierConfigurationError(Exception):
    """Raised when notification configuration is invalid."""


@dataclass(frozen=True)
class NotifierConfig:
    """Resolved desktop notification options."""
    app_name: str = "Break Alarm"
    timeout_seconds: int = 5

    def __post_init__(self) -> None:
        if not self.app_name.strip():
            raise NotifierConfigurationError("notifications.app_name cannot be empty")
        if self.timeout_seconds < 0:
            raise NotifierConfigurationError(
                f"notifications.timeout_seconds must be >= 0, got: {self.timeout_seconds}"
            )

    @classmethod
    def from_settings(cls, settings) -> "NotifierConfig":
        return cls(
            app_name=(settings.app_name or "").strip(),
            timeout_seconds=settings.timeout_seconds,
        )
