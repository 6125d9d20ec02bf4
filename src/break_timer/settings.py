"""Immutable timer settings and the coercion rules applied to partial updates."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from .constants import (
    DEFAULT_AUTO_START_NEXT,
    DEFAULT_BREAK_SECONDS,
    DEFAULT_WORK_MINUTES,
    MAX_BREAK_SECONDS,
    MAX_WORK_MINUTES,
    MIN_BREAK_SECONDS,
    MIN_WORK_MINUTES,
    PHASE_WORK,
)

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class BreakSettings:
    """User-facing durations. Values are always within their clamped ranges."""
    work_minutes: float = DEFAULT_WORK_MINUTES
    break_seconds: float = DEFAULT_BREAK_SECONDS
    auto_start_next: bool = DEFAULT_AUTO_START_NEXT

    @property
    def work_duration_ms(self) -> int:
        return int(round(self.work_minutes * 60 * 1000))

    @property
    def break_duration_ms(self) -> int:
        return int(round(self.break_seconds * 1000))

    def duration_ms(self, phase: str) -> int:
        if phase == PHASE_WORK:
            return self.work_duration_ms
        return self.break_duration_ms

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def merge_settings(current: BreakSettings, partial: Mapping[str, Any]) -> BreakSettings:
    """Apply a partial update on top of `current`, coercing every field.

    Keys absent from `partial` keep their current value. Present keys go
    through the same coercion as a fresh value: non-numeric input and zero
    fall back to the defaults, numbers are clamped to their ranges.
    """
    work_raw = partial["work_minutes"] if "work_minutes" in partial else current.work_minutes
    break_raw = (
        partial["break_seconds"] if "break_seconds" in partial else current.break_seconds
    )
    auto_raw = (
        partial["auto_start_next"]
        if "auto_start_next" in partial
        else current.auto_start_next
    )
    return BreakSettings(
        work_minutes=coerce_number(
            work_raw,
            default=DEFAULT_WORK_MINUTES,
            minimum=MIN_WORK_MINUTES,
            maximum=MAX_WORK_MINUTES,
        ),
        break_seconds=coerce_number(
            break_raw,
            default=DEFAULT_BREAK_SECONDS,
            minimum=MIN_BREAK_SECONDS,
            maximum=MAX_BREAK_SECONDS,
        ),
        auto_start_next=coerce_flag(auto_raw, default=DEFAULT_AUTO_START_NEXT),
    )


def coerce_number(
    value: Any,
    *,
    default: float,
    minimum: float,
    maximum: float,
) -> float:
    number = _parse_number(value)
    if number is None or number == 0:
        number = float(default)
    number = min(float(maximum), max(float(minimum), number))
    if number.is_integer():
        return int(number)
    return number


def coerce_flag(value: Any, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, float) and not math.isnan(value):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


def _parse_number(value: Any) -> float | None:
    # Booleans are not durations.
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number
