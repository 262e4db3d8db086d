"""Minutes-of-day helpers and boundary conversions."""
from __future__ import annotations

import re
from datetime import date

from smartstudy.services.scheduling.types import LAST_MINUTE, TimeOfDay

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def time_to_minutes(value: str) -> int:
    """Parse a 24-hour ``"HH:MM"`` string into minutes after midnight."""
    match = _HHMM.match(value.strip()) if value else None
    if not match:
        raise ValueError(f"Invalid time string {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time string {value!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes after midnight as zero-padded ``"HH:MM"``."""
    if not 0 <= minutes <= LAST_MINUTE:
        raise ValueError(f"Minute {minutes} outside 0-{LAST_MINUTE}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_index(day: date) -> int:
    """Return 0 for Sunday through 6 for Saturday."""
    return (day.weekday() + 1) % 7


def time_of_day(minute: int) -> TimeOfDay:
    hour = minute // 60
    if 5 <= hour < 8:
        return TimeOfDay.EARLY_MORNING
    if 8 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 17:
        return TimeOfDay.AFTERNOON
    if 17 <= hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def round_to_step(value: float, step: int = 5) -> int:
    """Round half-up to the nearest multiple of ``step``."""
    return int((value / step) + 0.5) * step
