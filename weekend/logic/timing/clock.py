"""Clock arithmetic on "HH:MM" strings.

All times are minute offsets within a single day [0, 1440). Arithmetic that
runs past midnight wraps silently: an activity starting at 23:00 with a
duration of 120 minutes ends at "01:00". Callers must not assume
end > start lexicographically.
"""
import re

from weekend.utilities.constants import MINUTES_PER_DAY

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidTimeFormat(ValueError):
    """Raised when a time string is not a valid 24-hour "HH:MM" value."""


def time_to_minutes(time: str) -> int:
    """Convert "HH:MM" to minutes since midnight, in [0, 1440)."""
    match = TIME_PATTERN.match(time) if isinstance(time, str) else None
    if not match:
        raise InvalidTimeFormat(f"Invalid time format: {time!r} (expected HH:MM)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(f"Time out of range: {time!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format a minute offset as zero-padded "HH:MM", wrapping modulo one day."""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def calculate_end_time(start_time: str, duration: int) -> str:
    return minutes_to_time(time_to_minutes(start_time) + duration)


__all__ = ["InvalidTimeFormat", "time_to_minutes", "minutes_to_time", "calculate_end_time", "TIME_PATTERN"]
