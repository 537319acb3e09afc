"""
Duration parsing for cache lifetimes.

Cache durations arrive either as a number of seconds or as a relative
phrase such as ``"+1 hour"``, ``"30 minutes"`` or ``"+2 weeks"``.
"""

import re

from cacher.core.exceptions import InvalidDurationError

_UNIT_SECONDS = {
    "second": 1,
    "sec": 1,
    "minute": 60,
    "min": 60,
    "hour": 3600,
    "day": 86400,
    "week": 7 * 86400,
    "month": 30 * 86400,
    "year": 365 * 86400,
}

# "+1 hour", "1 hour", "+ 30 mins", "2days"
_DURATION_PATTERN = re.compile(
    r"^\+?\s*(\d+)\s*(second|sec|minute|min|hour|day|week|month|year)s?$",
    re.IGNORECASE,
)

# Relative phrases may chain several parts: "+1 day 6 hours"
_PART_SPLIT = re.compile(r"(?<=[a-z])\s+(?=\+?\s*\d)", re.IGNORECASE)


def parse_duration(value: str | int) -> int:
    """Convert a duration to whole seconds.

    Args:
        value: Seconds as an int or digit string, or a relative phrase.

    Returns:
        Duration in seconds.

    Raises:
        InvalidDurationError: If the value cannot be interpreted.
    """
    if isinstance(value, bool):
        raise InvalidDurationError(str(value))
    if isinstance(value, int):
        if value < 0:
            raise InvalidDurationError(str(value))
        return value

    text = value.strip()
    if text.isdigit():
        return int(text)

    if not text:
        raise InvalidDurationError(value)

    total = 0
    for part in _PART_SPLIT.split(text):
        match = _DURATION_PATTERN.match(part.strip())
        if not match:
            raise InvalidDurationError(value)
        amount, unit = match.groups()
        total += int(amount) * _UNIT_SECONDS[unit.lower()]
    return total
