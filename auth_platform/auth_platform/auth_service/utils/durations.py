"""
Parsing of human-readable durations such as "1h" or "30m".

Accepts the same shapes as the JavaScript ``ms`` package that token expiry
strings are traditionally written in, except that a bare number means
seconds rather than milliseconds.
"""
import math
import re

_MS_PER_UNIT = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
    "y": 365.25 * 24 * 60 * 60 * 1000,
}

_UNIT_ALIASES = {
    "milliseconds": "ms", "millisecond": "ms", "msecs": "ms", "msec": "ms", "ms": "ms",
    "seconds": "s", "second": "s", "secs": "s", "sec": "s", "s": "s",
    "minutes": "m", "minute": "m", "mins": "m", "min": "m", "m": "m",
    "hours": "h", "hour": "h", "hrs": "h", "hr": "h", "h": "h",
    "days": "d", "day": "d", "d": "d",
    "weeks": "w", "week": "w", "w": "w",
    "years": "y", "year": "y", "yrs": "y", "yr": "y", "y": "y",
}

_DURATION_RE = re.compile(r"^(\d*\.?\d+) *([a-z]+)?$", re.IGNORECASE)


def parse_duration(value) -> int:
    """
    Convert a duration into whole seconds.

    Args:
        value: An int (seconds) or a string like "3600", "90s", "15m", "1h", "7 days"

    Returns:
        Number of seconds, rounded down

    Raises:
        ValueError: If the value cannot be parsed or is shorter than one second
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")

    if isinstance(value, (int, float)):
        seconds = math.floor(value)
    else:
        match = _DURATION_RE.match(str(value).strip())
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")

        amount, unit = match.groups()
        if unit is None:
            seconds = math.floor(float(amount))
        else:
            key = _UNIT_ALIASES.get(unit.lower())
            if key is None:
                raise ValueError(f"Unknown duration unit '{unit}' in {value!r}")
            seconds = math.floor(float(amount) * _MS_PER_UNIT[key] / 1000)

    if seconds < 1:
        raise ValueError(f"Duration must be at least one second, got {value!r}")
    return seconds
