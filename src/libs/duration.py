"""
Duration strings

Parses human readable durations such as ``"1 day"``, ``"20m"`` or
``"2.5 hrs"`` into a ``timedelta``. A bare number is milliseconds.
"""

import re
from datetime import timedelta

_SECOND = 1000
_MINUTE = _SECOND * 60
_HOUR = _MINUTE * 60
_DAY = _HOUR * 24
_WEEK = _DAY * 7
_YEAR = _DAY * 365.25

_UNITS = {
    "years": _YEAR, "year": _YEAR, "yrs": _YEAR, "yr": _YEAR, "y": _YEAR,
    "weeks": _WEEK, "week": _WEEK, "w": _WEEK,
    "days": _DAY, "day": _DAY, "d": _DAY,
    "hours": _HOUR, "hour": _HOUR, "hrs": _HOUR, "hr": _HOUR, "h": _HOUR,
    "minutes": _MINUTE, "minute": _MINUTE, "mins": _MINUTE, "min": _MINUTE, "m": _MINUTE,
    "seconds": _SECOND, "second": _SECOND, "secs": _SECOND, "sec": _SECOND, "s": _SECOND,
    "milliseconds": 1, "millisecond": 1, "msecs": 1, "msec": 1, "ms": 1,
}

_DURATION_RE = re.compile(r"^(-?(?:\d+)?\.?\d+)\s*([a-z]*)$", re.IGNORECASE)


def parse_duration(value) -> timedelta:
    """
    Convert a duration string (or a number of milliseconds) to a timedelta.

    Raises:
        ValueError: the value is empty, negative or uses an unknown unit
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        millis = float(value)
    else:
        text = str(value).strip()
        match = _DURATION_RE.match(text)
        if not text or match is None:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        unit = unit.lower() or "ms"
        if unit not in _UNITS:
            raise ValueError(f"Unknown duration unit '{unit}' in {value!r}")
        millis = float(amount) * _UNITS[unit]

    if millis <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return timedelta(milliseconds=millis)
