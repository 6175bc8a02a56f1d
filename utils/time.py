"""Clock time helpers for start times, arrival times and ETAs."""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any, Optional

from config import MINUTES_PER_DAY, MISSING_CLOCK
from utils.coercion import safe_float

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?$")
_CLOCK_EPSILON = 1e-6


def parse_clock_minutes(value: Any) -> Optional[int]:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) clock value into minutes after midnight.

    Accepts strings and ``datetime.time``/``datetime.datetime`` values. Seconds
    are ignored. Returns None for empty or unparsable values.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        value = value.time()
    if isinstance(value, dt.time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        return None
    match = _CLOCK_RE.match(value.strip())
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def format_clock(minutes_from_start: Optional[float], start_minutes: Optional[float]) -> str:
    """Render ``start + minutes_from_start`` as a wall-clock ``HH:MM``.

    Partial minutes are truncated. The result wraps around midnight; negative
    offsets wrap forward into the day.
    """
    if minutes_from_start is None or start_minutes is None:
        return MISSING_CLOCK
    if not math.isfinite(minutes_from_start) or not math.isfinite(start_minutes):
        return MISSING_CLOCK
    # Epsilon keeps float sums like 59.9999999 on the next minute
    normalized = math.floor(start_minutes + minutes_from_start + _CLOCK_EPSILON) % MINUTES_PER_DAY
    hours, minutes = divmod(normalized, 60)
    return f"{hours:02d}:{minutes:02d}"


def duration_minutes(hours: Any, minutes: Any) -> float:
    """Combine hour and minute fields into a duration in minutes."""
    return safe_float(hours) * 60 + safe_float(minutes)
