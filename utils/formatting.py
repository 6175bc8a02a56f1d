"""
Locale display helpers for distances, elevations and durations.

These helpers are for UI rendering only; the planning engine works on raw
floats.
"""

from __future__ import annotations

import math
from typing import Optional

from babel import numbers
from babel.core import UnknownLocaleError

from config import DEFAULT_LOCALE, MISSING_VALUE

LOCALE = DEFAULT_LOCALE


def set_locale(locale_str: str = DEFAULT_LOCALE) -> None:
    global LOCALE
    try:
        # Validate by formatting a simple number
        numbers.format_decimal(1.0, locale=locale_str)
        LOCALE = locale_str
    except (UnknownLocaleError, ValueError):
        LOCALE = DEFAULT_LOCALE


def _is_number(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def fmt_decimal(value: Optional[float], digits: int = 1) -> str:
    if not _is_number(value):
        return MISSING_VALUE
    fmt = "#,##0" if digits == 0 else "#,##0." + ("0" * digits)
    return numbers.format_decimal(value, format=fmt, locale=LOCALE)


def fmt_km(km: Optional[float]) -> str:
    if not _is_number(km):
        return MISSING_VALUE
    return f"{fmt_decimal(km, 1)} km"


def fmt_m(meters: Optional[float]) -> str:
    if not _is_number(meters):
        return MISSING_VALUE
    return f"{fmt_decimal(round(meters), 0)} m"


def fmt_minutes(minutes: Optional[float]) -> str:
    """Whole minutes, e.g. ``"95 min"``."""
    if not _is_number(minutes):
        return MISSING_VALUE
    return f"{int(round(minutes))} min"


def fmt_pace(min_per_km: Optional[float]) -> str:
    """Pace as ``m:ss /km``."""
    if not _is_number(min_per_km):
        return MISSING_VALUE
    total_seconds = int(round(min_per_km * 60))
    return f"{total_seconds // 60}:{total_seconds % 60:02d} /km"
