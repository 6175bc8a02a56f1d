"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Type coercion utilities for converting live-edited input values to numbers.

Malformed values degrade to a default instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Optional


def finite_float_optional(value: Any) -> Optional[float]:
    """Convert a value to a finite float, returning None on failure.

    Handles None, empty or blank strings, "NaN" and infinities by returning None.

    Args:
        value: Value to convert (None, str, int, float, numpy scalar, ...)

    Returns:
        Optional[float]: Converted value or None if it is not a finite number
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_float(value: Any, default: float = 0.0) -> float:
    """Convert a value to a finite float with a default fallback.

    Args:
        value: Value to convert
        default: Value returned when conversion fails (default: 0.0)

    Returns:
        float: Converted value or default
    """
    result = finite_float_optional(value)
    if result is None:
        return default
    return result


def non_negative_float(value: Any, default: float = 0.0) -> float:
    """Convert a value to a finite float clamped at zero."""
    return max(safe_float(value, default), 0.0)
