"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

# Mean Earth radius used for great-circle distances between track points
EARTH_RADIUS_KM = 6371.0

# Distance-equivalent coefficients: meters of climb/descent worth one flat km
GAIN_METERS_PER_KM_EQ = 100.0
LOSS_METERS_PER_KM_EQ = 200.0

# Denominator of the re-anchored allocation ("total" or "remaining" effort)
EFFORT_NORMALIZATION = "total"

DEFAULT_STATION_NAME = "Aid station"
FINISH_LABEL = "Finish"
DEFAULT_START_TIME = "06:00"
DEFAULT_LOCALE = "en_US"

MINUTES_PER_DAY = 24 * 60

MISSING_VALUE = "--"
MISSING_CLOCK = "--:--"
