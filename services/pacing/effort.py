"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Distance-equivalent effort model.
"""

from __future__ import annotations

from config import GAIN_METERS_PER_KM_EQ, LOSS_METERS_PER_KM_EQ


def compute_distance_eq_km(
    distance_km: float,
    gain_m: float,
    loss_m: float,
    gain_meters_per_km: float = GAIN_METERS_PER_KM_EQ,
    loss_meters_per_km: float = LOSS_METERS_PER_KM_EQ,
) -> float:
    """Convert distance plus elevation change into a flat-equivalent distance.

    With the default coefficients 100 m of climb counts as one extra km and
    100 m of descent as half a km.

    Args:
        distance_km: Horizontal distance in km
        gain_m: Elevation gain in meters
        loss_m: Elevation loss in meters
        gain_meters_per_km: Meters of gain equivalent to 1 km
        loss_meters_per_km: Meters of loss equivalent to 1 km

    Returns:
        Distance-equivalent in km
    """
    return distance_km + gain_m / gain_meters_per_km + loss_m / loss_meters_per_km
