"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

import pandas as pd
from haversine import Unit, haversine

from config import EARTH_RADIUS_KM


def distance(df: pd.DataFrame, lat_col: str = "lat", lon_col: str = "lon") -> pd.DataFrame:
    """Compute the great-circle distance between consecutive points in km.

    The first row has no predecessor and gets a distance of 0.
    """
    df = df.copy()
    df["distance"] = [
        0.0
        if pd.isna(lat1)
        else haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS) * EARTH_RADIUS_KM
        for lat1, lon1, lat2, lon2 in zip(
            df[lat_col].shift(), df[lon_col].shift(), df[lat_col], df[lon_col]
        )
    ]
    return df


def cumulated_distance(df: pd.DataFrame, distance_col: str = "distance") -> pd.DataFrame:
    """Compute cumulated distance from a per-row distance column."""
    df = df.copy()
    df["cumulated_distance"] = df[distance_col].cumsum()
    return df


def elevation(df: pd.DataFrame, elevation_col: str = "elevationM") -> pd.DataFrame:
    """Compute elevation deltas and cumulative gain/loss."""
    df = df.copy()
    df["elevation_difference"] = df[elevation_col].diff().fillna(0)
    df["elevation_cumulated"] = df["elevation_difference"].cumsum()
    df["elevation_gain"] = df["elevation_difference"].apply(lambda x: x if x > 0 else 0).cumsum()
    df["elevation_loss"] = df["elevation_difference"].apply(lambda x: -x if x < 0 else 0).cumsum()
    return df
