"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Route geometry reduction.

Turns ordered track samples into cumulative distance and elevation totals, and
answers elevation gain/loss queries over distance sub-ranges.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd
from streamlit.logger import get_logger

from services.pacing.errors import InvalidRoute
from services.pacing.models import LegElevation, Route, RoutePoint, TrackSample
from utils import timeseries_preprocessing as ts_pre
from utils.coercion import finite_float_optional

logger = get_logger(__name__)


def _samples_frame(samples: Iterable[TrackSample]) -> pd.DataFrame:
    rows = []
    for sample in samples:
        lat = finite_float_optional(sample.latitude)
        lon = finite_float_optional(sample.longitude)
        if lat is None or lon is None:
            logger.debug("Skipping track sample without coordinates: %s", sample)
            continue
        rows.append(
            {
                "lat": lat,
                "lon": lon,
                "elevationM": finite_float_optional(sample.elevation),
            }
        )
    df = pd.DataFrame(rows, columns=["lat", "lon", "elevationM"])
    df["elevationM"] = pd.to_numeric(df["elevationM"], errors="coerce").astype(float)
    return df


def reduce_route(samples: Iterable[TrackSample]) -> Route:
    """Reduce ordered track samples to a Route.

    Args:
        samples: Ordered track samples (position plus optional elevation)

    Returns:
        Route with per-point segment/cumulative distances (km) and total
        gain/loss (m)

    Raises:
        InvalidRoute: If fewer than 2 samples have usable coordinates
    """
    df = _samples_frame(samples)
    if len(df) < 2:
        raise InvalidRoute(len(df))

    has_elevation = bool(np.isfinite(df["elevationM"].to_numpy()).any())
    # Missing elevations count as 0 m, also on partially tagged tracks
    df["elevationM"] = df["elevationM"].fillna(0.0)

    df = ts_pre.distance(df, lat_col="lat", lon_col="lon")
    df = ts_pre.cumulated_distance(df)
    df = ts_pre.elevation(df, elevation_col="elevationM")

    points = tuple(
        RoutePoint(
            latitude=float(row.lat),
            longitude=float(row.lon),
            elevation=float(row.elevationM),
            segment_distance_km=float(row.distance),
            cumulative_distance_km=float(row.cumulated_distance),
        )
        for row in df.itertuples(index=False)
    )

    total_gain = float(df["elevation_gain"].iloc[-1]) if has_elevation else 0.0
    total_loss = float(df["elevation_loss"].iloc[-1]) if has_elevation else 0.0

    route = Route(
        points=points,
        total_distance_km=float(df["cumulated_distance"].iloc[-1]),
        total_gain_m=total_gain,
        total_loss_m=total_loss,
        has_elevation=has_elevation,
    )
    logger.debug(
        "Reduced %d samples: %.3f km, +%.0f m / -%.0f m (elevation=%s)",
        len(points),
        route.total_distance_km,
        route.total_gain_m,
        route.total_loss_m,
        has_elevation,
    )
    return route


def elevation_between(route: Route, start_km: float, end_km: float) -> LegElevation:
    """Compute elevation gain/loss between two distances along the route.

    Each point pair overlapping ``[start_km, end_km]`` contributes its elevation
    delta scaled by the overlapping fraction of its distance span, so summing
    over a partition of the route gives back the route totals.
    """
    if not route.has_elevation or len(route.points) < 2:
        return LegElevation()

    points = route.points
    cumulative = route.cumulative_km
    gain = 0.0
    loss = 0.0
    for i in range(1, len(points)):
        prev_km = cumulative[i - 1]
        current_km = cumulative[i]
        if current_km < start_km:
            continue
        if prev_km > end_km:
            break
        if current_km == prev_km:
            # Stationary pair: the whole delta goes to the range starting at it,
            # or to the last range when it sits on the route end
            on_route_end = prev_km == end_km and end_km >= cumulative[-1]
            if not (start_km <= prev_km < end_km or on_route_end):
                continue
            ratio = 1.0
        else:
            overlap_start = max(prev_km, start_km)
            overlap_end = min(current_km, end_km)
            if overlap_end <= overlap_start:
                continue
            ratio = (overlap_end - overlap_start) / (current_km - prev_km)
        delta = (points[i].elevation - points[i - 1].elevation) * ratio
        if delta > 0:
            gain += delta
        elif delta < 0:
            loss += abs(delta)
    return LegElevation(gain_m=gain, loss_m=loss)


def route_profile_frame(route: Route) -> pd.DataFrame:
    """Per-point distance/elevation table for charting."""
    if not route.points:
        return pd.DataFrame(columns=["cumulated_distance", "elevationM"])
    return pd.DataFrame(
        {
            "cumulated_distance": list(route.cumulative_km),
            "elevationM": [point.elevation for point in route.points],
        }
    )

