"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Time allocation across legs.

The moving-time budget (race budget minus aid-station rest) is shared between
legs in proportion to their distance-equivalent. Once a runner's actual arrival
at a station is known, the remaining budget is re-anchored on that split and
only the legs after it are re-planned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from streamlit.logger import get_logger

from config import GAIN_METERS_PER_KM_EQ, LOSS_METERS_PER_KM_EQ
from services.pacing.effort import compute_distance_eq_km
from services.pacing.geometry import elevation_between
from services.pacing.models import AidStation, Leg, LegElevation, Route

logger = get_logger(__name__)


class EffortNormalization(str, Enum):
    """Denominator used when sharing the remaining moving time."""

    TOTAL = "total"
    REMAINING = "remaining"


@dataclass(frozen=True)
class Allocation:
    leg_minutes: tuple[Optional[float], ...]
    efforts: tuple[float, ...]
    total_effort: float
    total_rest: float
    moving_time: float
    remaining_moving_time: float
    latest_completed_index: Optional[int]
    elapsed_minutes: float

    def minutes_or_zero(self, index: int) -> float:
        minutes = self.leg_minutes[index]
        return 0.0 if minutes is None else minutes


def leg_elevations(
    route: Route,
    legs: Sequence[Leg],
    manual_gain_m: float = 0.0,
    manual_loss_m: float = 0.0,
) -> tuple[LegElevation, ...]:
    """Elevation gain/loss for each leg.

    Routes with elevation data are interpolated along the track. Without it,
    the manual route totals are pro-rated by each leg's share of the distance.
    """
    if route.has_elevation:
        return tuple(elevation_between(route, leg.start_km, leg.end_km) for leg in legs)

    total_distance = route.total_distance_km
    if total_distance <= 0:
        return tuple(LegElevation() for _ in legs)
    return tuple(
        LegElevation(
            gain_m=manual_gain_m * leg.distance_km / total_distance,
            loss_m=manual_loss_m * leg.distance_km / total_distance,
        )
        for leg in legs
    )


def latest_completed_leg(legs: Sequence[Leg]) -> Optional[int]:
    """Index of the last leg whose station has a recorded arrival, if any."""
    latest: Optional[int] = None
    for index, leg in enumerate(legs):
        if leg.station is not None and leg.station.actual_arrival_minutes is not None:
            latest = index
    return latest


def allocate_leg_minutes(
    legs: Sequence[Leg],
    elevations: Sequence[LegElevation],
    ordered_stations: Sequence[AidStation],
    total_budget_minutes: float,
    start_minutes: Optional[float] = None,
    *,
    gain_meters_per_km: float = GAIN_METERS_PER_KM_EQ,
    loss_meters_per_km: float = LOSS_METERS_PER_KM_EQ,
    normalization: EffortNormalization = EffortNormalization.TOTAL,
) -> Allocation:
    """Allocate target minutes to every leg that is not yet completed.

    Args:
        legs: Ordered legs from segmentation
        elevations: Gain/loss per leg, parallel to ``legs``
        ordered_stations: Placed stations, sorted as during segmentation
        total_budget_minutes: Target race duration including rest
        start_minutes: Start clock time in minutes after midnight (None counts as 0)
        gain_meters_per_km: Climb coefficient of the distance-equivalent
        loss_meters_per_km: Descent coefficient of the distance-equivalent
        normalization: Share remaining time over total effort (default) or
            over the effort of the legs still to run

    Returns:
        Allocation whose ``leg_minutes`` holds None for completed legs
    """
    total_rest = sum(station.rest_minutes for station in ordered_stations)
    moving_time = max(total_budget_minutes - total_rest, 0.0)

    efforts = tuple(
        compute_distance_eq_km(
            leg.distance_km,
            elevation.gain_m,
            elevation.loss_m,
            gain_meters_per_km=gain_meters_per_km,
            loss_meters_per_km=loss_meters_per_km,
        )
        for leg, elevation in zip(legs, elevations)
    )
    total_effort = sum(efforts) or 1.0

    latest_index = latest_completed_leg(legs)
    remaining_moving_time = moving_time
    elapsed = 0.0
    denominator = total_effort
    if latest_index is not None:
        completed_leg = legs[latest_index]
        actual_arrival = completed_leg.station.actual_arrival_minutes
        elapsed = max(actual_arrival - (start_minutes or 0), 0.0)
        # Rest at the station just reached is still ahead of the runner
        remaining_rest = sum(
            station.rest_minutes for station in ordered_stations[completed_leg.station_index:]
        )
        remaining_moving_time = max(total_budget_minutes - elapsed - remaining_rest, 0.0)
        if normalization == EffortNormalization.REMAINING:
            denominator = sum(efforts[latest_index + 1:]) or 1.0
        logger.debug(
            "Re-anchoring at leg %d: elapsed=%.1f min, remaining moving time=%.1f min",
            latest_index,
            elapsed,
            remaining_moving_time,
        )

    leg_minutes = tuple(
        None
        if latest_index is not None and index <= latest_index
        else remaining_moving_time * (effort / denominator)
        for index, effort in enumerate(efforts)
    )

    return Allocation(
        leg_minutes=leg_minutes,
        efforts=efforts,
        total_effort=total_effort,
        total_rest=total_rest,
        moving_time=moving_time,
        remaining_moving_time=remaining_moving_time,
        latest_completed_index=latest_index,
        elapsed_minutes=elapsed,
    )
