"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Derive paces, cumulative arrivals and station ETAs from an allocation.
"""

from __future__ import annotations

from typing import Optional, Sequence

from services.pacing.allocation import Allocation
from services.pacing.models import AidStation, Leg, LegElevation, PlanEntry, StationEta
from utils.time import format_clock


def pace_min_per_km(minutes: Optional[float], distance_km: float) -> float:
    if not distance_km:
        return 0.0
    return (minutes or 0.0) / distance_km


def build_plan_entries(
    legs: Sequence[Leg],
    elevations: Sequence[LegElevation],
    allocation: Allocation,
) -> tuple[PlanEntry, ...]:
    """Build one plan entry per leg.

    ``cumulative_arrival_minutes`` is the arrival at the end of the leg, counted
    from the start: allocated minutes of this and earlier legs (completed legs
    count as 0) plus the rest taken at the stations ending earlier legs.
    """
    entries = []
    elapsed = 0.0
    for index, (leg, elevation) in enumerate(zip(legs, elevations)):
        minutes = allocation.leg_minutes[index]
        elapsed += allocation.minutes_or_zero(index)
        entries.append(
            PlanEntry(
                leg=leg,
                gain_m=elevation.gain_m,
                loss_m=elevation.loss_m,
                effort_distance_km=allocation.efforts[index],
                allocated_minutes=minutes,
                pace_min_per_km=pace_min_per_km(minutes, leg.distance_km),
                cumulative_arrival_minutes=elapsed,
            )
        )
        if leg.station is not None:
            elapsed += leg.station.rest_minutes
    return tuple(entries)


def station_etas(
    legs: Sequence[Leg],
    ordered_stations: Sequence[AidStation],
    allocation: Allocation,
    start_minutes: Optional[float],
) -> tuple[StationEta, ...]:
    """Projected arrival at each ordered station.

    Walks the stations in order, adding the minutes of the leg each station
    closes, then its rest. Stations that close no leg (placed at an already
    used boundary) have no ETA.
    """
    leg_by_station = {
        leg.station_index: index for index, leg in enumerate(legs) if leg.station_index is not None
    }
    etas = []
    eta_minutes = 0.0
    for station_index, station in enumerate(ordered_stations):
        leg_index = leg_by_station.get(station_index)
        if leg_index is None:
            etas.append(StationEta(station, station_index, None, None, None))
            continue
        eta_minutes += allocation.minutes_or_zero(leg_index)
        etas.append(
            StationEta(
                station=station,
                station_index=station_index,
                leg_index=leg_index,
                arrival_minutes=eta_minutes,
                clock=format_clock(eta_minutes, start_minutes),
            )
        )
        eta_minutes += station.rest_minutes
    return tuple(etas)
