"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from streamlit.logger import get_logger

from config import FINISH_LABEL
from services.pacing.models import AidStation, Leg

logger = get_logger(__name__)


@dataclass(frozen=True)
class LegSegmentation:
    legs: tuple[Leg, ...]
    ordered_stations: tuple[AidStation, ...]


def leg_label(start_km: float, destination: str) -> str:
    return f"{start_km:.1f} km → {destination}"


def segment_legs(total_distance_km: float, stations: Iterable[AidStation]) -> LegSegmentation:
    """Split the route into legs ending at each placeable aid station.

    Stations without a distance are dropped; the rest are sorted by distance
    (stable, so ties keep their input order). A station that does not lie past
    the current boundary, or that lies past the route end, is skipped rather
    than producing a zero-length or overlong leg.
    A closing leg to the finish is added when the route extends beyond the
    last station.

    Args:
        total_distance_km: Route length in km
        stations: Aid station snapshot in input order

    Returns:
        LegSegmentation with the legs and the filtered, sorted stations
    """
    ordered = tuple(
        sorted(
            (station for station in stations if station.distance_km is not None),
            key=lambda station: station.distance_km,
        )
    )

    legs: list[Leg] = []
    start = 0.0
    for index, station in enumerate(ordered):
        end = float(station.distance_km)
        if end > total_distance_km:
            logger.debug("Skipping station %r at %.3f km past the route end", station.name, end)
            continue
        if end <= start:
            logger.debug("Skipping station %r at %.3f km (boundary %.3f km)", station.name, end, start)
            continue
        legs.append(
            Leg(
                label=leg_label(start, station.name),
                start_km=start,
                end_km=end,
                station=station,
                station_index=index,
            )
        )
        start = end

    if total_distance_km > start:
        legs.append(
            Leg(
                label=leg_label(start, FINISH_LABEL),
                start_km=start,
                end_km=float(total_distance_km),
            )
        )

    return LegSegmentation(legs=tuple(legs), ordered_stations=ordered)
