"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Value objects shared by the race pacing pipeline.

Everything here is immutable: a planning pass rebuilds legs and plan entries
from the current route and station snapshot instead of patching them.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Any, Mapping, Optional

from config import DEFAULT_STATION_NAME
from utils.coercion import finite_float_optional, non_negative_float, safe_float
from utils.time import duration_minutes, parse_clock_minutes

if TYPE_CHECKING:
    from services.pacing.allocation import Allocation


@dataclass(frozen=True)
class TrackSample:
    latitude: float
    longitude: float
    elevation: Optional[float] = None


@dataclass(frozen=True)
class RoutePoint:
    latitude: float
    longitude: float
    elevation: float
    segment_distance_km: float
    cumulative_distance_km: float


@dataclass(frozen=True)
class Route:
    points: tuple[RoutePoint, ...]
    total_distance_km: float
    total_gain_m: float
    total_loss_m: float
    has_elevation: bool

    @classmethod
    def empty(cls) -> "Route":
        """Zero-totals route shown when no usable geometry is loaded."""
        return cls(
            points=(),
            total_distance_km=0.0,
            total_gain_m=0.0,
            total_loss_m=0.0,
            has_elevation=False,
        )

    # Needs an instance __dict__: keep this dataclass without __slots__
    @cached_property
    def cumulative_km(self) -> tuple[float, ...]:
        return tuple(point.cumulative_distance_km for point in self.points)


@dataclass(frozen=True)
class AidStation:
    name: str = DEFAULT_STATION_NAME
    distance_km: Optional[float] = None
    rest_minutes: float = 0.0
    actual_arrival_minutes: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AidStation":
        """Build a station from a raw UI row, degrading malformed fields.

        Recognised keys: ``name``, ``distance`` (km), ``rest`` (minutes) and
        ``actual`` (``HH:MM`` arrival clock time).
        """
        name = row.get("name")
        name = (name.strip() if isinstance(name, str) else "") or DEFAULT_STATION_NAME
        return cls(
            name=name,
            distance_km=finite_float_optional(row.get("distance")),
            rest_minutes=non_negative_float(row.get("rest")),
            actual_arrival_minutes=parse_clock_minutes(row.get("actual")),
        )


@dataclass(frozen=True)
class Leg:
    label: str
    start_km: float
    end_km: float
    station: Optional[AidStation] = None
    station_index: Optional[int] = None

    @property
    def distance_km(self) -> float:
        return self.end_km - self.start_km

    @property
    def is_finish(self) -> bool:
        return self.station is None


@dataclass(frozen=True)
class LegElevation:
    gain_m: float = 0.0
    loss_m: float = 0.0


@dataclass(frozen=True)
class PlanEntry:
    leg: Leg
    gain_m: float
    loss_m: float
    effort_distance_km: float
    allocated_minutes: Optional[float]
    pace_min_per_km: float
    cumulative_arrival_minutes: float

    @property
    def completed(self) -> bool:
        return self.allocated_minutes is None


@dataclass(frozen=True)
class PlanInput:
    start_clock_time: Optional[str] = None
    total_budget_minutes: float = 0.0
    manual_gain_m: float = 0.0
    manual_loss_m: float = 0.0

    @classmethod
    def from_form(
        cls,
        start_time: Any = None,
        target_hours: Any = None,
        target_minutes: Any = None,
        manual_gain: Any = None,
        manual_loss: Any = None,
    ) -> "PlanInput":
        """Build plan input from raw widget values."""
        start = start_time
        if start is not None and not isinstance(start, str):
            minutes = parse_clock_minutes(start)
            start = None if minutes is None else f"{minutes // 60:02d}:{minutes % 60:02d}"
        return cls(
            start_clock_time=start,
            total_budget_minutes=duration_minutes(target_hours, target_minutes),
            manual_gain_m=safe_float(manual_gain),
            manual_loss_m=safe_float(manual_loss),
        )

    @property
    def start_minutes(self) -> Optional[int]:
        return parse_clock_minutes(self.start_clock_time)


@dataclass(frozen=True)
class StationEta:
    station: AidStation
    station_index: int
    leg_index: Optional[int]
    arrival_minutes: Optional[float]
    clock: Optional[str]


@dataclass(frozen=True)
class RacePlan:
    route: Route
    legs: tuple[Leg, ...]
    ordered_stations: tuple[AidStation, ...]
    leg_elevations: tuple[LegElevation, ...]
    entries: tuple[PlanEntry, ...]
    station_etas: tuple[StationEta, ...]
    finish_arrival_minutes: Optional[float]
    finish_clock: Optional[str]
    start_minutes: Optional[int]
    allocation: Optional[Allocation] = None

    @property
    def is_empty(self) -> bool:
        return not self.legs or not self.route.total_distance_km
