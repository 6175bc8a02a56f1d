"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Race pacing service: route loading and leg pacing plans.

Every call is a pure function of its inputs; the service keeps no route or
station state between calls.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from streamlit.logger import get_logger

import config as defaults
from services.pacing.allocation import (
    EffortNormalization,
    allocate_leg_minutes,
    leg_elevations,
)
from services.pacing.errors import InvalidRoute
from services.pacing.geometry import reduce_route
from services.pacing.legs import segment_legs
from services.pacing.models import AidStation, PlanInput, RacePlan, Route, TrackSample
from services.pacing.plan import build_plan_entries, station_etas
from utils.config import Config
from utils.time import format_clock

logger = get_logger(__name__)


class RacePacingService:
    """Service for aid-station leg pacing."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config
        if config is None:
            self.gain_meters_per_km = defaults.GAIN_METERS_PER_KM_EQ
            self.loss_meters_per_km = defaults.LOSS_METERS_PER_KM_EQ
            self.normalization = EffortNormalization(defaults.EFFORT_NORMALIZATION)
        else:
            self.gain_meters_per_km = config.gain_meters_per_km_eq
            self.loss_meters_per_km = config.loss_meters_per_km_eq
            self.normalization = EffortNormalization(config.effort_normalization)

    def load_route(self, samples: Iterable[TrackSample]) -> Route:
        """Build a route from track samples, falling back to an empty route.

        Args:
            samples: Ordered track samples

        Returns:
            Reduced route, or ``Route.empty()`` when the samples cannot form one
        """
        try:
            route = reduce_route(samples)
        except InvalidRoute as e:
            logger.warning("Unusable route geometry: %s", e)
            return Route.empty()
        logger.info(
            "Loaded route: %d points, %.1f km, elevation=%s",
            len(route.points),
            route.total_distance_km,
            route.has_elevation,
        )
        return route

    @staticmethod
    def station_snapshot(rows: Iterable[Mapping[str, Any]]) -> tuple[AidStation, ...]:
        """Freeze raw aid station rows into an immutable snapshot."""
        return tuple(AidStation.from_row(row) for row in rows)

    def compute_plan(
        self,
        route: Route,
        stations: Iterable[AidStation],
        plan_input: PlanInput,
    ) -> RacePlan:
        """Compute the leg pacing plan for the current inputs.

        Args:
            route: Loaded route (possibly empty)
            stations: Aid station snapshot in input order
            plan_input: Start time, time budget and manual elevation

        Returns:
            RacePlan with legs, per-leg entries and station ETAs. The plan is
            empty (no legs) when the route has no distance.
        """
        stations = tuple(stations)
        start_minutes = plan_input.start_minutes
        segmentation = segment_legs(route.total_distance_km, stations)
        legs = segmentation.legs
        ordered = segmentation.ordered_stations

        if not legs or not route.total_distance_km:
            return RacePlan(
                route=route,
                legs=(),
                ordered_stations=ordered,
                leg_elevations=(),
                entries=(),
                station_etas=(),
                finish_arrival_minutes=None,
                finish_clock=None,
                start_minutes=start_minutes,
            )

        elevations = leg_elevations(
            route, legs, plan_input.manual_gain_m, plan_input.manual_loss_m
        )
        allocation = allocate_leg_minutes(
            legs,
            elevations,
            ordered,
            plan_input.total_budget_minutes,
            start_minutes,
            gain_meters_per_km=self.gain_meters_per_km,
            loss_meters_per_km=self.loss_meters_per_km,
            normalization=self.normalization,
        )
        entries = build_plan_entries(legs, elevations, allocation)
        etas = station_etas(legs, ordered, allocation, start_minutes)

        finish_arrival: Optional[float] = None
        if legs[-1].is_finish:
            finish_arrival = entries[-1].cumulative_arrival_minutes

        return RacePlan(
            route=route,
            legs=legs,
            ordered_stations=ordered,
            leg_elevations=elevations,
            entries=entries,
            station_etas=etas,
            finish_arrival_minutes=finish_arrival,
            finish_clock=format_clock(finish_arrival, start_minutes),
            start_minutes=start_minutes,
            allocation=allocation,
        )
