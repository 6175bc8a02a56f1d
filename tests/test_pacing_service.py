"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Tests for the race pacing service pipeline.
"""

from __future__ import annotations

import pytest

from conftest import meridian_samples
from services.pacing.allocation import EffortNormalization
from services.pacing.models import AidStation, PlanInput, Route, TrackSample
from services.pacing_service import RacePacingService
from utils.config import Config


def test_load_route_falls_back_to_empty(pacing_service: RacePacingService):
    route = pacing_service.load_route([TrackSample(45.0, 5.0, 100.0)])
    assert route == Route.empty()
    assert route.total_distance_km == 0.0


def test_load_route(pacing_service: RacePacingService, hilly_samples):
    route = pacing_service.load_route(hilly_samples)
    assert route.total_distance_km == pytest.approx(5.0)
    assert route.has_elevation


def test_station_snapshot_coerces_rows():
    rows = [
        {"name": "  Col  ", "distance": "12.5", "rest": "abc", "actual": "08:15"},
        {"name": "", "distance": "", "rest": -3, "actual": "25:99"},
        {"name": float("nan"), "distance": float("nan"), "rest": None, "actual": None},
    ]
    stations = RacePacingService.station_snapshot(rows)
    assert isinstance(stations, tuple)
    assert stations[0] == AidStation(name="Col", distance_km=12.5, rest_minutes=0.0, actual_arrival_minutes=495)
    assert stations[1] == AidStation(name="Aid station", distance_km=None, rest_minutes=0.0)
    assert stations[2] == AidStation()


def test_scenario_single_station_at_route_end(pacing_service: RacePacingService):
    route = pacing_service.load_route(meridian_samples([0.0, 5.0]))
    stations = [AidStation(name="Finish aid", distance_km=route.total_distance_km, rest_minutes=10)]
    plan = pacing_service.compute_plan(route, stations, PlanInput("06:00", 60.0))

    assert len(plan.legs) == 1
    assert plan.entries[0].allocated_minutes == pytest.approx(50.0)
    assert plan.entries[0].pace_min_per_km == pytest.approx(10.0)
    assert plan.station_etas[0].clock == "06:50"
    assert plan.finish_arrival_minutes is None


def test_manual_elevation_is_pro_rated_when_route_has_none(pacing_service: RacePacingService):
    route = pacing_service.load_route(meridian_samples([0.0, 5.0, 10.0]))
    stations = [AidStation(name="Half", distance_km=route.total_distance_km / 2)]
    plan = pacing_service.compute_plan(route, stations, PlanInput("07:00", 120.0, 500.0, 200.0))

    assert [e.gain_m for e in plan.entries] == pytest.approx([250.0, 250.0])
    assert [e.loss_m for e in plan.entries] == pytest.approx([100.0, 100.0])


def test_manual_elevation_ignored_when_route_has_elevation(pacing_service, hilly_samples):
    route = pacing_service.load_route(hilly_samples)
    plan = pacing_service.compute_plan(route, [], PlanInput("07:00", 120.0, 5000.0, 5000.0))
    assert plan.entries[0].gain_m == pytest.approx(150.0)
    assert plan.entries[0].loss_m == pytest.approx(50.0)


def test_duplicate_station_distance_produces_no_empty_leg(pacing_service, flat_samples):
    route = pacing_service.load_route(flat_samples)
    stations = [
        AidStation(name="A", distance_km=4.0),
        AidStation(name="B", distance_km=4.0),
    ]
    plan = pacing_service.compute_plan(route, stations, PlanInput("06:00", 100.0))
    assert len(plan.legs) == 2
    assert all(leg.distance_km > 0 for leg in plan.legs)
    assert plan.station_etas[1].clock is None


def test_compute_plan_on_empty_route(pacing_service: RacePacingService):
    stations = [AidStation(name="A", distance_km=4.0)]
    plan = pacing_service.compute_plan(Route.empty(), stations, PlanInput("06:00", 100.0))
    assert plan.is_empty
    assert plan.entries == ()
    assert plan.station_etas == ()
    assert plan.allocation is None


def test_finish_arrival(pacing_service, flat_samples):
    route = pacing_service.load_route(flat_samples)
    stations = [AidStation(name="A", distance_km=5.0, rest_minutes=15)]
    plan = pacing_service.compute_plan(route, stations, PlanInput("06:00", 135.0))
    assert plan.finish_arrival_minutes == pytest.approx(135.0)
    assert plan.finish_clock == "08:15"


def test_compute_plan_is_idempotent(pacing_service, hilly_samples):
    route = pacing_service.load_route(hilly_samples)
    stations = (
        AidStation(name="A", distance_km=1.7, rest_minutes=4, actual_arrival_minutes=6 * 60 + 12),
        AidStation(name="B", distance_km=3.3, rest_minutes=6),
    )
    plan_input = PlanInput("06:00", 75.0)
    first = pacing_service.compute_plan(route, stations, plan_input)
    second = pacing_service.compute_plan(route, stations, plan_input)
    assert first == second


def test_service_reads_normalization_from_config(flat_samples):
    config = Config(
        gain_meters_per_km_eq=100.0,
        loss_meters_per_km_eq=200.0,
        effort_normalization="remaining",
        locale="en_US",
        default_start_time="06:00",
    )
    service = RacePacingService(config)
    assert service.normalization == EffortNormalization.REMAINING

    route = service.load_route(flat_samples)
    half = route.total_distance_km / 2
    stations = [AidStation(name="A", distance_km=half, actual_arrival_minutes=6 * 60 + 50)]
    plan = service.compute_plan(route, stations, PlanInput("06:00", 100.0))
    assert plan.entries[1].allocated_minutes == pytest.approx(50.0)


def test_plan_input_from_form():
    plan_input = PlanInput.from_form("05:30", "3", "45", "1200", "bad")
    assert plan_input.start_minutes == 5 * 60 + 30
    assert plan_input.total_budget_minutes == 225.0
    assert plan_input.manual_gain_m == 1200.0
    assert plan_input.manual_loss_m == 0.0


def test_plan_input_invalid_start():
    plan_input = PlanInput.from_form("later", 1, 0)
    assert plan_input.start_minutes is None
