"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Tests for plan entries and station ETAs.
"""

from __future__ import annotations

import pytest

from conftest import finish_leg, station_leg
from services.pacing.allocation import allocate_leg_minutes
from services.pacing.legs import segment_legs
from services.pacing.models import AidStation, LegElevation
from services.pacing.plan import build_plan_entries, pace_min_per_km, station_etas

START = 6 * 60


def _legs():
    s1 = AidStation(name="S1", distance_km=10.0, rest_minutes=5)
    s2 = AidStation(name="S2", distance_km=20.0, rest_minutes=10)
    legs = (station_leg(0.0, 10.0, s1, 0), station_leg(10.0, 20.0, s2, 1), finish_leg(20.0, 30.0))
    return legs, (s1, s2)


def test_pace_guards_zero_distance():
    assert pace_min_per_km(50.0, 0.0) == 0.0
    assert pace_min_per_km(None, 10.0) == 0.0
    assert pace_min_per_km(50.0, 10.0) == 5.0


def test_plan_entries_pace_and_cumulative_arrival():
    legs, stations = _legs()
    elevations = (LegElevation(),) * 3
    allocation = allocate_leg_minutes(legs, elevations, stations, 195.0, START)
    entries = build_plan_entries(legs, elevations, allocation)

    assert [e.allocated_minutes for e in entries] == pytest.approx([60.0, 60.0, 60.0])
    assert [e.pace_min_per_km for e in entries] == pytest.approx([6.0, 6.0, 6.0])
    # Arrival at leg end includes rest taken at earlier stations
    assert [e.cumulative_arrival_minutes for e in entries] == pytest.approx([60.0, 125.0, 195.0])
    assert [e.effort_distance_km for e in entries] == pytest.approx([10.0, 10.0, 10.0])


def test_plan_entries_completed_leg_counts_as_zero():
    s1 = AidStation(name="S1", distance_km=10.0, rest_minutes=5, actual_arrival_minutes=START + 70)
    legs = (station_leg(0.0, 10.0, s1, 0), finish_leg(10.0, 20.0))
    elevations = (LegElevation(),) * 2
    allocation = allocate_leg_minutes(legs, elevations, (s1,), 125.0, START)
    entries = build_plan_entries(legs, elevations, allocation)

    assert entries[0].completed
    assert entries[0].pace_min_per_km == 0.0
    assert entries[0].cumulative_arrival_minutes == 0.0
    # 125 - 70 elapsed - 5 rest, shared by half the total effort
    assert entries[1].allocated_minutes == pytest.approx(25.0)
    assert entries[1].cumulative_arrival_minutes == pytest.approx(30.0)


def test_station_etas_add_rest_after_arrival():
    legs, stations = _legs()
    elevations = (LegElevation(),) * 3
    allocation = allocate_leg_minutes(legs, elevations, stations, 195.0, START)
    etas = station_etas(legs, stations, allocation, START)

    assert [eta.leg_index for eta in etas] == [0, 1]
    assert [eta.arrival_minutes for eta in etas] == pytest.approx([60.0, 125.0])
    assert [eta.clock for eta in etas] == ["07:00", "08:05"]


def test_station_etas_without_start_time():
    legs, stations = _legs()
    elevations = (LegElevation(),) * 3
    allocation = allocate_leg_minutes(legs, elevations, stations, 195.0, None)
    etas = station_etas(legs, stations, allocation, None)
    assert [eta.clock for eta in etas] == ["--:--", "--:--"]


def test_station_etas_wrap_past_midnight():
    legs, stations = _legs()
    elevations = (LegElevation(),) * 3
    allocation = allocate_leg_minutes(legs, elevations, stations, 195.0, 23 * 60)
    etas = station_etas(legs, stations, allocation, 23 * 60)
    assert [eta.clock for eta in etas] == ["00:00", "01:05"]


def test_station_eta_missing_for_collapsed_station():
    stations = [
        AidStation(name="A", distance_km=10.0, rest_minutes=5),
        AidStation(name="B", distance_km=10.0, rest_minutes=5),
    ]
    segmentation = segment_legs(20.0, stations)
    elevations = (LegElevation(),) * len(segmentation.legs)
    allocation = allocate_leg_minutes(
        segmentation.legs, elevations, segmentation.ordered_stations, 130.0, START
    )
    etas = station_etas(segmentation.legs, segmentation.ordered_stations, allocation, START)
    assert etas[0].clock == "07:00"
    assert etas[1].leg_index is None
    assert etas[1].clock is None
