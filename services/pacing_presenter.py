"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Pure helpers to build race pacing view models for unit testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from config import MISSING_CLOCK
from services.pacing.models import PlanInput, RacePlan, Route
from utils.formatting import fmt_km, fmt_m, fmt_minutes, fmt_pace

EMPTY_PLAN_MESSAGE = "Add aid stations and GPX data to see leg targets."


@dataclass(frozen=True)
class LegCard:
    label: str
    distance: str
    gain_loss: str
    pace: str
    leg_time: str
    completed: bool


@dataclass(frozen=True)
class StationRow:
    name: str
    distance: str
    rest: str
    eta: str


def build_route_totals(route: Route, plan_input: Optional[PlanInput] = None) -> Dict[str, str]:
    """Route distance and gain/loss labels.

    Track gain/loss stays at 0 without elevation data; the manual totals used
    for pacing then get their own ``manualGainLoss`` label.
    """
    manual = ""
    if not route.has_elevation and plan_input is not None:
        manual = f"{fmt_m(plan_input.manual_gain_m)} / {fmt_m(plan_input.manual_loss_m)}"
    return {
        "distance": fmt_km(route.total_distance_km or 0.0),
        "gainLoss": f"{fmt_m(route.total_gain_m)} / {fmt_m(route.total_loss_m)}",
        "manualGainLoss": manual,
    }


def build_leg_cards(plan: RacePlan) -> List[LegCard]:
    cards = []
    for entry in plan.entries:
        # Completed legs render as 0 min, like legs with no time left
        minutes = entry.allocated_minutes if entry.allocated_minutes is not None else 0.0
        cards.append(
            LegCard(
                label=entry.leg.label,
                distance=fmt_km(entry.leg.distance_km),
                gain_loss=f"{fmt_m(entry.gain_m)} / {fmt_m(entry.loss_m)}",
                pace=fmt_pace(entry.pace_min_per_km),
                leg_time=fmt_minutes(minutes),
                completed=entry.completed,
            )
        )
    return cards


def build_station_rows(plan: RacePlan) -> List[StationRow]:
    rows = []
    etas = {eta.station_index: eta for eta in plan.station_etas}
    for index, station in enumerate(plan.ordered_stations):
        eta = etas.get(index)
        rows.append(
            StationRow(
                name=station.name,
                distance=fmt_km(station.distance_km),
                rest=fmt_minutes(station.rest_minutes),
                eta=(eta.clock if eta is not None and eta.clock else MISSING_CLOCK),
            )
        )
    return rows


def build_plan_view_model(plan: RacePlan, plan_input: Optional[PlanInput] = None) -> Dict[str, object]:
    if plan.is_empty:
        return {
            "totals": build_route_totals(plan.route, plan_input),
            "message": EMPTY_PLAN_MESSAGE,
            "legs": [],
            "stations": build_station_rows(plan),
            "finish": MISSING_CLOCK,
        }
    return {
        "totals": build_route_totals(plan.route, plan_input),
        "message": "",
        "legs": build_leg_cards(plan),
        "stations": build_station_rows(plan),
        "finish": plan.finish_clock or MISSING_CLOCK,
    }
