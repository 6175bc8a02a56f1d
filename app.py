"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Race pacing page: GPX import, aid stations, and per-leg targets.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st
from streamlit.logger import get_logger

from graph.route_profile import render_route_profile
from services.pacing.models import PlanInput, Route
from services.pacing_presenter import build_plan_view_model
from services.pacing_service import RacePacingService
from utils.config import load_config
from utils.formatting import set_locale
from utils.gpx_parser import parse_gpx_to_samples

logger = get_logger(__name__)

STATION_COLUMNS = ["name", "distance", "rest", "actual"]


def _init_session_state() -> None:
    st.session_state.setdefault("pacing_route", Route.empty())
    st.session_state.setdefault("pacing_route_file", None)
    st.session_state.setdefault(
        "pacing_stations",
        pd.DataFrame([{"name": "", "distance": float("nan"), "rest": 0.0, "actual": ""}], columns=STATION_COLUMNS),
    )


def _load_uploaded_route(service: RacePacingService) -> None:
    uploaded_file = st.file_uploader("Route GPX", type=["gpx"], key="pacing_gpx_uploader")
    if uploaded_file is None:
        return
    file_key = f"{uploaded_file.name}:{uploaded_file.size}"
    if st.session_state["pacing_route_file"] != file_key:
        samples = parse_gpx_to_samples(uploaded_file.getvalue())
        # Replace the whole route at once
        st.session_state["pacing_route"] = service.load_route(samples)
        st.session_state["pacing_route_file"] = file_key
    st.caption(f"Loaded {uploaded_file.name}.")


def _station_rows(edited: pd.DataFrame) -> list[dict]:
    df = edited.reindex(columns=STATION_COLUMNS)
    df["name"] = df["name"].fillna("")
    df["actual"] = df["actual"].fillna("")
    return df.to_dict("records")


def main() -> None:
    st.set_page_config(page_title="Race Pace Planner", layout="wide")
    cfg = load_config()
    set_locale(cfg.locale)
    _init_session_state()
    service = RacePacingService(cfg)

    st.title("Race Pace Planner")
    _load_uploaded_route(service)
    route: Route = st.session_state["pacing_route"]

    col_start, col_hours, col_minutes = st.columns(3)
    with col_start:
        start_time = st.text_input("Start time (HH:MM)", value=cfg.default_start_time)
    with col_hours:
        target_hours = st.number_input("Target hours", min_value=0, step=1, value=0)
    with col_minutes:
        target_minutes = st.number_input("Target minutes", min_value=0, max_value=59, step=1, value=0)

    manual_gain = manual_loss = 0.0
    if not route.has_elevation:
        st.info("No elevation data in the route: enter the total gain and loss.")
        col_gain, col_loss = st.columns(2)
        with col_gain:
            manual_gain = st.number_input("Total gain (m)", min_value=0.0, step=10.0, value=0.0)
        with col_loss:
            manual_loss = st.number_input("Total loss (m)", min_value=0.0, step=10.0, value=0.0)

    plan_input = PlanInput.from_form(start_time, target_hours, target_minutes, manual_gain, manual_loss)

    st.subheader("Aid stations")
    edited = st.data_editor(
        st.session_state["pacing_stations"],
        num_rows="dynamic",
        use_container_width=True,
        key="pacing_stations_editor",
        column_config={
            "name": st.column_config.TextColumn("Name"),
            "distance": st.column_config.NumberColumn("Distance (km)", min_value=0.0, step=0.1),
            "rest": st.column_config.NumberColumn("Rest (min)", min_value=0.0, step=1.0),
            "actual": st.column_config.TextColumn("Actual arrival (HH:MM)"),
        },
    )
    stations = service.station_snapshot(_station_rows(edited))
    plan = service.compute_plan(route, stations, plan_input)
    view = build_plan_view_model(plan, plan_input)

    col_distance, col_elevation, col_finish = st.columns(3)
    col_distance.metric("Total distance", view["totals"]["distance"])
    col_elevation.metric("Gain / Loss", view["totals"]["gainLoss"])
    col_finish.metric("Finish ETA", view["finish"])
    if view["totals"]["manualGainLoss"]:
        st.caption(f"Pacing uses manual gain / loss: {view['totals']['manualGainLoss']}")

    if view["stations"]:
        st.dataframe(
            pd.DataFrame(
                [
                    {"Station": row.name, "Distance": row.distance, "Rest": row.rest, "ETA": row.eta}
                    for row in view["stations"]
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )

    st.subheader("Leg targets")
    if view["message"]:
        st.caption(view["message"])
    else:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "Leg": card.label,
                        "Distance": card.distance,
                        "Gain / Loss": card.gain_loss,
                        "Target pace": card.pace,
                        "Leg time": card.leg_time,
                    }
                    for card in view["legs"]
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )

    render_route_profile(plan)


if __name__ == "__main__":
    main()
