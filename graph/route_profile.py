"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Route elevation profile with aid station markers.
"""

from __future__ import annotations

from typing import Optional

import altair as alt
import pandas as pd
import streamlit as st
from streamlit.logger import get_logger

from services.pacing.geometry import route_profile_frame
from services.pacing.models import RacePlan

logger = get_logger(__name__)


def build_route_profile_chart(plan: RacePlan) -> Optional[alt.LayerChart]:
    """Elevation area chart with one dashed rule per leg-closing station.

    Returns None when the route has no points.
    """
    plot_df = route_profile_frame(plan.route)
    if plot_df.empty:
        return None

    y_min_val = float(plot_df["elevationM"].min() - 20)
    y_max_val = float(plot_df["elevationM"].max() + 20)
    x_scale = alt.Scale(domain=[0.0, float(plan.route.total_distance_km)], nice=True)
    y_scale = alt.Scale(domain=[y_min_val, y_max_val], nice=True)

    area = (
        alt.Chart(plot_df)
        .mark_area(opacity=0.4, color="#3b82f6", line={"color": "#000000"})
        .encode(
            x=alt.X("cumulated_distance:Q", title="Distance (km)", scale=x_scale),
            y=alt.Y("elevationM:Q", title="Elevation (m)", scale=y_scale),
            y2=alt.datum(y_min_val),
            tooltip=[
                alt.Tooltip("cumulated_distance:Q", title="Distance", format=".2f"),
                alt.Tooltip("elevationM:Q", title="Elevation", format=".0f"),
            ],
        )
    )
    charts = [area]

    station_legs = [leg for leg in plan.legs if leg.station is not None]
    if station_legs:
        aid_df = pd.DataFrame(
            [
                {"distance": leg.end_km, "label": leg.station.name}
                for leg in station_legs
            ]
        )
        aid_rules = (
            alt.Chart(aid_df)
            .mark_rule(strokeWidth=2, strokeDash=[5, 5], color="#dc2626")
            .encode(
                x=alt.X("distance:Q", scale=x_scale),
                tooltip=[
                    alt.Tooltip("label:N", title="Aid station"),
                    alt.Tooltip("distance:Q", title="Distance", format=".1f"),
                ],
            )
        )
        charts.append(aid_rules)

    return alt.layer(*charts).properties(height=300, title="Elevation profile")


def render_route_profile(plan: RacePlan) -> None:
    chart = build_route_profile_chart(plan)
    if chart is None:
        st.caption("Upload a GPX file to see the elevation profile.")
        return
    try:
        st.altair_chart(chart, theme=None, use_container_width=True)
    except Exception as e:
        logger.error(f"Failed to render route profile chart: {e}", exc_info=True)
        st.error("Could not render the elevation profile.")
