"""issue_map_view.py

Issue map page: nearby reports on the map, filtered client-side.
"""

from __future__ import annotations

import streamlit as st

from filters import filter_reports
from map_build import MapViewOptions
from ui_panels import render_reports_panel
from ui_sidebar import render_map_controls, render_report_filters
from views.map_view import render_map


def render_issue_map_page(ctx) -> None:
    st.subheader("Issues near you")

    flt = render_report_filters(ctx.nearby_reports)
    render_map_controls(ctx)

    visible = filter_reports(ctx.nearby_reports, flt)

    render_map(
        ctx,
        MapViewOptions(height=550, show_reports=True, allow_selection=False, report_data=visible),
        key="issue_map",
    )

    render_reports_panel(visible)
