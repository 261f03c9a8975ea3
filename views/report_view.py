"""report_view.py

"Report an issue" page. The map selection fills the location fields; the
address stays editable so a failed lookup never blocks the form.
"""

from __future__ import annotations

import streamlit as st

from colors import severity_color
from config import SEVERITY_LEVELS
from debug_tools import debug_event
from map_build import MapViewOptions
from report_form import (
    ReportDraft,
    build_report_payload,
    clear_selection,
    sync_location,
    validate_draft,
)
from reports_api import ApiError, ReportsClient
from ui_panels import render_selection_details
from views.map_view import render_map


@st.cache_data(ttl=300, show_spinner=False)
def load_form_options() -> tuple[list[dict], list[dict]]:
    """Categories + regions for the select boxes."""
    client = ReportsClient()
    return client.categories(), client.regions()


def _option_label(options: list[dict]):
    names = {str(o.get("_id", "")): str(o.get("name", "")) for o in options}
    return lambda v: names.get(v, "— Select —") if v else "— Select —"


def render_report_page(ctx, reports: ReportsClient | None = None) -> None:
    st.subheader("Report an issue")
    reports = reports or ReportsClient()

    try:
        categories, regions = load_form_options()
    except ApiError as e:
        st.warning(f"Could not load categories and regions: {e.message}")
        categories, regions = [], []

    st.markdown("**Please mark the exact location:** click on the map to set the location of the issue.")
    render_map(
        ctx,
        MapViewOptions(height=400, show_reports=False, allow_selection=True),
        key="report_map",
    )
    render_selection_details(ctx)

    # Address: pre-filled from the lookup, editable by hand
    typed = st.text_input(
        "Address *",
        value=ctx.selected_address,
        help="Auto-filled when you pick a location on the map, but you can edit it for more precision.",
    )
    if typed != ctx.selected_address:
        ctx.set_selected_address(typed)

    draft = sync_location(st.session_state.get("report_draft") or ReportDraft(), ctx)

    with st.form("report_form"):
        title = st.text_input("Title *", value=draft.title)
        description = st.text_area("Description *", value=draft.description)

        category_ids = [""] + [str(c.get("_id", "")) for c in categories]
        region_ids = [""] + [str(r.get("_id", "")) for r in regions]
        category = st.selectbox("Category *", category_ids, format_func=_option_label(categories))
        region = st.selectbox("Region *", region_ids, format_func=_option_label(regions))

        severity = st.radio("Severity *", SEVERITY_LEVELS, index=1, horizontal=True)
        st.markdown(
            f"<div style='width:100%; height:4px; background:{severity_color(severity)}'></div>",
            unsafe_allow_html=True,
        )

        images = st.file_uploader(
            "Photos",
            type=["png", "jpg", "jpeg"],
            accept_multiple_files=True,
        )
        submitted = st.form_submit_button("Submit report")

    if not submitted:
        return

    # location fields are re-read from the map state at submit time
    draft = sync_location(
        ReportDraft(
            title=title,
            description=description,
            category=category,
            region=region,
            severity=severity,
        ),
        ctx,
    )
    st.session_state["report_draft"] = draft

    errors = validate_draft(draft)
    if errors:
        for msg in errors:
            st.error(msg)
        return

    files = [(f.name, f.getvalue(), f.type) for f in (images or [])]
    try:
        created = reports.create(build_report_payload(draft), files)
    except ApiError as e:
        debug_event("report_submit_failed", status=e.status, error=e.message)
        st.error(e.message or "Failed to submit report")
        return

    debug_event("report_submitted", id=created.get("_id", ""))
    st.session_state["report_draft"] = None
    clear_selection(ctx)
    st.success("Report submitted. Thank you!")
