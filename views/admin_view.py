"""admin_view.py

Admin location editor for departments and regions.

Opening an editor seeds the shared map selection with the record's stored
location; closing it (save or cancel) clears the selection again.
"""

from __future__ import annotations

import streamlit as st

from map_build import MapViewOptions
from report_form import (
    build_department_payload,
    build_region_payload,
    clear_selection,
    coordinates_from_record,
    coordinates_from_text,
    seed_selection,
)
from reports_api import ApiError, ReportsClient
from ui_panels import render_selection_details
from views.map_view import render_map

KINDS = {"Department": "department", "Region": "region"}


def _record_id(record: dict) -> str:
    return str(record.get("_id") or record.get("id") or "")


def _stored_address(record: dict) -> str:
    loc = record.get("location")
    if isinstance(loc, dict) and loc.get("address"):
        return str(loc["address"])
    return str(record.get("headquarters") or "")


def open_editor(ctx, kind: str, record: dict) -> None:
    seed_selection(ctx, coordinates_from_record(record), _stored_address(record) if kind == "department" else "")
    st.session_state["editing_entity"] = (kind, _record_id(record))


def close_editor(ctx) -> None:
    clear_selection(ctx)
    st.session_state["editing_entity"] = None


def render_location_editor_page(ctx, reports: ReportsClient | None = None) -> None:
    st.subheader("Department & region locations")
    reports = reports or ReportsClient()

    label = st.radio("Edit", list(KINDS), horizontal=True)
    kind = KINDS[label]

    try:
        records = reports.departments() if kind == "department" else reports.regions()
    except ApiError as e:
        st.error(f"Failed to load {kind}s. {e.message}")
        return

    if not records:
        st.info(f"No {kind}s found.")
        return

    by_id = {_record_id(r): r for r in records}
    chosen = st.selectbox(
        label,
        list(by_id),
        format_func=lambda rid: str(by_id[rid].get("name") or rid),
    )

    editing = st.session_state.get("editing_entity")
    if editing is not None and editing != (kind, chosen):
        # switched record / kind while an editor was open
        close_editor(ctx)
        editing = None

    if editing is None:
        if st.button("Edit location"):
            open_editor(ctx, kind, by_id[chosen])
            st.rerun()
        return

    record = by_id[chosen]
    st.caption("Click on the map to move the location.")
    render_map(
        ctx,
        MapViewOptions(height=420, show_reports=False, allow_selection=True, show_user_location=False),
        key="editor_map",
    )
    render_selection_details(ctx)

    if kind == "region":
        # typed coordinates move the marker once both parse
        cur = ctx.selected_location
        c1, c2 = st.columns(2)
        lat = c1.text_input("Latitude", value=f"{cur.lat:.6f}" if cur else "")
        lng = c2.text_input("Longitude", value=f"{cur.lng:.6f}" if cur else "")
        typed = coordinates_from_text(lat, lng)
        if typed is not None and (cur is None or typed.format() != cur.format()):
            ctx.set_selected_location(typed)
    else:
        typed_addr = st.text_input("Headquarters address", value=ctx.selected_address)
        if typed_addr != ctx.selected_address:
            ctx.set_selected_address(typed_addr)

    save_col, cancel_col = st.columns(2)
    if cancel_col.button("Cancel"):
        close_editor(ctx)
        st.rerun()

    if save_col.button("Save location", type="primary"):
        try:
            if kind == "department":
                reports.update_department(_record_id(record), build_department_payload(record, ctx))
            else:
                reports.update_region(_record_id(record), build_region_payload(record, ctx))
        except ApiError as e:
            st.error(f"Failed to update {kind}. {e.message}")
            return

        close_editor(ctx)
        st.success(f"{label} location saved.")
