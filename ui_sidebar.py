# ui_sidebar.py
import streamlit as st

from colors import ReportStatus
from config import CLOSE_ZOOM, PAGES
from filters import ReportFilter, category_name
from report_form import coordinates_from_text
from state import reset_location_context


def render_page_toggle(default: str = "Issue map") -> str:
    """Sidebar navigation between the pages."""
    st.sidebar.markdown("## CivicPulse")
    index = 0 if default not in PAGES else PAGES.index(default)
    page = st.sidebar.radio(
        "Choose a page",
        PAGES,
        index=index,
        label_visibility="collapsed",
    )
    return page


def render_report_filters(reports) -> ReportFilter:
    """Status / category / text filters for the issue map."""
    st.sidebar.markdown("## Filters")

    categories = sorted({category_name(r) for r in reports or [] if isinstance(r, dict) and category_name(r)})

    statuses = st.sidebar.multiselect(
        "Status",
        [s.value for s in ReportStatus],
        key="status_filter",
    )
    chosen_categories = st.sidebar.multiselect(
        "Category",
        categories,
        default=[c for c in st.session_state.get("category_filter", []) if c in categories],
    )
    st.session_state["category_filter"] = chosen_categories
    text = st.sidebar.text_input("Search", key="search_text")

    st.sidebar.markdown("---")
    return ReportFilter(statuses=tuple(statuses), categories=tuple(chosen_categories), text=text)


def render_map_controls(ctx) -> None:
    """Viewport commands. They only act once the map is mounted."""
    st.sidebar.markdown("## Map")

    c1, c2 = st.sidebar.columns(2)
    if c1.button("Center on me", disabled=ctx.user_location is None):
        ctx.center_on_user_location()
    if c2.button("Locate me"):
        ctx.refresh_location()

    if ctx.user_location is None:
        st.sidebar.caption("Your location is unknown. Click the map or type an address.")

    if st.sidebar.button("Reset map", help="Forget the selection and locate again from scratch."):
        reset_location_context()
        st.session_state["report_draft"] = None
        st.rerun()

    with st.sidebar.form("fly_to_form"):
        st.caption("Fly to coordinates")
        lat = st.text_input("Latitude")
        lng = st.text_input("Longitude")
        zoom = st.slider("Zoom", 3, 18, CLOSE_ZOOM)
        go = st.form_submit_button("Fly to")

    if go:
        point = coordinates_from_text(lat, lng)
        if point is None:
            st.sidebar.warning("Enter a valid latitude (-90..90) and longitude (-180..180).")
        else:
            ctx.fly_to(point, zoom)

    st.sidebar.markdown("---")
