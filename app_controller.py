"""app_controller.py

Main orchestration for the Streamlit app.
Pure "wiring" that builds the session state and calls views.
"""

from __future__ import annotations

import logging

import streamlit as st

from config import DEFAULT_PAGE
from debug_tools import render_debug_panel
from report_form import clear_selection
from state import get_location_context
from ui_sidebar import render_page_toggle
from views.admin_view import render_location_editor_page
from views.issue_map_view import render_issue_map_page
from views.report_view import render_report_page


def run_app() -> None:
    st.set_page_config(**DEFAULT_PAGE)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.title("CivicPulse")

    ctx = get_location_context()
    ctx.initialize()

    page = render_page_toggle(default=st.session_state.get("page", "Issue map"))
    if page != st.session_state.get("page"):
        # leaving a page closes whatever form was holding the selection
        clear_selection(ctx)
        st.session_state["editing_entity"] = None
        st.session_state["report_draft"] = None
    st.session_state["page"] = page

    render_debug_panel(ctx)

    if page == "Report an issue":
        render_report_page(ctx)
    elif page == "Location editor":
        render_location_editor_page(ctx)
    else:
        render_issue_map_page(ctx)
