"""map_view.py

Map rendering for Streamlit. Keeps Folium + st_folium wiring out of the
pages: a page hands in its LocationContext and MapViewOptions, this module
does the rest.
"""

from __future__ import annotations

import streamlit as st
from streamlit_folium import st_folium

from debug_tools import debug_event
from geo import GeoPoint, InvalidCoordinates
from map_build import MapViewOptions, ViewportHandle, build_map


def _get_handle(ctx, key: str) -> ViewportHandle:
    """One handle per mounted map, created on first render."""
    hkey = f"{key}__viewport"
    handle = st.session_state.get(hkey)
    if handle is None:
        handle = ViewportHandle(ctx.center, ctx.zoom)
        st.session_state[hkey] = handle
    return handle


def extract_clicked_point(map_state) -> GeoPoint | None:
    if not isinstance(map_state, dict):
        return None

    clicked = map_state.get("last_clicked")
    if not isinstance(clicked, dict):
        return None

    try:
        return GeoPoint.from_any(clicked)
    except InvalidCoordinates:
        return None


def handle_map_click(ctx, map_state, options: MapViewOptions, *, key: str) -> bool:
    """
    Forward a NEW click to the context.

    st_folium keeps returning the last click on every rerun, so the last
    forwarded point is remembered per map.

    Returns True if the click was forwarded (and a rerun triggered).
    """
    if not options.allow_selection:
        return False

    point = extract_clicked_point(map_state)
    if point is None:
        return False

    last_key = f"{key}__last_click"
    if st.session_state.get(last_key) == point:
        return False

    st.session_state[last_key] = point
    ctx.handle_map_click(point)
    st.rerun()
    return True


def render_map(ctx, options: MapViewOptions | None = None, *, key: str = "map") -> dict:
    """Render the map for `ctx` and wire its click events."""
    options = options or MapViewOptions()

    handle = _get_handle(ctx, key)
    ctx.set_map_ready(handle)

    if handle.sync(ctx.center, ctx.zoom):
        debug_event("viewport_sync", key=key, center=handle.center.format(), zoom=handle.zoom)

    m = build_map(ctx, options, handle)

    map_state = st_folium(
        m,
        key=key,
        height=options.height,
        use_container_width=True,
        center=handle.center.as_list(),
        zoom=handle.zoom,
        returned_objects=["last_clicked"],
    )

    handle_map_click(ctx, map_state, options, key=key)
    return map_state
