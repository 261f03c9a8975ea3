"""debug_tools.py

Session event log for the location state, shown in the sidebar when the
app is opened with `?debug=1`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pandas as pd
import streamlit as st


_LOG_KEY = "debug_log"
_MAX_EVENTS = 250
_SHOWN_EVENTS = 25


def is_debug_mode() -> bool:
    try:
        flag = st.query_params.get("debug", "")
    except Exception:  # no script run context (tests, bare imports)
        return False
    return str(flag).strip().lower() in ("1", "true")


def append_event(log: list, name: str, fields: dict, limit: int = _MAX_EVENTS) -> list:
    """Add one event; the oldest ones fall off past `limit`."""
    log.append(
        {
            "ts": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "name": str(name),
            "details": ", ".join(f"{k}={v}" for k, v in fields.items()),
        }
    )
    return log[-limit:]


def debug_event(name: str, **fields: Any) -> None:
    if not is_debug_mode():
        return
    st.session_state[_LOG_KEY] = append_event(st.session_state.get(_LOG_KEY, []), name, fields)


def render_debug_panel(ctx=None) -> None:
    """Recent events (newest first) and the current location snapshot."""
    if not is_debug_mode():
        return

    with st.sidebar.expander("🛠️ Debug", expanded=False):
        events = st.session_state.get(_LOG_KEY, [])
        if events:
            recent = pd.DataFrame(events[-_SHOWN_EVENTS:][::-1])
            st.dataframe(recent, hide_index=True, use_container_width=True)
        else:
            st.info("No debug events yet.")

        if ctx is not None:
            st.json(ctx.snapshot(), expanded=False)
