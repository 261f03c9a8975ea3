import altair as alt
import pandas as pd
import streamlit as st

from colors import ReportStatus, status_color
from filters import reports_frame, status_counts


def render_selection_details(ctx) -> None:
    """Below-map panel for the clicked point."""
    st.markdown("### Selected location")

    if ctx.selected_location is None:
        st.info("Please click on the map to select a location.")
        return

    st.markdown(
        f"""
**Coordinates:** {ctx.selected_location.format(6)}
**Address:** {ctx.selected_address or "—"}
"""
    )


def status_chart(reports) -> alt.Chart | None:
    counts = status_counts(reports)
    if not counts:
        return None

    chart_df = pd.DataFrame(
        [{"Status": k, "Reports": int(v), "Color": status_color(k)} for k, v in counts.items()]
    )
    order = [s.value for s in ReportStatus] + sorted(set(chart_df["Status"]) - {s.value for s in ReportStatus})

    return (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X("Status:N", sort=order, title="Status"),
            y=alt.Y("Reports:Q", title="Reports"),
            color=alt.Color("Color:N", scale=None, legend=None),
            tooltip=["Status", "Reports"],
        )
    )


def render_reports_panel(reports) -> None:
    """Table + status chart for the reports currently on the map."""
    st.markdown("### Reports on the map")

    df = reports_frame(reports)
    if df.empty:
        st.info("No reports found for the current filters.")
        return

    c1, c2 = st.columns([2, 1])
    with c1:
        st.dataframe(df, use_container_width=True, hide_index=True)
    with c2:
        chart = status_chart(reports)
        if chart is not None:
            st.altair_chart(chart, use_container_width=True)
