from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional

import folium

from colors import ReportStatus, marker_style, status_color
from config import F, MAP_DEFAULTS
from filters import category_name, effective_reports, renderable_reports, report_point
from geo import GeoPoint


@dataclass(frozen=True)
class MapViewOptions:
    height: int = 400
    show_reports: bool = True
    allow_selection: bool = False
    show_user_location: bool = True
    report_data: Optional[list] = None


class ViewportHandle:
    """
    The live map handle.

    Only the map view owns one. Everyone else moves the map through
    LocationContext.center_on_user_location / fly_to, which call into here.
    Context -> map sync is one-way: pans/zooms done by the user are never
    written back into the context.
    """

    def __init__(self, center: GeoPoint, zoom: int):
        self.center = center
        self.zoom = int(zoom)
        self.last_command = "init"
        self._synced = (center, int(zoom))

    def sync(self, center: GeoPoint, zoom: int) -> bool:
        """Follow the context viewport. Returns True when it moved the map."""
        target = (center, int(zoom))
        if target == self._synced:
            return False
        self._synced = target
        self.center, self.zoom = target
        self.last_command = "sync"
        return True

    def set_view(self, point: GeoPoint, zoom: int) -> None:
        self.center = point
        self.zoom = int(zoom)
        self.last_command = "set_view"

    def fly_to(self, point: GeoPoint, zoom: int) -> None:
        self.center = point
        self.zoom = int(zoom)
        self.last_command = "fly_to"


# -----------------------------
# Markers
# -----------------------------

_PIN_CSS = """
<style>
.custom-pin-inner {
    width: 22px; height: 22px;
    border-radius: 50% 50% 50% 0;
    transform: rotate(-45deg);
    border: 2px solid #fff;
    box-shadow: 0 1px 4px rgba(0,0,0,0.4);
}
.user-location-pulse {
    width: 16px; height: 16px;
    border-radius: 50%;
    background: #1E88E5;
    border: 2px solid #fff;
    box-shadow: 0 0 0 rgba(30,136,229,0.6);
    animation: user-pulse 2s infinite;
}
@keyframes user-pulse {
    0% { box-shadow: 0 0 0 0 rgba(30,136,229,0.6); }
    70% { box-shadow: 0 0 0 14px rgba(30,136,229,0); }
    100% { box-shadow: 0 0 0 0 rgba(30,136,229,0); }
}
</style>
"""


def report_popup_html(report: dict) -> str:
    rid = html.escape(str(report.get(F.id, "")))
    title = html.escape(str(report.get(F.title, "")))
    cat = html.escape(category_name(report))
    status = html.escape(str(report.get(F.status, "")))
    return (
        f"<div style='font-weight:600'>{title}</div>"
        f"<div>Category: {cat}</div>"
        f"<div>Status: {status}</div>"
        f"<div style='font-size:12px; margin-top:4px'>"
        f"<a href='/reports/{rid}' target='_blank'>View Details</a></div>"
    )


def selected_popup_html(point: GeoPoint) -> str:
    return f"Selected Location<br>Lat: {point.lat:.6f}<br>Lng: {point.lng:.6f}"


def report_markers(reports) -> list[dict]:
    """Marker data for the reports that can be placed on the map."""
    out = []
    for r in renderable_reports(reports):
        out.append(
            {
                "id": str(r.get(F.id, "")),
                "point": report_point(r),
                "style": marker_style(r.get(F.status)),
                "popup_html": report_popup_html(r),
                "tooltip": str(r.get(F.title, "")) or None,
            }
        )
    return out


def _report_icon(style):
    if not style.known:
        return folium.Icon()  # stock marker
    return folium.DivIcon(
        class_name="custom-pin",
        html=f'<div class="custom-pin-inner" style="background-color: {style.color}"></div>',
        icon_size=(30, 30),
        icon_anchor=(15, 30),
    )


def add_status_legend(m) -> None:
    """Bottom, centered legend."""
    items = "".join(
        f"""
    <span style='display:flex; align-items:center; gap:4px;'>
        <div style="width:12px; height:12px; border-radius:50%; background:{status_color(s)}; border:1px solid #000;"></div> {s.value}
    </span>"""
        for s in ReportStatus
    )
    legend_html = f"""
<div style="
    position: fixed;
    bottom: 10px;
    left: 50%;
    transform: translateX(-50%);
    background-color: rgba(255,255,255,0.88);
    color: black;
    z-index: 9999;
    font-size: 12px;
    padding: 6px 14px;
    border-radius: 6px;
    border: 1px solid #888;
    display: flex;
    flex-wrap: wrap;
    gap: 10px;
    align-items: center;
">{items}
</div>
"""
    m.get_root().html.add_child(folium.Element(legend_html))


def build_map(ctx, options: MapViewOptions, handle: ViewportHandle, *, legend: bool = True):
    """Build the Folium map for the current location state."""
    m = folium.Map(
        location=handle.center.as_list(),
        zoom_start=handle.zoom,
        tiles=MAP_DEFAULTS["tiles"],
        control_scale=True,
        scrollWheelZoom=True,
    )
    m.get_root().header.add_child(folium.Element(_PIN_CSS))

    if options.show_user_location and ctx.user_location is not None:
        folium.Marker(
            ctx.user_location.as_list(),
            icon=folium.DivIcon(
                class_name="user-location-marker",
                html='<div class="user-location-pulse"></div>',
                icon_size=(20, 20),
                icon_anchor=(10, 10),
            ),
            popup="Your current location",
        ).add_to(m)

    if options.allow_selection and ctx.selected_location is not None:
        folium.Marker(
            ctx.selected_location.as_list(),
            popup=folium.Popup(selected_popup_html(ctx.selected_location), max_width=240),
        ).add_to(m)

    if options.show_reports:
        reports = effective_reports(options.report_data, ctx.nearby_reports)
        for marker in report_markers(reports):
            folium.Marker(
                marker["point"].as_list(),
                icon=_report_icon(marker["style"]),
                popup=folium.Popup(marker["popup_html"], max_width=300),
                tooltip=marker["tooltip"],
            ).add_to(m)

        if legend:
            add_status_legend(m)

    return m
