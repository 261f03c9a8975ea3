"""location_context.py

Single source of truth for the map viewport and the location-selection
workflow shared by every page that embeds a map:

  position read -> user_location -> center
  map click -> selected_location -> reverse geocode -> selected_address

One LocationContext is built per session (see state.py) and passed to the
pages that need it.

Async work (position read, reverse geocode, nearby fetch) goes through a
dispatcher. Each operation has its own generation counter; a result is only
applied while its token is still the latest for that operation, so a slow
response can never overwrite a newer one.
"""

from __future__ import annotations

import logging
from typing import Callable

from config import CLOSE_ZOOM, MAP_DEFAULTS, NEARBY_RADIUS
from debug_tools import debug_event
from geo import GeocodingError, GeoPoint, LocationUnavailable
from reports_api import ApiError

logger = logging.getLogger(__name__)

Job = Callable[[], None]

_OPS = ("geolocation", "geocode", "nearby")


def run_inline(job: Job) -> None:
    job()


class LocationContext:
    def __init__(
        self,
        *,
        geocoder,
        locator,
        reports,
        dispatch: Callable[[Job], None] = run_inline,
        center: GeoPoint | None = None,
        zoom: int = MAP_DEFAULTS["zoom_start"],
        nearby_radius: float = NEARBY_RADIUS,
    ):
        self.geocoder = geocoder
        self.locator = locator
        self.reports = reports
        self.dispatch = dispatch
        self.nearby_radius = nearby_radius

        self.center = center or GeoPoint(MAP_DEFAULTS["center_lat"], MAP_DEFAULTS["center_lon"])
        self.zoom = int(zoom)
        self.user_location: GeoPoint | None = None
        self.selected_location: GeoPoint | None = None
        self.selected_address: str = ""
        self.map_handle = None
        self.nearby_reports: list[dict] = []

        self._initialized = False
        self._closed = False
        self._generations = {op: 0 for op in _OPS}

    # -----------------------------
    # Request generations
    # -----------------------------

    def _next_token(self, op: str) -> int:
        self._generations[op] += 1
        return self._generations[op]

    def _is_current(self, op: str, token: int) -> bool:
        return not self._closed and self._generations[op] == token

    def _invalidate(self, op: str) -> None:
        self._generations[op] += 1

    # -----------------------------
    # Position + nearby reports
    # -----------------------------

    def initialize(self) -> None:
        """First mount only: one best-effort position read."""
        if self._initialized:
            return
        self._initialized = True
        self._request_position()

    def refresh_location(self) -> None:
        """Explicit re-trigger of the position read."""
        self._request_position()

    def _request_position(self) -> None:
        token = self._next_token("geolocation")

        def job():
            try:
                point = self.locator.locate()
            except LocationUnavailable as e:
                logger.warning("Error getting user location: %s", e)
                debug_event("geolocation_failed", error=e)
                return

            if point is None:
                logger.info("Geolocation is not available.")
                return

            if not self._is_current("geolocation", token):
                debug_event("geolocation_stale", token=token)
                return

            self.user_location = point
            self.center = point
            debug_event("user_location", point=point.format())
            self._fetch_nearby(point)

        self.dispatch(job)

    def _fetch_nearby(self, point: GeoPoint) -> None:
        token = self._next_token("nearby")

        def job():
            try:
                reports = self.reports.nearby(point, self.nearby_radius)
            except ApiError as e:
                logger.warning("Error fetching nearby reports: %s", e)
                debug_event("nearby_failed", error=e)
                return

            if not self._is_current("nearby", token):
                debug_event("nearby_stale", token=token)
                return

            self.nearby_reports = list(reports or [])
            debug_event("nearby_reports", count=len(self.nearby_reports))

        self.dispatch(job)

    # -----------------------------
    # Map handle + viewport commands
    # -----------------------------

    def set_map_ready(self, handle) -> None:
        if self.map_handle is handle:
            return
        self.map_handle = handle
        debug_event("map_ready")

    @property
    def is_map_ready(self) -> bool:
        return self.map_handle is not None

    def set_center(self, point) -> None:
        self.center = GeoPoint.from_any(point)

    def set_zoom(self, zoom: int) -> None:
        self.zoom = int(zoom)

    def center_on_user_location(self) -> None:
        if self.map_handle is None or self.user_location is None:
            return
        self.map_handle.set_view(self.user_location, CLOSE_ZOOM)

    def fly_to(self, point, zoom: int = CLOSE_ZOOM) -> None:
        if self.map_handle is None:
            return
        self.map_handle.fly_to(GeoPoint.from_any(point), int(zoom))

    # -----------------------------
    # Selection
    # -----------------------------

    def handle_map_click(self, point) -> None:
        """Select `point` now; fill the address when the lookup comes back."""
        point = GeoPoint.from_any(point)
        self.selected_location = point
        debug_event("map_click", point=point.format())
        self._reverse_geocode(point)

    def _reverse_geocode(self, point: GeoPoint) -> None:
        token = self._next_token("geocode")

        def job():
            try:
                address = self.geocoder.reverse(point)
            except GeocodingError as e:
                logger.warning("Error reverse geocoding: %s", e)
                debug_event("geocode_failed", error=e)
                return

            if not address:
                return

            if not self._is_current("geocode", token):
                debug_event("geocode_stale", point=point.format())
                return

            self.selected_address = address

        self.dispatch(job)

    def set_selected_location(self, point) -> None:
        self._invalidate("geocode")
        self.selected_location = GeoPoint.from_any(point)

    def set_selected_address(self, text: str) -> None:
        # a typed address wins over any lookup still in flight
        self._invalidate("geocode")
        self.selected_address = str(text or "")

    # -----------------------------
    # Teardown / diagnostics
    # -----------------------------

    def close(self) -> None:
        """Drop every in-flight result."""
        self._closed = True
        for op in _OPS:
            self._invalidate(op)

    def snapshot(self) -> dict:
        def fmt(p):
            return p.format() if p is not None else None

        return {
            "center": fmt(self.center),
            "zoom": self.zoom,
            "user_location": fmt(self.user_location),
            "selected_location": fmt(self.selected_location),
            "selected_address": self.selected_address,
            "map_ready": self.is_map_ready,
            "nearby_reports": len(self.nearby_reports),
        }
