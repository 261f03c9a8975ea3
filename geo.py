"""geo.py

Geographic points plus the two location services the map depends on:
reverse geocoding (Nominatim) and a one-shot position read.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import requests

from config import GEOLOCATION_URL, HTTP_TIMEOUT, NOMINATIM_URL, USER_AGENT


class InvalidCoordinates(ValueError):
    pass


class GeocodingError(RuntimeError):
    pass


class LocationUnavailable(RuntimeError):
    pass


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def __post_init__(self):
        try:
            lat = float(self.lat)
            lng = float(self.lng)
        except (TypeError, ValueError) as e:
            raise InvalidCoordinates(f"Not a coordinate pair: {self.lat!r}, {self.lng!r}") from e

        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidCoordinates(f"Not a coordinate pair: {lat}, {lng}")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinates(f"Latitude out of range: {lat}")
        if not -180.0 <= lng <= 180.0:
            raise InvalidCoordinates(f"Longitude out of range: {lng}")

        # normalize ints / numeric strings
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", lng)

    @classmethod
    def from_any(cls, value) -> GeoPoint | None:
        """
        Accepts:
          - GeoPoint
          - (lat, lng) / [lat, lng]
          - {"lat": .., "lng": ..} (st_folium last_clicked) or {"lat": .., "lon": ..}
        """
        if value is None:
            return None
        if isinstance(value, GeoPoint):
            return value
        if isinstance(value, dict):
            lng = value.get("lng", value.get("lon"))
            return cls(value.get("lat"), lng)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls(value[0], value[1])
        raise InvalidCoordinates(f"Cannot read a point from {value!r}")

    def as_list(self) -> list[float]:
        """Folium wants [lat, lng]."""
        return [self.lat, self.lng]

    def format(self, places: int = 6) -> str:
        return f"{self.lat:.{places}f}, {self.lng:.{places}f}"


class ReverseGeocoder:
    """(lat, lng) -> display address via OpenStreetMap Nominatim."""

    def __init__(self, url: str = NOMINATIM_URL, *, timeout: float = HTTP_TIMEOUT, session=None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def reverse(self, point: GeoPoint) -> str | None:
        params = {
            "format": "json",
            "lat": point.lat,
            "lon": point.lng,
            "zoom": 18,
            "addressdetails": 1,
        }
        try:
            r = self.session.get(
                self.url,
                params=params,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise GeocodingError(f"Reverse geocoding failed for {point.format()}: {e}") from e

        if not isinstance(data, dict):
            return None
        name = str(data.get("display_name") or "").strip()
        return name or None


class IpLocator:
    """
    One-shot, approximate position read.

    Not continuous tracking: each call is a single request.
    """

    def __init__(self, url: str = GEOLOCATION_URL, *, timeout: float = HTTP_TIMEOUT, session=None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def locate(self) -> GeoPoint | None:
        try:
            r = self.session.get(self.url, headers={"User-Agent": USER_AGENT}, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise LocationUnavailable(f"Geolocation request failed: {e}") from e

        if not isinstance(data, dict) or data.get("status", "success") != "success":
            raise LocationUnavailable(f"Geolocation refused: {data!r}")

        lat = data.get("lat", data.get("latitude"))
        lng = data.get("lon", data.get("longitude"))
        if lat is None or lng is None:
            return None

        try:
            return GeoPoint(lat, lng)
        except InvalidCoordinates as e:
            raise LocationUnavailable(str(e)) from e


class NullLocator:
    """Platform without a geolocation capability."""

    def locate(self) -> GeoPoint | None:
        return None
