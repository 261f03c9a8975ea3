"""reports_api.py

Thin client for the CivicPulse REST backend.

Every endpoint answers with an envelope:
  {"success": true, "data": ...}
  {"success": false, "message": "..."}
"""

from __future__ import annotations

import requests

from config import API_TOKEN, API_URL, HTTP_TIMEOUT, NEARBY_RADIUS
from geo import GeoPoint


class ApiError(RuntimeError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class ApiClient:
    def __init__(
        self,
        base_url: str = API_URL,
        *,
        token: str | None = API_TOKEN,
        timeout: float = HTTP_TIMEOUT,
        session=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def request(self, method: str, path: str, **kwargs):
        """Send a request and unwrap the `data` field of the envelope."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            r = self.session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise ApiError(f"Could not reach the API: {e}") from e

        try:
            body = r.json()
        except ValueError:
            body = {}

        if not r.ok:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or f"HTTP {r.status_code} from {path}", r.status_code)

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or f"Unexpected response from {path}", r.status_code)

        return body.get("data")

    def get(self, path: str, **params):
        return self.request("GET", path, params=params or None)


class ReportsClient:
    """Report, category, region and department endpoints used by the map pages."""

    def __init__(self, api: ApiClient | None = None):
        self.api = api or ApiClient()

    def nearby(self, point: GeoPoint, radius: float = NEARBY_RADIUS) -> list[dict]:
        data = self.api.get("/reports", lat=point.lat, lng=point.lng, radius=radius)
        return list(data or [])

    def create(self, fields: dict, images=()) -> dict:
        """
        Multipart report submission.

        `images` is an iterable of (filename, bytes, mime) tuples, sent as
        repeated `images` parts.
        """
        files = [("images", (name, content, mime)) for name, content, mime in images]
        return self.api.request("POST", "/reports", data=fields, files=files or None) or {}

    def categories(self) -> list[dict]:
        return list(self.api.get("/categories") or [])

    def regions(self) -> list[dict]:
        return list(self.api.get("/regions") or [])

    def departments(self) -> list[dict]:
        return list(self.api.get("/departments") or [])

    def update_department(self, dept_id: str, data: dict) -> dict:
        return self.api.request("PUT", f"/departments/{dept_id}", json=data) or {}

    def update_region(self, region_id: str, data: dict) -> dict:
        return self.api.request("PUT", f"/regions/{region_id}", json=data) or {}
