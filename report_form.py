"""report_form.py

Forms that read the map selection.

The report form, the department editor and the region editor all follow the
same pattern: mirror `selected_location` / `selected_address` from the
LocationContext into their own fields, and seed / clear the selection when an
editor opens or closes. The address always stays editable by hand, so a
failed lookup never blocks a submission.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from geo import GeoPoint, InvalidCoordinates


@dataclass(frozen=True)
class ReportDraft:
    title: str = ""
    description: str = ""
    category: str = ""
    region: str = ""
    severity: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: str = ""


def sync_location(draft: ReportDraft, ctx) -> ReportDraft:
    """
    Location fields always come from the map state, never from an older draft:
      - the map selection, else the user position, else nothing
      - the looked-up (or typed) address, possibly empty
    """
    point = ctx.selected_location or ctx.user_location
    return replace(
        draft,
        lat=point.lat if point is not None else None,
        lng=point.lng if point is not None else None,
        address=ctx.selected_address or "",
    )


def validate_draft(draft: ReportDraft) -> list[str]:
    errors = []

    required = [draft.title, draft.description, draft.category, draft.region, draft.severity]
    if not all(str(v or "").strip() for v in required):
        errors.append("Please fill in all required fields")

    if draft.lat is None or draft.lng is None or not draft.address.strip():
        errors.append("Please select a location on the map and provide an address")
    else:
        try:
            GeoPoint(draft.lat, draft.lng)
        except InvalidCoordinates:
            errors.append("The selected location is not a valid coordinate pair")

    return errors


def build_report_payload(draft: ReportDraft) -> dict:
    """Multipart form fields for POST /reports."""
    return {
        "title": draft.title.strip(),
        "description": draft.description.strip(),
        "category": draft.category,
        "region": draft.region,
        "severity": draft.severity,
        "location[address]": draft.address.strip(),
        "location[lat]": draft.lat,
        "location[lng]": draft.lng,
    }


# -----------------------------
# Editors (department / region)
# -----------------------------

def coordinates_from_record(record: dict) -> Optional[GeoPoint]:
    """
    Departments keep location.coordinates, regions keep coordinates.
    Returns None when neither is usable.
    """
    if not isinstance(record, dict):
        return None

    loc = record.get("location")
    coords = loc.get("coordinates") if isinstance(loc, dict) else None
    if not isinstance(coords, dict):
        coords = record.get("coordinates")
    if not isinstance(coords, dict):
        return None

    try:
        return GeoPoint(coords.get("lat"), coords.get("lng"))
    except InvalidCoordinates:
        return None


def coordinates_from_text(lat_text, lng_text) -> Optional[GeoPoint]:
    """Typed lat/lng -> point, or None while either field is incomplete."""
    try:
        return GeoPoint(float(lat_text), float(lng_text))
    except (TypeError, ValueError):
        return None


def seed_selection(ctx, point: Optional[GeoPoint], address: str = "") -> None:
    """Editor opened: show the record's stored location on the map."""
    if point is None:
        clear_selection(ctx)
        return
    ctx.set_selected_location(point)
    ctx.set_selected_address(address or "")


def clear_selection(ctx) -> None:
    """Editor closed / cancelled."""
    ctx.set_selected_location(None)
    ctx.set_selected_address("")


def build_department_payload(form: dict, ctx) -> dict:
    try:
        officers = int(form.get("officersCount") or 0)
    except (TypeError, ValueError):
        officers = 0

    data = {
        "name": form.get("name", ""),
        "description": form.get("description", ""),
        "headOfficer": form.get("headOfficer", ""),
        "headquarters": ctx.selected_address or form.get("headquarters", ""),
        "officersCount": officers,
        "contactEmail": form.get("contactEmail") or "",
        "contactPhone": form.get("contactPhone") or "",
        "status": form.get("status", "active"),
    }

    if ctx.selected_location is not None:
        data["location"] = {
            "coordinates": {
                "lat": ctx.selected_location.lat,
                "lng": ctx.selected_location.lng,
            },
            "address": ctx.selected_address,
        }

    return data


def build_region_payload(form: dict, ctx) -> dict:
    def num(key):
        try:
            return float(form.get(key) or 0)
        except (TypeError, ValueError):
            return 0.0

    coords = form.get("coordinates") or {}
    if ctx.selected_location is not None:
        coords = {"lat": ctx.selected_location.lat, "lng": ctx.selected_location.lng}

    return {
        "name": form.get("name", ""),
        "type": form.get("type", ""),
        "population": num("population"),
        "area": num("area"),
        "assignedOfficers": num("assignedOfficers"),
        "coordinates": coords,
        "status": form.get("status", "active"),
    }
