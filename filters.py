# filters.py
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import pandas as pd

from config import F
from geo import GeoPoint, InvalidCoordinates


@dataclass(frozen=True)
class ReportFilter:
    statuses: tuple = field(default_factory=tuple)
    categories: tuple = field(default_factory=tuple)
    text: str = ""


def report_point(report) -> Optional[GeoPoint]:
    """
    report["location"]["coordinates"] -> GeoPoint.
    Returns None for anything malformed (never raises).
    """
    if not isinstance(report, dict):
        return None

    loc = report.get(F.location)
    if not isinstance(loc, dict):
        return None

    coords = loc.get(F.coordinates)
    if not isinstance(coords, dict):
        return None

    lat = coords.get("lat")
    lng = coords.get("lng")
    if lat is None or lng is None or isinstance(lat, bool) or isinstance(lng, bool):
        return None

    try:
        return GeoPoint(lat, lng)
    except InvalidCoordinates:
        return None


def has_coordinates(report) -> bool:
    return report_point(report) is not None


def renderable_reports(reports: Optional[Iterable]) -> List[dict]:
    """Drop records that can't be placed on the map."""
    return [r for r in (reports or []) if has_coordinates(r)]


def effective_reports(report_data: Optional[List[dict]], nearby: Optional[List[dict]]) -> List[dict]:
    """Override list wins whenever it is supplied, even if empty."""
    if report_data is not None:
        return list(report_data)
    return list(nearby or [])


def category_name(report: dict) -> str:
    """Category may be a plain string or a populated {"name": ...} object."""
    cat = report.get(F.category) if isinstance(report, dict) else None
    if isinstance(cat, dict):
        return str(cat.get("name") or "").strip()
    return str(cat or "").strip()


def filter_reports(reports: Iterable[dict], flt: ReportFilter) -> List[dict]:
    statuses = {str(s) for s in flt.statuses}
    categories = {str(c).strip().lower() for c in flt.categories}
    needle = (flt.text or "").strip().lower()

    out = []
    for r in reports or []:
        if not isinstance(r, dict):
            continue
        if statuses and str(r.get(F.status, "")) not in statuses:
            continue
        if categories and category_name(r).lower() not in categories:
            continue
        if needle:
            hay = " ".join(
                [
                    str(r.get(F.title, "")),
                    str(r.get("description", "")),
                    category_name(r),
                ]
            ).lower()
            if needle not in hay:
                continue
        out.append(r)
    return out


def reports_frame(reports: Iterable[dict]) -> pd.DataFrame:
    """Table view of report records (below-map panel)."""
    cols = ["id", "title", "category", "status", "lat", "lng"]
    rows = []
    for r in reports or []:
        if not isinstance(r, dict):
            continue
        pt = report_point(r)
        rows.append(
            {
                "id": str(r.get(F.id, "")),
                "title": str(r.get(F.title, "")),
                "category": category_name(r),
                "status": str(r.get(F.status, "")),
                "lat": pt.lat if pt else None,
                "lng": pt.lng if pt else None,
            }
        )
    return pd.DataFrame(rows, columns=cols)


def status_counts(reports: Iterable[dict]) -> Dict[str, int]:
    df = reports_frame(reports)
    if df.empty:
        return {}
    return df.groupby("status").size().to_dict()
