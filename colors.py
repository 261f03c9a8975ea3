# colors.py
from dataclasses import dataclass
from enum import Enum


class ReportStatus(Enum):
    PENDING = "Pending"
    ASSIGNED = "Assigned"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value) -> "ReportStatus | None":
        """Exact status label -> member. Anything else -> None."""
        if isinstance(value, ReportStatus):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


DEFAULT_MARKER_COLOR = "#2A81CB"  # stock Leaflet marker blue


@dataclass(frozen=True)
class MarkerStyle:
    color: str
    known: bool


def status_color(status) -> str:
    s = ReportStatus.parse(status)

    if s is ReportStatus.PENDING: return "#FFC107"      # amber
    if s is ReportStatus.ASSIGNED: return "#3F51B5"     # indigo
    if s is ReportStatus.IN_PROGRESS: return "#2196F3"  # blue
    if s is ReportStatus.RESOLVED: return "#4CAF50"     # green
    if s is ReportStatus.CLOSED: return "#9E9E9E"       # grey
    if s is ReportStatus.REJECTED: return "#F44336"     # red
    if s is ReportStatus.CANCELLED: return "#FF9800"    # orange

    # unknown / missing status
    return DEFAULT_MARKER_COLOR


def marker_style(status) -> MarkerStyle:
    """
    Known statuses get a colored pin.
    Unknown => default (stock) marker.
    """
    known = ReportStatus.parse(status) is not None
    return MarkerStyle(color=status_color(status), known=known)


# -----------------------------
# Severity (report form)
# -----------------------------

def severity_color(level) -> str:
    lvl = str(level or "").strip().lower()

    if lvl == "low": return "#3B82F6"
    if lvl == "medium": return "#EAB308"
    if lvl == "high": return "#EF4444"
    if lvl == "critical": return "#7F1D1D"
    return "#9E9E9E"
