# config.py
import os
from dataclasses import dataclass
from pathlib import Path

import streamlit as st

# Base directory of the repo
BASE_DIR = Path(__file__).resolve().parent


def get_setting(name: str, default: str | None = None) -> str | None:
    """Read a setting.

    Prefers Streamlit secrets (Streamlit Cloud), falls back to an env var.
    """
    try:
        val = st.secrets.get(name, None)
        if val:
            return str(val)
    except Exception:
        pass

    val = os.environ.get(name)
    return str(val) if val else default


# -----------------------------
# External services
# -----------------------------
API_URL = get_setting("CIVICPULSE_API_URL", "http://localhost:5000/api")
API_TOKEN = get_setting("CIVICPULSE_API_TOKEN")

# OpenStreetMap Nominatim reverse geocoding
NOMINATIM_URL = get_setting("NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse")

# One-shot IP geolocation (approximate user position)
GEOLOCATION_URL = get_setting("GEOLOCATION_URL", "http://ip-api.com/json")

HTTP_TIMEOUT = float(get_setting("HTTP_TIMEOUT", "10") or 10)
USER_AGENT = get_setting("USER_AGENT", "CivicPulse/1.0")

# -----------------------------
# Streamlit page config
# -----------------------------
DEFAULT_PAGE = dict(
    page_title="CivicPulse",
    layout="wide",
    initial_sidebar_state="expanded",
)

PAGES = ["Issue map", "Report an issue", "Location editor"]

# -----------------------------
# Map defaults
# -----------------------------
MAP_DEFAULTS = dict(
    center_lat=37.7749,  # San Francisco
    center_lon=-122.4194,
    zoom_start=13,
    tiles="OpenStreetMap",
)

# Zoom used by "center on me" and fly-to
CLOSE_ZOOM = 15

# Radius (miles) for the nearby reports query
NEARBY_RADIUS = 5

SEVERITY_LEVELS = ["Low", "Medium", "High", "Critical"]


# -----------------------------
# Report record keys (single source of truth)
# -----------------------------
@dataclass(frozen=True)
class Fields:
    id: str = "_id"
    title: str = "title"
    category: str = "category"
    status: str = "status"
    location: str = "location"
    coordinates: str = "coordinates"
    address: str = "address"

F = Fields()
