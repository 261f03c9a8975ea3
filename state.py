import streamlit as st

from geo import IpLocator, NullLocator, ReverseGeocoder
from location_context import LocationContext
from reports_api import ApiClient, ReportsClient

_CTX_KEY = "location_context"


def build_location_context(*, api: ApiClient | None = None, use_geolocation: bool = True) -> LocationContext:
    """Wire the real services into a fresh LocationContext."""
    reports = ReportsClient(api or ApiClient())
    return LocationContext(
        geocoder=ReverseGeocoder(),
        locator=IpLocator() if use_geolocation else NullLocator(),
        reports=reports,
    )


def init_state() -> None:
    """Central place to initialize Streamlit session state.

    One LocationContext per browser session; pages receive it as an argument.
    """
    defaults = {
        "page": "Issue map",
        "status_filter": [],
        "category_filter": [],
        "search_text": "",
        # which entity the admin location editor has open: ("department"|"region", id) or None
        "editing_entity": None,
    }

    for k, v in defaults.items():
        st.session_state.setdefault(k, v)

    if _CTX_KEY not in st.session_state:
        st.session_state[_CTX_KEY] = build_location_context()


def get_location_context() -> LocationContext:
    init_state()
    return st.session_state[_CTX_KEY]


def reset_location_context(store=None, factory=build_location_context) -> LocationContext:
    """Replace the session's LocationContext with a fresh one.

    The old context is closed first so lookups still in flight for it are dropped.
    """
    store = st.session_state if store is None else store
    old = store.get(_CTX_KEY)
    if old is not None:
        old.close()
    store[_CTX_KEY] = factory()
    return store[_CTX_KEY]
