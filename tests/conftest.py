import pytest

from geo import GeocodingError, GeoPoint, LocationUnavailable
from location_context import LocationContext
from reports_api import ApiError


class FakeGeocoder:
    def __init__(self, answers=None, fail=False):
        self.answers = answers or {}
        self.fail = fail
        self.calls = []

    def reverse(self, point):
        self.calls.append(point)
        if self.fail:
            raise GeocodingError("service down")
        return self.answers.get((point.lat, point.lng))


class FakeLocator:
    def __init__(self, point=None, fail=False):
        self.point = point
        self.fail = fail
        self.calls = 0

    def locate(self):
        self.calls += 1
        if self.fail:
            raise LocationUnavailable("denied")
        return self.point


class FakeReports:
    def __init__(self, reports=None, fail=False):
        self.reports = reports or []
        self.fail = fail
        self.calls = []

    def nearby(self, point, radius=5):
        self.calls.append((point, radius))
        if self.fail:
            raise ApiError("boom", 500)
        return list(self.reports)


class DeferredDispatch:
    """Collects jobs so tests decide when (and in which order) they finish."""

    def __init__(self):
        self.jobs = []

    def __call__(self, job):
        self.jobs.append(job)

    def run(self, index):
        self.jobs.pop(index)()

    def run_all(self):
        while self.jobs:
            self.jobs.pop(0)()


class RecordingHandle:
    def __init__(self):
        self.commands = []

    def set_view(self, point, zoom):
        self.commands.append(("set_view", point, zoom))

    def fly_to(self, point, zoom):
        self.commands.append(("fly_to", point, zoom))


@pytest.fixture
def make_ctx():
    def _make(*, geocoder=None, locator=None, reports=None, dispatch=None):
        kwargs = {}
        if dispatch is not None:
            kwargs["dispatch"] = dispatch
        return LocationContext(
            geocoder=geocoder or FakeGeocoder(),
            locator=locator or FakeLocator(),
            reports=reports or FakeReports(),
            **kwargs,
        )

    return _make


@pytest.fixture
def here():
    return GeoPoint(40.0, -74.0)
