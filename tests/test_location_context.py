from conftest import (
    DeferredDispatch,
    FakeGeocoder,
    FakeLocator,
    FakeReports,
    RecordingHandle,
)
from config import CLOSE_ZOOM, MAP_DEFAULTS, NEARBY_RADIUS
from geo import GeoPoint


def test_defaults_before_anything_happens(make_ctx):
    ctx = make_ctx()

    assert ctx.center == GeoPoint(MAP_DEFAULTS["center_lat"], MAP_DEFAULTS["center_lon"])
    assert ctx.zoom == MAP_DEFAULTS["zoom_start"]
    assert ctx.user_location is None
    assert ctx.selected_location is None
    assert ctx.selected_address == ""
    assert ctx.map_handle is None
    assert ctx.nearby_reports == []


def test_initialize_sets_user_location_and_fetches_nearby(make_ctx):
    me = GeoPoint(51.5, -0.12)
    reports = FakeReports([{"_id": "a"}])
    ctx = make_ctx(locator=FakeLocator(me), reports=reports)

    ctx.initialize()

    assert ctx.user_location == me
    assert ctx.center == me
    assert reports.calls == [(me, NEARBY_RADIUS)]
    assert ctx.nearby_reports == [{"_id": "a"}]


def test_initialize_reads_position_only_once(make_ctx):
    locator = FakeLocator(GeoPoint(1, 1))
    ctx = make_ctx(locator=locator)

    ctx.initialize()
    ctx.initialize()

    assert locator.calls == 1


def test_geolocation_failure_degrades_to_default_center(make_ctx):
    reports = FakeReports()
    ctx = make_ctx(locator=FakeLocator(fail=True), reports=reports)
    default_center = ctx.center

    ctx.initialize()

    assert ctx.user_location is None
    assert ctx.center == default_center
    assert reports.calls == []


def test_unsupported_geolocation_is_silent(make_ctx):
    ctx = make_ctx(locator=FakeLocator(None))
    ctx.initialize()
    assert ctx.user_location is None


def test_nearby_fetch_failure_keeps_user_location(make_ctx):
    me = GeoPoint(10, 10)
    ctx = make_ctx(locator=FakeLocator(me), reports=FakeReports(fail=True))

    ctx.initialize()

    assert ctx.user_location == me
    assert ctx.nearby_reports == []


def test_refresh_location_reads_again(make_ctx):
    locator = FakeLocator(GeoPoint(1, 1))
    ctx = make_ctx(locator=locator)

    ctx.initialize()
    locator.point = GeoPoint(2, 2)
    ctx.refresh_location()

    assert locator.calls == 2
    assert ctx.user_location == GeoPoint(2, 2)


def test_click_selects_point_before_geocode_finishes(make_ctx):
    dispatch = DeferredDispatch()
    ctx = make_ctx(geocoder=FakeGeocoder({(40.0, -74.0): "123 Main St"}), dispatch=dispatch)

    ctx.handle_map_click({"lat": 40.0, "lng": -74.0})

    assert ctx.selected_location == GeoPoint(40.0, -74.0)
    assert ctx.selected_address == ""

    dispatch.run_all()
    assert ctx.selected_address == "123 Main St"


def test_click_geocode_failure_leaves_address_unchanged(make_ctx, here):
    ctx = make_ctx(geocoder=FakeGeocoder(fail=True))
    ctx.set_selected_address("typed by hand")

    ctx.handle_map_click(here)

    assert ctx.selected_location == here
    assert ctx.selected_address == "typed by hand"


def test_stale_geocode_does_not_overwrite_newer_click(make_ctx):
    dispatch = DeferredDispatch()
    geocoder = FakeGeocoder({(1.0, 1.0): "first", (2.0, 2.0): "second"})
    ctx = make_ctx(geocoder=geocoder, dispatch=dispatch)

    ctx.handle_map_click((1.0, 1.0))
    ctx.handle_map_click((2.0, 2.0))

    # newer lookup resolves first, older one last
    dispatch.run(1)
    dispatch.run(0)

    assert ctx.selected_location == GeoPoint(2.0, 2.0)
    assert ctx.selected_address == "second"


def test_typed_address_wins_over_inflight_geocode(make_ctx, here):
    dispatch = DeferredDispatch()
    ctx = make_ctx(geocoder=FakeGeocoder({(here.lat, here.lng): "looked up"}), dispatch=dispatch)

    ctx.handle_map_click(here)
    ctx.set_selected_address("Corner of 5th and Main")
    dispatch.run_all()

    assert ctx.selected_address == "Corner of 5th and Main"


def test_stale_nearby_fetch_is_dropped(make_ctx):
    dispatch = DeferredDispatch()
    locator = FakeLocator(GeoPoint(1, 1))
    reports = FakeReports([{"_id": "old"}])
    ctx = make_ctx(locator=locator, reports=reports, dispatch=dispatch)

    ctx.initialize()
    dispatch.run_all()  # position read, then the nearby fetch it queued
    assert ctx.nearby_reports == [{"_id": "old"}]

    locator.point = GeoPoint(2, 2)
    ctx.refresh_location()
    dispatch.run(0)  # position read -> queues a nearby fetch
    locator.point = GeoPoint(3, 3)
    ctx.refresh_location()
    dispatch.run(1)  # second position read -> queues another nearby fetch

    # jobs left: [nearby for (2,2), nearby for (3,3)]
    reports.reports = [{"_id": "newest"}]
    dispatch.run(1)
    reports.reports = [{"_id": "stale"}]
    dispatch.run(0)

    assert ctx.user_location == GeoPoint(3, 3)
    assert ctx.nearby_reports == [{"_id": "newest"}]


def test_close_drops_inflight_results(make_ctx, here):
    dispatch = DeferredDispatch()
    ctx = make_ctx(geocoder=FakeGeocoder({(here.lat, here.lng): "late"}), dispatch=dispatch)

    ctx.handle_map_click(here)
    ctx.close()
    dispatch.run_all()

    assert ctx.selected_address == ""


def test_center_on_user_location_is_noop_without_handle_or_position(make_ctx):
    ctx = make_ctx()
    before = ctx.snapshot()

    ctx.center_on_user_location()  # no handle, no position
    handle = RecordingHandle()
    ctx.set_map_ready(handle)
    ctx.center_on_user_location()  # handle, still no position

    assert handle.commands == []
    assert ctx.snapshot()["center"] == before["center"]


def test_center_on_user_location_uses_close_zoom(make_ctx):
    me = GeoPoint(5, 5)
    ctx = make_ctx(locator=FakeLocator(me))
    ctx.initialize()
    handle = RecordingHandle()
    ctx.set_map_ready(handle)

    ctx.center_on_user_location()

    assert handle.commands == [("set_view", me, CLOSE_ZOOM)]


def test_fly_to_requires_map_handle(make_ctx, here):
    ctx = make_ctx()
    ctx.fly_to(here)  # before ready: nothing to do

    handle = RecordingHandle()
    ctx.set_map_ready(handle)
    ctx.set_map_ready(handle)
    ctx.fly_to([1, 2], 9)

    assert ctx.is_map_ready
    assert handle.commands == [("fly_to", GeoPoint(1, 2), 9)]


def test_direct_setters_seed_and_clear(make_ctx, here):
    ctx = make_ctx()

    ctx.set_selected_location(here)
    ctx.set_selected_address("HQ")
    assert ctx.selected_location == here
    assert ctx.selected_address == "HQ"

    ctx.set_selected_location(None)
    ctx.set_selected_address("")
    assert ctx.selected_location is None
    assert ctx.selected_address == ""
