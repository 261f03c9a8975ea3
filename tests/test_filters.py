from filters import (
    ReportFilter,
    category_name,
    effective_reports,
    filter_reports,
    has_coordinates,
    renderable_reports,
    reports_frame,
    status_counts,
)


REPORTS = [
    {
        "_id": "1",
        "title": "Pothole on Elm",
        "category": {"name": "Roads"},
        "status": "Pending",
        "location": {"coordinates": {"lat": 1, "lng": 1}},
    },
    {
        "_id": "2",
        "title": "Street light out",
        "category": "Lighting",
        "status": "Resolved",
        "description": "Dark corner",
        "location": {"coordinates": {"lat": 2, "lng": 2}},
    },
    {
        "_id": "3",
        "title": "Flooded underpass",
        "category": "Roads",
        "status": "Pending",
        "location": {"address": "no coordinates"},
    },
]


def test_has_coordinates():
    assert has_coordinates(REPORTS[0]) is True
    assert has_coordinates(REPORTS[2]) is False
    assert has_coordinates({"location": {"coordinates": {"lat": True, "lng": 1}}}) is False
    assert has_coordinates({"location": {"coordinates": {"lat": "1.5", "lng": "2"}}}) is True


def test_renderable_reports_keeps_order():
    assert [r["_id"] for r in renderable_reports(REPORTS)] == ["1", "2"]
    assert renderable_reports(None) == []


def test_effective_reports_override():
    nearby = [{"_id": "n"}]
    assert effective_reports(None, nearby) == nearby
    assert effective_reports([{"_id": "o"}], nearby) == [{"_id": "o"}]
    assert effective_reports([], nearby) == []


def test_category_name_accepts_string_or_object():
    assert category_name(REPORTS[0]) == "Roads"
    assert category_name(REPORTS[1]) == "Lighting"
    assert category_name({}) == ""


def test_filter_reports():
    assert [r["_id"] for r in filter_reports(REPORTS, ReportFilter())] == ["1", "2", "3"]
    assert [r["_id"] for r in filter_reports(REPORTS, ReportFilter(statuses=("Pending",)))] == ["1", "3"]
    assert [r["_id"] for r in filter_reports(REPORTS, ReportFilter(categories=("roads",)))] == ["1", "3"]
    assert [r["_id"] for r in filter_reports(REPORTS, ReportFilter(text="dark"))] == ["2"]
    assert filter_reports(REPORTS, ReportFilter(statuses=("Closed",))) == []


def test_reports_frame_and_status_counts():
    df = reports_frame(REPORTS)

    assert list(df.columns) == ["id", "title", "category", "status", "lat", "lng"]
    assert len(df) == 3
    assert df["lat"].isna().tolist() == [False, False, True]

    assert status_counts(REPORTS) == {"Pending": 2, "Resolved": 1}
    assert status_counts([]) == {}
