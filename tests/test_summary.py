from emigrant_analytics.analytics.summary import dataset_summary
from emigrant_analytics.data.registry import get_descriptor


def test_dataset_summary(sex_records):
    s = dataset_summary(sex_records, get_descriptor("sex"))

    assert s["total"] == 370
    assert s["record_count"] == 2
    assert s["categories_with_data"] == 2
    assert s["year_totals"] == [{"year": 1981, "total": 250}, {"year": 1982, "total": 120}]
    assert s["peak_year"] == 1981
    assert s["peak_total"] == 250
    assert s["latest_year"] == 1982
    assert s["latest_total"] == 120
    assert s["yoy_pct_change"] == -52.0
    assert s["default_year"] == 1982


def test_summary_without_previous_year():
    s = dataset_summary([{"category": "CANADA", "1990": 4}], get_descriptor("all_countries"))
    assert s["latest_year"] == 1990
    assert s["yoy_pct_change"] is None
    assert len(s["year_totals"]) == 40


def test_summary_of_empty_dataset():
    s = dataset_summary([], get_descriptor("age"))
    assert s["total"] == 0
    assert s["peak_year"] is None
    assert s["default_year"] is None
    assert s["yoy_pct_change"] is None
    assert s["categories_with_data"] == 0
