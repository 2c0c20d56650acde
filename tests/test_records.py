from emigrant_analytics.analytics.records import enumerate_tuples, paginate, search
from emigrant_analytics.data.registry import get_descriptor
from emigrant_analytics.data.schemas import NormalizedTuple

SEX = get_descriptor("sex")


def test_enumerate_tuples_orders_by_year_then_vocabulary():
    records = [
        {"year": 1982, "FEMALE": 3, "MALE": 0},
        {"year": 1981, "FEMALE": 150, "MALE": 100},
    ]
    assert enumerate_tuples(records, SEX) == [
        NormalizedTuple("MALE", 1981, 100),
        NormalizedTuple("FEMALE", 1981, 150),
        NormalizedTuple("FEMALE", 1982, 3),
    ]


def test_search_is_case_insensitive_substring(sex_records):
    tuples = enumerate_tuples(sex_records, SEX)
    assert [t.category for t in search(tuples, "male")] == ["MALE", "FEMALE", "MALE"]
    assert search(tuples, "FEM") == [NormalizedTuple("FEMALE", 1981, 150)]
    assert search(tuples, "1982") == [NormalizedTuple("MALE", 1982, 120)]
    assert search(tuples, "15") == [NormalizedTuple("FEMALE", 1981, 150)]
    assert search(tuples, "  ") == tuples
    assert search(tuples, None) == tuples


def test_paginate_clamps_page():
    items = list(range(25))

    first = paginate(items, 1, 10)
    assert first["items"] == list(range(10))
    assert first["total"] == 25
    assert first["total_pages"] == 3

    assert paginate(items, 5, 10)["page"] == 3
    assert paginate(items, 5, 10)["items"] == [20, 21, 22, 23, 24]
    assert paginate(items, 0, 10)["page"] == 1
    assert paginate(items, -3, 10)["items"] == list(range(10))


def test_paginate_empty_list():
    assert paginate([], 4, 10) == {
        "items": [], "page": 1, "page_size": 10, "total": 0, "total_pages": 1,
    }


def test_paginate_guards_page_size():
    assert paginate([1, 2, 3], 2, 0) == {
        "items": [2], "page": 2, "page_size": 1, "total": 3, "total_pages": 3,
    }
