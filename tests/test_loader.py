import pytest

from emigrant_analytics.data.errors import EmptyOrUnrecognizedFormat, FileNameMismatch, SchemaMismatch
from emigrant_analytics.data.loader import (
    discover_seed_files, export_csv, parse_structured, validate_file_name,
)
from emigrant_analytics.data.normalize import record_to_tuples
from emigrant_analytics.data.registry import get_descriptor


def test_validate_file_name_accepts_expected_name():
    sex = get_descriptor("sex")
    validate_file_name("Emigrant-1981-2020-Sex.csv", sex)
    validate_file_name("C:\\Downloads\\Emigrant-1981-2020-Sex.csv", sex)


def test_validate_file_name_rejects_with_expected_and_found():
    with pytest.raises(FileNameMismatch) as exc_info:
        validate_file_name("/tmp/Emigrant-1981-2020-Age.csv", get_descriptor("sex"))
    assert exc_info.value.detail == {
        "expected": "Emigrant-1981-2020-Sex.csv",
        "found": "Emigrant-1981-2020-Age.csv",
    }


def test_parse_structured_year_keyed(sex_csv):
    records = parse_structured(sex_csv, get_descriptor("sex"))
    assert records == [
        {"year": 1981, "MALE": 20000, "FEMALE": 28000},
        {"year": 1982, "MALE": 21000, "FEMALE": 29000},
    ]


def test_parse_structured_skips_out_of_range_years():
    text = "year,male,female\n1975,1,1\n1990,3,4\n"
    assert parse_structured(text, get_descriptor("sex")) == [{"year": 1990, "MALE": 3, "FEMALE": 4}]


def test_parse_structured_category_keyed():
    text = "AGE_GROUP,1981,1982\n14 - Below,10,20\n15 - 19,5,\nTotal,15,20\n,1,1\n"
    assert parse_structured(text, get_descriptor("age")) == [
        {"category": "14 - Below", "1981": 10, "1982": 20},
        {"category": "15 - 19", "1981": 5, "1982": 0},
    ]


def test_parse_structured_merges_duplicate_identifiers():
    text = "COUNTRY,1981\nCANADA,5\ncanada,7\n"
    assert parse_structured(text, get_descriptor("all_countries")) == [{"category": "CANADA", "1981": 12}]


def test_parse_structured_missing_key_column():
    with pytest.raises(SchemaMismatch) as exc_info:
        parse_structured("COUNTRY,1981\nCANADA,5\n", get_descriptor("age"))
    assert exc_info.value.detail["expected"] == "AGE_GROUP"
    assert exc_info.value.detail["found"] == ["COUNTRY", "1981"]


@pytest.mark.parametrize("text", ["", "YEAR,MALE,FEMALE\n"])
def test_parse_structured_without_rows(text):
    with pytest.raises(EmptyOrUnrecognizedFormat):
        parse_structured(text, get_descriptor("sex"))


def test_export_csv_year_keyed():
    out = export_csv([{"year": 2001, "MALE": 800}], get_descriptor("sex"))
    assert out == "YEAR,MALE,FEMALE\n2001,800,0\n"


def test_export_csv_category_keyed_header():
    out = export_csv([{"category": "CANADA", "1981": 5}], get_descriptor("all_countries"))
    header, row = out.splitlines()
    assert header.split(",")[:3] == ["COUNTRY", "1981", "1982"]
    assert len(header.split(",")) == 41
    assert row.startswith("CANADA,5,0,")


def test_structured_export_reparses_to_same_tuples():
    age = get_descriptor("age")
    records = [
        {"category": "14 - Below", "1981": 10, "2020": 4},
        {"category": "15 - 19", "1995": 7},
    ]
    reparsed = parse_structured(export_csv(records, age), age)

    def cells(recs):
        return {t for rec in recs for t in record_to_tuples(rec, age)}

    assert cells(reparsed) == cells(records)


def test_discover_seed_files(tmp_path):
    (tmp_path / "2020").mkdir()
    sex_file = tmp_path / "2020" / "Emigrant-1981-2020-Sex.csv"
    sex_file.write_text("YEAR,MALE,FEMALE\n")
    (tmp_path / "notes.csv").write_text("x\n")

    assert discover_seed_files(tmp_path) == {"sex": sex_file}
    assert discover_seed_files(tmp_path / "missing") == {}
