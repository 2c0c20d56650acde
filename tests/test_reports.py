from openpyxl import load_workbook

from emigrant_analytics.excel.formatters import NUMBER_FORMATS
from emigrant_analytics.reports import dataset_report


def test_generate_json(sex_store):
    sex_store.bulk_replace([{"year": 1981, "MALE": 100, "FEMALE": 150}, {"year": 1982, "MALE": 120}])
    data = dataset_report.generate_json(sex_store)

    assert data["dataset"] == "sex"
    assert data["fields"] == ["MALE", "FEMALE"]
    assert data["rows"][1] == {"YEAR": 1982, "MALE": 120, "FEMALE": 0}
    assert data["summary"]["default_year"] == 1982
    assert data["tuples"][0] == {"category": "MALE", "year": 1981, "count": 100}


def test_generate_excel(sex_store, tmp_path):
    sex_store.bulk_replace([{"year": 1981, "MALE": 100, "FEMALE": 150}, {"year": 1982, "MALE": 120}])
    path = dataset_report.generate_excel(sex_store, tmp_path / "out" / "sex.xlsx")

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Data"]
    data = wb["Data"]
    assert [c.value for c in data[1]] == ["YEAR", "MALE", "FEMALE"]
    assert [c.value for c in data[4]] == ["TOTAL", 220, 150]
    assert data["B2"].number_format == "#,##0"
    assert data["A2"].number_format == "General"


def test_generate_excel_for_empty_dataset(age_store, tmp_path):
    path = dataset_report.generate_excel(age_store, tmp_path / "age.xlsx")
    wb = load_workbook(path)
    assert wb["Data"]["A1"].value == "AGE_GROUP"
    assert wb["Data"]["A2"].value is None


def test_number_formats_cover_report_column_types():
    assert set(NUMBER_FORMATS) == {"number", "year"}
