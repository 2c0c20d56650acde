from emigrant_analytics.api import dependencies


SEX_FILE = "Emigrant-1981-2020-Sex.csv"


def _upload(client, dataset_id, name, text):
    return client.post(
        f"/api/datasets/{dataset_id}/upload",
        files={"file": (name, text.encode(), "text/csv")},
    )


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["datasets"] == 10
    assert body["records"]["sex"] == 0


def test_list_and_describe_datasets(client):
    body = client.get("/api/datasets").json()
    assert body["count"] == 10
    assert {d["id"] for d in body["datasets"]} >= {"age", "sex", "all_countries", "civil_status"}

    sex = client.get("/api/datasets/sex").json()
    assert sex["orientation"] == "year_keyed"
    assert sex["key_field"] == "YEAR"
    assert sex["view_kind"] == "relationship"
    assert sex["file_name"] == SEX_FILE
    assert sex["default_year"] is None


def test_unknown_dataset_is_404(client):
    r = client.get("/api/datasets/planets")
    assert r.status_code == 404
    assert r.json()["detail"]["error"] == "unknown_dataset"


def test_add_is_additive_and_update_replaces(client):
    edit = {"category": "MALE", "year": 2001, "count": 500}
    client.post("/api/datasets/sex/records", json=edit)
    r = client.post("/api/datasets/sex/records", json={**edit, "count": 300})
    assert r.status_code == 200
    assert r.json()["record"] == {"year": 2001, "MALE": 800}

    r = client.put("/api/datasets/sex/records", json={**edit, "count": 42})
    assert r.json()["status"] == "updated"
    assert client.get("/api/datasets/sex/records/MALE/2001").json() == {
        "category": "MALE", "year": 2001, "count": 42,
    }


def test_update_to_zero_drops_record_from_views(client):
    client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 2001, "count": 5})
    r = client.put("/api/datasets/sex/records", json={"category": "MALE", "year": 2001, "count": 0})
    assert r.json()["record"] is None
    assert r.json()["record_count"] == 0
    assert client.get("/api/datasets/sex/views/trend").json()["data"] == []


def test_invalid_edits(client):
    r = client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 2001, "count": -1})
    assert r.status_code == 422

    r = client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 1900, "count": 1})
    assert r.status_code == 422
    assert r.json()["detail"]["error"] == "invalid_record"
    assert r.json()["detail"]["detail"]["expected"] == [1981, 2020]


def test_delete_and_clear(client):
    client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 2001, "count": 5})
    client.post("/api/datasets/sex/records", json={"category": "FEMALE", "year": 2002, "count": 6})

    r = client.delete("/api/datasets/sex/records/MALE/2001")
    assert r.status_code == 200
    assert r.json()["record_count"] == 1
    assert client.delete("/api/datasets/sex/records/MALE/2001").status_code == 404

    assert client.delete("/api/datasets/sex/records").status_code == 400
    r = client.delete("/api/datasets/sex/records", params={"confirm": "true"})
    assert r.json() == {"status": "cleared", "dataset": "sex", "record": None, "record_count": 0}


def test_list_records_with_search_and_pages(client):
    for year in range(1981, 1993):
        client.post("/api/datasets/sex/records", json={"category": "FEMALE", "year": year, "count": year - 1980})
    client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 1990, "count": 77})

    body = client.get("/api/datasets/sex/records", params={"page": 2, "page_size": 5}).json()
    assert body["total"] == 13
    assert body["total_pages"] == 3
    assert body["page"] == 2
    assert len(body["items"]) == 5

    body = client.get("/api/datasets/sex/records", params={"search": "77"}).json()
    assert body["items"] == [{"category": "MALE", "year": 1990, "count": 77}]
    assert body["search"] == "77"

    body = client.get("/api/datasets/sex/records", params={"page": 99}).json()
    assert body["page"] == 2


def test_views_and_chart(client):
    client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 1981, "count": 100})
    client.post("/api/datasets/sex/records", json={"category": "FEMALE", "year": 1981, "count": 150})

    r = client.get("/api/datasets/sex/views/composition", params={"year": 1981})
    assert r.json()["data"] == [
        {"name": "MALE", "value": 100, "pct": 40.0},
        {"name": "FEMALE", "value": 150, "pct": 60.0},
    ]
    assert client.get("/api/datasets/sex/views/composition").json()["data"] == []
    assert client.get("/api/datasets/sex/views/pie").status_code == 422

    chart = client.get("/api/datasets/sex/chart").json()
    assert chart["kind"] == "relationship"
    assert chart["data"] == [{"year": 1981, "x": 100, "y": 150, "decade": 1980}]


def test_composition_chart_defaults_to_latest_year(client):
    client.post("/api/datasets/education/records", json={"category": "College Graduate", "year": 1999, "count": 4})
    client.post("/api/datasets/education/records", json={"category": "College Graduate", "year": 2001, "count": 10})

    chart = client.get("/api/datasets/education/chart").json()
    assert chart["kind"] == "composition"
    assert chart["year"] == 2001
    assert chart["data"] == [{"name": "College Graduate", "value": 10, "pct": 100.0}]


def test_structured_upload_replaces_dataset(client, sex_csv):
    client.post("/api/datasets/sex/records", json={"category": "MALE", "year": 2010, "count": 1})

    r = _upload(client, "sex", SEX_FILE, sex_csv)
    assert r.status_code == 200
    assert r.json()["records"] == 2
    assert client.get("/api/datasets/sex/records/MALE/2010").json()["count"] == 0
    assert client.get("/api/datasets/sex/records/MALE/1981").json()["count"] == 20000


def test_upload_rejects_wrong_file_name(client, sex_csv):
    r = _upload(client, "sex", "Emigrant-1981-2020-Age.csv", sex_csv)
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["error"] == "file_name_mismatch"
    assert detail["detail"]["expected"] == SEX_FILE


def test_upload_rejects_missing_key_column(client):
    r = _upload(client, "sex", SEX_FILE, "GENDER,COUNT\nMALE,1\n")
    assert r.status_code == 422
    assert r.json()["detail"]["error"] == "schema_mismatch"


def test_classify_does_not_mutate(client, destination_csv):
    r = client.post("/api/classify", files={"file": ("extract.csv", destination_csv.encode(), "text/csv")})
    body = r.json()
    assert body["families"] == ["destination"]
    assert len(body["tuples"]["all_countries"]) == 80
    assert client.get("/api/health").json()["records"]["all_countries"] == 0


def test_import_merges_dataset_tuples(client, destination_csv):
    files = {"file": ("extract.csv", destination_csv.encode(), "text/csv")}
    r = client.post("/api/datasets/all_countries/import", files=files)
    assert r.status_code == 200
    assert r.json()["merged"] == 80
    assert r.json()["record_count"] == 2

    client.post("/api/datasets/all_countries/import", files=files)
    assert client.get("/api/datasets/all_countries/records/USA/1981").json()["count"] == 2000

    r = client.post("/api/datasets/age/import", files=files)
    assert r.status_code == 422
    assert r.json()["detail"]["error"] == "empty_or_unrecognized_format"


def test_exports_and_summary(client, sex_csv):
    _upload(client, "sex", SEX_FILE, sex_csv)

    r = client.get("/api/datasets/sex/export.csv")
    assert r.status_code == 200
    assert r.text.splitlines()[:2] == ["YEAR,MALE,FEMALE", "1981,20000,28000"]

    r = client.get("/api/datasets/sex/export.xlsx")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/vnd.openxmlformats")

    summary = client.get("/api/datasets/sex/summary").json()
    assert summary["total"] == 98000
    assert summary["default_year"] == 1982


def test_upload_and_import_write_snapshots(client, sex_csv, destination_csv):
    backend = dependencies.get_registry().backend

    _upload(client, "sex", SEX_FILE, sex_csv)
    assert backend.load_all("sex") == [
        {"year": 1981, "MALE": 20000, "FEMALE": 28000},
        {"year": 1982, "MALE": 21000, "FEMALE": 29000},
    ]

    files = {"file": ("extract.csv", destination_csv.encode(), "text/csv")}
    client.post("/api/datasets/all_countries/import", files=files)
    assert [r["category"] for r in backend.load_all("all_countries")] == ["USA", "CANADA"]
