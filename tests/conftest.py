"""Shared fixtures: in-memory stores, sample CSV extracts, an API client."""
import os
import tempfile

# Keep startup folders out of the real home directory
os.environ["EMIGRANT_DATA_DIR"] = tempfile.mkdtemp(prefix="emigrant-analytics-")

import pytest
from fastapi.testclient import TestClient

from emigrant_analytics.api import dependencies, router_export
from emigrant_analytics.data.persistence import MemoryBackend
from emigrant_analytics.data.registry import get_descriptor
from emigrant_analytics.data.store import RecordStore, StoreRegistry
from emigrant_analytics.main import create_app

YEARS = list(range(1981, 2021))


@pytest.fixture
def backend():
    return MemoryBackend()


def _store(dataset_id, backend):
    return RecordStore(get_descriptor(dataset_id), backend).load()


@pytest.fixture
def sex_store(backend):
    return _store("sex", backend)


@pytest.fixture
def age_store(backend):
    return _store("age", backend)


@pytest.fixture
def civil_store(backend):
    return _store("civil_status", backend)


@pytest.fixture
def countries_store(backend):
    return _store("all_countries", backend)


@pytest.fixture
def sex_records():
    return [
        {"year": 1981, "MALE": 100, "FEMALE": 150},
        {"year": 1982, "MALE": 120},
    ]


@pytest.fixture
def destination_csv():
    """All-countries extract: COUNTRY, 40 year columns, TOTAL, %."""
    usa = [1000 + 100 * i for i in range(len(YEARS))]
    canada = [50] * len(YEARS)
    lines = [
        "NUMBER OF REGISTERED FILIPINO EMIGRANTS BY COUNTRY OF DESTINATION",
        "COUNTRY," + ",".join(str(y) for y in YEARS) + ",TOTAL,%",
        "USA," + ",".join(str(v) for v in usa) + f",{sum(usa)},80.1",
        "CANADA," + ",".join(str(v) for v in canada) + f",{sum(canada)},19.9",
        "TOTAL," + ",".join(str(u + c) for u, c in zip(usa, canada)) + ",0,100",
        "Source: Commission on Filipinos Overseas",
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def sex_csv():
    return (
        "YEAR,MALE,FEMALE,TOTAL\n"
        '1981,"20,000",28000,48000\n'
        "1982,21000,29000,50000\n"
    )


@pytest.fixture
def client(tmp_path, monkeypatch):
    """API client over an in-memory registry (startup hooks not run)."""
    dependencies.set_registry(StoreRegistry(MemoryBackend()))
    monkeypatch.setattr(router_export, "EXPORTS_FOLDER", tmp_path)
    yield TestClient(create_app())
    dependencies.set_registry(None)
