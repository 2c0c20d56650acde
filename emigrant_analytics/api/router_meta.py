"""
Meta endpoints: health, dataset listing, dataset detail and summary.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from emigrant_analytics.analytics.common import sanitize_for_json
from emigrant_analytics.analytics.summary import dataset_summary
from emigrant_analytics.api.dependencies import get_dataset_store, get_registry
from emigrant_analytics.api.response_models import DatasetInfo, DatasetsResponse, HealthResponse
from emigrant_analytics.data.registry import dataset_ids
from emigrant_analytics.data.store import RecordStore, StoreRegistry

router = APIRouter(prefix="/api", tags=["meta"])


def dataset_info(store: RecordStore) -> DatasetInfo:
    d = store.descriptor
    summary = dataset_summary(store.records, d)
    return DatasetInfo(
        id=d.id,
        display_name=d.display_name,
        file_name=d.file_name,
        orientation=d.orientation.value,
        key_field=d.key_field,
        year_range=list(d.year_range),
        view_kind=d.view_kind.value,
        categories=store.categories(),
        record_count=len(store),
        available_years=store.available_years(),
        default_year=summary["default_year"],
    )


@router.get("/health", response_model=HealthResponse)
def health(registry: StoreRegistry = Depends(get_registry)):
    counts = registry.counts()
    return HealthResponse(status="ok", datasets=len(counts), records=counts)


@router.get("/datasets", response_model=DatasetsResponse)
def list_datasets(registry: StoreRegistry = Depends(get_registry)):
    infos = [dataset_info(registry.get(ds_id)) for ds_id in dataset_ids()]
    return DatasetsResponse(datasets=infos, count=len(infos))


@router.get("/datasets/{dataset_id}", response_model=DatasetInfo)
def get_dataset(store: RecordStore = Depends(get_dataset_store)):
    return dataset_info(store)


@router.get("/datasets/{dataset_id}/summary")
def get_summary(store: RecordStore = Depends(get_dataset_store)):
    return JSONResponse(content=sanitize_for_json(dataset_summary(store.records, store.descriptor)))
