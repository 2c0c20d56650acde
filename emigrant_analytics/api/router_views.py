"""
Chart-data endpoints: any view kind, or the dataset's default chart.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from emigrant_analytics.analytics.common import sanitize_for_json
from emigrant_analytics.analytics.summary import dataset_summary
from emigrant_analytics.analytics.views import YEAR_REQUIRED, build_view
from emigrant_analytics.api.dependencies import get_dataset_store
from emigrant_analytics.api.response_models import ViewResponse
from emigrant_analytics.data.schemas import ViewKind
from emigrant_analytics.data.store import RecordStore

router = APIRouter(prefix="/api/datasets/{dataset_id}", tags=["views"])


def _render(store: RecordStore, kind: ViewKind, year: Optional[int]) -> ViewResponse:
    records = store.records
    return ViewResponse(
        dataset=store.descriptor.id,
        kind=kind.value,
        year=year,
        data=sanitize_for_json(build_view(records, store.descriptor, kind, year)),
    )


@router.get("/views/{kind}", response_model=ViewResponse)
def get_view(
    kind: ViewKind,
    store: RecordStore = Depends(get_dataset_store),
    year: Optional[int] = Query(None),
):
    return _render(store, kind, year)


@router.get("/chart", response_model=ViewResponse)
def get_chart(
    store: RecordStore = Depends(get_dataset_store),
    year: Optional[int] = Query(None),
):
    """Default view for the dataset; year-bound views fall back to the latest year."""
    kind = store.descriptor.view_kind
    if year is None and kind in YEAR_REQUIRED:
        year = dataset_summary(store.records, store.descriptor)["default_year"]
    return _render(store, kind, year)
