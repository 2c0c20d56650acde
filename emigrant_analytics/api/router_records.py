"""
Record endpoints: enumerate/search/paginate, single-cell lookup, add, update,
delete and clear-all.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from emigrant_analytics.analytics.records import enumerate_tuples, paginate, search
from emigrant_analytics.api.dependencies import get_dataset_store
from emigrant_analytics.api.response_models import (
    MutationResponse, RecordCell, RecordDelete, RecordEdit, RecordPage,
)
from emigrant_analytics.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from emigrant_analytics.data.store import RecordStore

router = APIRouter(prefix="/api/datasets/{dataset_id}/records", tags=["records"])


def _mutation(status: str, store: RecordStore, record: dict | None = None) -> MutationResponse:
    return MutationResponse(
        status=status,
        dataset=store.descriptor.id,
        record=record,
        record_count=len(store),
    )


@router.get("", response_model=RecordPage)
def list_records(
    store: RecordStore = Depends(get_dataset_store),
    search_term: Optional[str] = Query(None, alias="search"),
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    tuples = search(enumerate_tuples(store.records, store.descriptor), search_term)
    result = paginate(tuples, page, page_size)
    result["items"] = [t._asdict() for t in result["items"]]
    return RecordPage(**result, search=search_term)


@router.get("/{category}/{year}", response_model=RecordCell)
def get_record(category: str, year: int, store: RecordStore = Depends(get_dataset_store)):
    return RecordCell(**store.get_record(category, year))


@router.post("", response_model=MutationResponse)
def add_record(edit: RecordEdit, store: RecordStore = Depends(get_dataset_store)):
    """Add ``count`` on top of the existing cell value."""
    record = store.add_record(edit.category, edit.year, edit.count)
    print(f"  {store.descriptor.id}: added {edit.count:,} to {edit.category} {edit.year}")
    return _mutation("added", store, record)


@router.put("", response_model=MutationResponse)
def update_record(edit: RecordEdit, store: RecordStore = Depends(get_dataset_store)):
    """Overwrite the cell value."""
    record = store.update_record(edit.category, edit.year, edit.count)
    print(f"  {store.descriptor.id}: set {edit.category} {edit.year} to {edit.count:,}")
    return _mutation("updated", store, record)


@router.delete("/{category}/{year}", response_model=MutationResponse)
def delete_record(category: str, year: int, store: RecordStore = Depends(get_dataset_store)):
    target = RecordDelete(category=category, year=year)
    if not store.delete_record(target.category, target.year):
        raise HTTPException(404, f"No {store.descriptor.id} record for {category} {year}")
    print(f"  {store.descriptor.id}: deleted {category} {year}")
    return _mutation("deleted", store)


@router.delete("", response_model=MutationResponse)
def clear_records(
    store: RecordStore = Depends(get_dataset_store),
    confirm: bool = Query(False),
):
    """Remove every record of the dataset; requires ``confirm=true``."""
    if not confirm:
        raise HTTPException(400, "Clearing a dataset requires confirm=true")
    store.clear_all()
    print(f"  {store.descriptor.id}: cleared")
    return _mutation("cleared", store)
