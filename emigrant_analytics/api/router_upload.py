"""
Upload endpoints: structured dataset upload, raw-CSV classification and
heuristic import.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from emigrant_analytics.analytics.common import sanitize_for_json
from emigrant_analytics.api.dependencies import get_dataset_store
from emigrant_analytics.api.response_models import ImportResponse, UploadResponse
from emigrant_analytics.data.classifier import classify_csv
from emigrant_analytics.data.errors import EmptyOrUnrecognizedFormat
from emigrant_analytics.data.loader import parse_structured, validate_file_name
from emigrant_analytics.data.store import RecordStore

router = APIRouter(prefix="/api", tags=["upload"])


async def _read_text(f: UploadFile) -> str:
    if not f.filename:
        raise HTTPException(400, "Missing filename")
    if not f.filename.lower().endswith(".csv"):
        raise HTTPException(400, f"Only .csv files are accepted (got '{f.filename}')")
    content = await f.read()
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


@router.post("/datasets/{dataset_id}/upload", response_model=UploadResponse)
async def upload_dataset(
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_dataset_store),
):
    """Replace the dataset with a CSV laid out like its export."""
    validate_file_name(file.filename, store.descriptor)
    text = await _read_text(file)
    records = parse_structured(text, store.descriptor)
    await run_in_threadpool(store.bulk_replace, records)
    print(f"  {store.descriptor.id}: replaced from {file.filename} ({len(records):,} records)")
    return UploadResponse(
        status="replaced",
        dataset=store.descriptor.id,
        file_name=file.filename,
        records=len(store),
    )


@router.post("/classify")
async def classify_upload(file: UploadFile = File(...)):
    """Fingerprint and parse a raw CSV without touching any dataset."""
    result = classify_csv(await _read_text(file))
    return sanitize_for_json({"file_name": file.filename, **result.to_dict()})


@router.post("/datasets/{dataset_id}/import", response_model=ImportResponse)
async def import_dataset(
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_dataset_store),
):
    """Heuristically parse a raw CSV and add this dataset's facts to it."""
    descriptor = store.descriptor
    result = classify_csv(await _read_text(file), descriptor.year_range)
    tuples = result.dataset_tuples(descriptor.id)
    if not tuples:
        raise EmptyOrUnrecognizedFormat(
            f"No {descriptor.display_name} rows found in {file.filename}",
            dataset=descriptor.id,
            families=result.families,
        )
    merged = await run_in_threadpool(store.merge_tuples, tuples)
    print(f"  {descriptor.id}: imported {merged:,} values from {file.filename}")
    return ImportResponse(
        status="merged",
        dataset=descriptor.id,
        families=result.families,
        merged=merged,
        rows_read=result.rows_read,
        rows_skipped=result.rows_skipped,
        record_count=len(store),
    )
