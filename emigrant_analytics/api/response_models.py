"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    datasets: int
    records: dict[str, int]


class DatasetInfo(BaseModel):
    id: str
    display_name: str
    file_name: str
    orientation: str
    key_field: str
    year_range: list[int]
    view_kind: str
    categories: list[str]
    record_count: int
    available_years: list[int]
    default_year: Optional[int] = None


class DatasetsResponse(BaseModel):
    datasets: list[DatasetInfo]
    count: int


class RecordEdit(BaseModel):
    """One (category, year) cell edit."""
    category: str = Field(..., min_length=1)
    year: int
    count: int = Field(..., ge=0)


class RecordDelete(BaseModel):
    category: str = Field(..., min_length=1)
    year: int


class RecordCell(BaseModel):
    category: str
    year: int
    count: int


class RecordPage(BaseModel):
    items: list[RecordCell]
    page: int
    page_size: int
    total: int
    total_pages: int
    search: Optional[str] = None


class MutationResponse(BaseModel):
    status: str
    dataset: str
    record: Optional[dict[str, Any]] = None
    record_count: int


class ViewResponse(BaseModel):
    dataset: str
    kind: str
    year: Optional[int] = None
    data: Any


class UploadResponse(BaseModel):
    status: str
    dataset: str
    file_name: str
    records: int


class ImportResponse(BaseModel):
    status: str
    dataset: str
    families: list[str]
    merged: int
    rows_read: int
    rows_skipped: int
    record_count: int
