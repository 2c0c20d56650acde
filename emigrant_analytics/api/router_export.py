"""
Export endpoints: CSV rebuilt from the store, Excel workbook.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, Response

from emigrant_analytics.api.dependencies import get_dataset_store
from emigrant_analytics.config import EXPORTS_FOLDER
from emigrant_analytics.data.loader import export_csv
from emigrant_analytics.data.store import RecordStore
from emigrant_analytics.reports import dataset_report

router = APIRouter(prefix="/api/datasets/{dataset_id}", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/export.csv")
def export_dataset_csv(store: RecordStore = Depends(get_dataset_store)):
    body = export_csv(store.records, store.descriptor)
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{store.descriptor.file_name}"'},
    )


@router.get("/export.xlsx")
def export_dataset_excel(store: RecordStore = Depends(get_dataset_store)):
    name = store.descriptor.file_name.rsplit(".", 1)[0] + ".xlsx"
    path = dataset_report.generate_excel(store, EXPORTS_FOLDER / name)
    return FileResponse(path=str(path), filename=path.name, media_type=XLSX_MEDIA_TYPE)
