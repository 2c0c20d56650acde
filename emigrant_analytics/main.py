"""
Emigrant Analytics: FastAPI app factory with startup dataset loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from emigrant_analytics.config import CORS_ORIGINS, EXPORTS_FOLDER, INBOX_FOLDER, STORE_FOLDER
from emigrant_analytics.data.errors import DataError
from emigrant_analytics.data.persistence import JsonFileBackend
from emigrant_analytics.data.store import StoreRegistry
from emigrant_analytics.api.dependencies import set_registry
from emigrant_analytics.api.router_meta import router as meta_router
from emigrant_analytics.api.router_records import router as records_router
from emigrant_analytics.api.router_views import router as views_router
from emigrant_analytics.api.router_upload import router as upload_router
from emigrant_analytics.api.router_export import router as export_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load every dataset snapshot, then seed empty ones from the inbox."""
    for d in [INBOX_FOLDER, STORE_FOLDER, EXPORTS_FOLDER]:
        d.mkdir(parents=True, exist_ok=True)

    print(f"  EMIGRANT_DATA_DIR = {os.environ.get('EMIGRANT_DATA_DIR', '(not set)')}")
    print(f"  STORE_FOLDER = {STORE_FOLDER}")
    print(f"  INBOX_FOLDER = {INBOX_FOLDER}")

    registry = StoreRegistry(JsonFileBackend(STORE_FOLDER)).load_all()
    seeded = registry.seed_from_inbox(INBOX_FOLDER)
    set_registry(registry)

    total = sum(registry.counts().values())
    if total:
        print(f"\nEmigrant Analytics ready: {total:,} records, {len(seeded)} dataset(s) seeded\n")
    else:
        print("\nEmigrant Analytics ready: no data yet. Upload CSVs per dataset.\n")
    yield
    set_registry(None)


async def data_error_handler(request: Request, exc: DataError) -> JSONResponse:
    print(f"  {request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_dict()})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Emigrant Analytics API",
        description="Registered emigrant statistics API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DataError, data_error_handler)

    app.include_router(meta_router)
    app.include_router(records_router)
    app.include_router(views_router)
    app.include_router(upload_router)
    app.include_router(export_router)
    return app


app = create_app()
