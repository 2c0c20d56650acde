"""
FastAPI dependencies: StoreRegistry singleton, per-dataset store lookup.
"""
from __future__ import annotations

from fastapi import Depends, HTTPException

from emigrant_analytics.data.store import RecordStore, StoreRegistry

# ---------------------------------------------------------------------------
# Global registry singleton (set during startup)
# ---------------------------------------------------------------------------
_registry: StoreRegistry | None = None


def set_registry(registry: StoreRegistry | None) -> None:
    global _registry
    _registry = registry


def get_registry() -> StoreRegistry:
    if _registry is None:
        raise HTTPException(503, "Server not initialized yet")
    return _registry


def get_dataset_store(dataset_id: str, registry: StoreRegistry = Depends(get_registry)) -> RecordStore:
    """Resolve the ``{dataset_id}`` path parameter; unknown ids raise UnknownDataset (404)."""
    return registry.get(dataset_id)
