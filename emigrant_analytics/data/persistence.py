"""
Durable store: opaque full-snapshot blob storage, one snapshot per dataset.

Only whole snapshots are read and written; there are no deltas.
"""
from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from emigrant_analytics.config import STORE_FOLDER
from emigrant_analytics.data.errors import PersistenceFailure


class SnapshotBackend(Protocol):
    def load_all(self, dataset_id: str) -> list[dict]: ...

    def replace_all(self, dataset_id: str, records: list[dict]) -> None: ...


class JsonFileBackend:
    """One JSON file per dataset, replaced atomically on every write."""

    def __init__(self, folder: Path = STORE_FOLDER) -> None:
        self.folder = Path(folder)

    def path_for(self, dataset_id: str) -> Path:
        return self.folder / f"{dataset_id}.json"

    def load_all(self, dataset_id: str) -> list[dict]:
        path = self.path_for(dataset_id)
        if not path.exists():
            return []
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(
                f"Could not read snapshot for {dataset_id}",
                dataset=dataset_id,
                path=str(path),
                reason=str(exc),
            ) from exc
        records = payload.get("records", []) if isinstance(payload, dict) else payload
        if not isinstance(records, list):
            raise PersistenceFailure(
                f"Snapshot for {dataset_id} is not a record list",
                dataset=dataset_id,
                path=str(path),
            )
        return records

    def replace_all(self, dataset_id: str, records: list[dict]) -> None:
        path = self.path_for(dataset_id)
        payload = {"dataset": dataset_id, "records": records}
        try:
            self.folder.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.folder, prefix=f".{dataset_id}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, default=str)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceFailure(
                f"Could not write snapshot for {dataset_id}",
                dataset=dataset_id,
                path=str(path),
                reason=str(exc),
            ) from exc


class MemoryBackend:
    """Process-local snapshots (tests, scratch use)."""

    def __init__(self) -> None:
        self._snapshots: dict[str, list[dict]] = {}
        self.writes = 0

    def load_all(self, dataset_id: str) -> list[dict]:
        return copy.deepcopy(self._snapshots.get(dataset_id, []))

    def replace_all(self, dataset_id: str, records: list[dict]) -> None:
        self._snapshots[dataset_id] = copy.deepcopy(records)
        self.writes += 1
