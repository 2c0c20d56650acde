"""
RecordStore: in-memory records for one dataset with full-snapshot write-through.

All mutation goes through bulk_replace / add_record / update_record /
delete_record / clear_all / merge_tuples; every one of them writes the whole
store back to the durable backend afterwards.
"""
from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Iterable, Optional

from emigrant_analytics.config import INBOX_FOLDER
from emigrant_analytics.data.errors import DataError, InvalidRecord, SchemaMismatch
from emigrant_analytics.data.loader import discover_seed_files, load_seed_file
from emigrant_analytics.data.normalize import (
    clean_label, merge_into, normalize_record, parse_count, parse_year,
)
from emigrant_analytics.data.persistence import JsonFileBackend, SnapshotBackend
from emigrant_analytics.data.registry import dataset_ids, get_descriptor
from emigrant_analytics.data.schemas import DatasetDescriptor, NormalizedTuple


class RecordStore:
    """Records for one dataset, at most one per identifier."""

    def __init__(self, descriptor: DatasetDescriptor, backend: SnapshotBackend) -> None:
        self.descriptor = descriptor
        self.backend = backend
        self._records: list[dict] = []
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "RecordStore":
        """Replace the in-memory records with the durable snapshot."""
        raw = self.backend.load_all(self.descriptor.id)
        self._records = self._normalize_all(raw, strict=False)
        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def records(self) -> list[dict]:
        """Copies of the current records; mutate only through the store."""
        return [dict(r) for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def _persist(self) -> None:
        self.backend.replace_all(self.descriptor.id, copy.deepcopy(self._records))

    def _normalize_all(self, raw_records: Iterable[Any], strict: bool) -> list[dict]:
        """Canonicalize records and merge duplicate identifiers additively."""
        id_field = self.descriptor.id_field
        merged: dict[Any, dict] = {}
        for raw in raw_records:
            rec = normalize_record(raw, self.descriptor) if isinstance(raw, dict) else None
            if rec is None:
                if strict:
                    found = sorted(str(k) for k in raw) if isinstance(raw, dict) else type(raw).__name__
                    raise SchemaMismatch(
                        f"Record is missing key field '{self.descriptor.key_field}'",
                        expected=self.descriptor.key_field,
                        found=found,
                    )
                print(f"  Warning: dropping malformed {self.descriptor.id} record: {raw!r}")
                continue
            ident = rec[id_field]
            if ident in merged:
                merge_into(merged[ident], rec, id_field)
            else:
                merged[ident] = rec
        return list(merged.values())

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def _check_year(self, year: Any) -> int:
        parsed = parse_year(year)
        if parsed is None or not self.descriptor.contains_year(parsed):
            start, end = self.descriptor.year_range
            raise InvalidRecord(
                f"Year must be between {start} and {end}",
                expected=[start, end],
                found=year,
            )
        return parsed

    @staticmethod
    def _check_count(count: Any) -> int:
        value = parse_count(count)
        if value < 0:
            raise InvalidRecord("Count must be zero or positive", found=count)
        return value

    def _locate(self, category: Any, year: Any) -> tuple[Any, str]:
        """Return (record identifier, field name) addressed by a (category, year) cell."""
        year_value = self._check_year(year)
        label = clean_label(category)
        if not label:
            raise InvalidRecord("Category is required", found=category)
        cat = self.descriptor.canonical_category(label)

        if self.descriptor.is_year_keyed:
            if self.descriptor.categories and cat not in self.descriptor.categories:
                raise InvalidRecord(
                    f"Unknown {self.descriptor.display_name} category: {label}",
                    expected=list(self.descriptor.categories),
                    found=label,
                )
            return year_value, cat
        return cat, str(year_value)

    def _find(self, ident: Any) -> Optional[dict]:
        id_field = self.descriptor.id_field
        return next((r for r in self._records if r[id_field] == ident), None)

    def get_record(self, category: Any, year: Any) -> dict:
        """Current count for one (category, year) cell (0 when absent)."""
        ident, field = self._locate(category, year)
        rec = self._find(ident)
        count = parse_count(rec.get(field, 0)) if rec else 0
        year_value = ident if self.descriptor.is_year_keyed else int(field)
        category_value = field if self.descriptor.is_year_keyed else ident
        return {"category": category_value, "year": year_value, "count": count}

    def available_years(self) -> list[int]:
        """Years present in a YearKeyed store; the declared range otherwise."""
        if self.descriptor.is_year_keyed:
            return sorted(r["year"] for r in self._records)
        return self.descriptor.years

    def categories(self) -> list[str]:
        """Vocabulary first, then any extra labels in store order."""
        out = list(self.descriptor.categories)
        if self.descriptor.is_year_keyed:
            extra = (f for r in self._records for f in r if f != "year")
        else:
            extra = (r["category"] for r in self._records)
        for cat in extra:
            if cat not in out:
                out.append(cat)
        return out

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _is_dead(self, rec: dict) -> bool:
        id_field = self.descriptor.id_field
        return not any(parse_count(v) > 0 for k, v in rec.items() if k != id_field)

    def _write_cell(self, ident: Any, field: str, value: int, additive: bool) -> Optional[dict]:
        """Set or add one cell; a record with no positive field is removed."""
        rec = self._find(ident)
        if rec is None:
            if value <= 0:
                return None
            rec = {self.descriptor.id_field: ident, field: value}
            self._records.append(rec)
            return rec
        rec[field] = parse_count(rec.get(field, 0)) + value if additive else value
        if self._is_dead(rec):
            self._records.remove(rec)
            return None
        return rec

    def bulk_replace(self, records: Iterable[dict]) -> list[dict]:
        """Discard the current store and install ``records``.

        Every record must carry the dataset's identifier; SchemaMismatch is
        raised before anything changes otherwise.
        """
        normalized = self._normalize_all(records, strict=True)
        self._records = normalized
        self._persist()
        return self.records

    def add_record(self, category: Any, year: Any, count: Any) -> Optional[dict]:
        """Add ``count`` to the (category, year) cell; repeated adds accumulate.

        Returns the record, or None when no record holds a positive count.
        """
        value = self._check_count(count)
        ident, field = self._locate(category, year)
        rec = self._write_cell(ident, field, value, additive=True)
        self._persist()
        return dict(rec) if rec is not None else None

    def update_record(self, category: Any, year: Any, count: Any) -> Optional[dict]:
        """Replace the (category, year) cell with ``count`` (corrections).

        Setting the last positive field to 0 removes the record.
        """
        value = self._check_count(count)
        ident, field = self._locate(category, year)
        rec = self._write_cell(ident, field, value, additive=False)
        self._persist()
        return dict(rec) if rec is not None else None

    def delete_record(self, category: Any, year: Any) -> bool:
        """Zero one cell; drop the record once none of its fields is positive.

        Returns False (and writes nothing) when the record doesn't exist.
        """
        ident, field = self._locate(category, year)
        rec = self._find(ident)
        if rec is None:
            return False
        if field in rec:
            rec[field] = 0
        if self._is_dead(rec):
            self._records.remove(rec)
        self._persist()
        return True

    def clear_all(self) -> None:
        self._records = []
        self._persist()

    def merge_tuples(self, tuples: Iterable[NormalizedTuple]) -> int:
        """Additively merge many tuples with a single snapshot write.

        All tuples are validated before the store changes. Returns the number
        of tuples applied.
        """
        located = []
        for t in tuples:
            value = self._check_count(t.count)
            located.append((*self._locate(t.category, t.year), value))
        if not located:
            return 0

        for ident, field, value in located:
            self._write_cell(ident, field, value, additive=True)
        self._persist()
        return len(located)


class StoreRegistry:
    """Lazily-loaded RecordStore per dataset sharing one durable backend."""

    def __init__(self, backend: SnapshotBackend | None = None) -> None:
        self.backend = backend if backend is not None else JsonFileBackend()
        self._stores: dict[str, RecordStore] = {}

    def get(self, dataset_id: str) -> RecordStore:
        store = self._stores.get(dataset_id)
        if store is None:
            store = RecordStore(get_descriptor(dataset_id), self.backend).load()
            self._stores[dataset_id] = store
        return store

    def load_all(self) -> "StoreRegistry":
        print("Loading datasets...")
        for ds_id in dataset_ids():
            store = self.get(ds_id)
            print(f"  {ds_id}: {len(store):,} records")
        return self

    def seed_from_inbox(self, inbox: Path = INBOX_FOLDER) -> list[str]:
        """Populate empty datasets from inbox CSVs named like their expected files."""
        seeded = []
        for ds_id, path in discover_seed_files(inbox).items():
            store = self.get(ds_id)
            if len(store):
                continue
            try:
                records = load_seed_file(path, store.descriptor)
                store.bulk_replace(records)
            except DataError as exc:
                print(f"  Warning: skipping {path.name}: {exc.message}")
                continue
            seeded.append(ds_id)
            print(f"  Seeded {ds_id} from {path.name} ({len(records):,} records)")
        return seeded

    def counts(self) -> dict[str, int]:
        return {ds_id: len(self.get(ds_id)) for ds_id in dataset_ids()}
