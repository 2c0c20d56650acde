"""
Structured upload path, CSV export, and inbox seed-file discovery.
"""
from __future__ import annotations

import io
import re
from pathlib import Path

import pandas as pd

from emigrant_analytics.config import INBOX_FOLDER, TOTAL_LABELS
from emigrant_analytics.data.errors import EmptyOrUnrecognizedFormat, FileNameMismatch, SchemaMismatch
from emigrant_analytics.data.normalize import clean_label, merge_into, parse_count, parse_year
from emigrant_analytics.data.registry import descriptor_for_file
from emigrant_analytics.data.schemas import DatasetDescriptor


# ---------------------------------------------------------------------------
# Upload validation
# ---------------------------------------------------------------------------

def validate_file_name(file_name: str | None, descriptor: DatasetDescriptor) -> None:
    """Reject an upload whose base name differs from the dataset's expected file."""
    found = re.split(r"[\\/]", file_name or "")[-1]
    if found != descriptor.file_name:
        raise FileNameMismatch(
            f"Wrong CSV file: expected {descriptor.file_name}, got {found or '(none)'}",
            expected=descriptor.file_name,
            found=found,
        )


def read_csv_text(text: str) -> pd.DataFrame:
    """Read CSV text with every cell kept as a string."""
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError:
        raise EmptyOrUnrecognizedFormat("The uploaded CSV file is empty") from None
    except pd.errors.ParserError as exc:
        raise EmptyOrUnrecognizedFormat("The uploaded CSV file could not be parsed", reason=str(exc)) from None
    df.columns = [clean_label(c) for c in df.columns]
    return df


def _field_columns(headers: list[str], key_col: str, descriptor: DatasetDescriptor) -> dict[str, str]:
    """Map source column → record field for every column the dataset reads."""
    cols: dict[str, str] = {}
    for h in headers:
        if h == key_col:
            continue
        if descriptor.is_year_keyed:
            field = descriptor.canonical_category(h)
            if descriptor.categories and field not in descriptor.categories:
                continue
            cols[h] = field
        else:
            year = parse_year(h)
            if year is not None and descriptor.contains_year(year):
                cols[h] = str(year)
    return cols


def parse_structured(text: str, descriptor: DatasetDescriptor) -> list[dict]:
    """Parse a CSV laid out exactly like the dataset's export into records.

    Raises SchemaMismatch when the key column is absent and
    EmptyOrUnrecognizedFormat when no row survives.
    """
    df = read_csv_text(text)
    headers = list(df.columns)
    key_col = next((h for h in headers if h.upper() == descriptor.key_field.upper()), None)
    if key_col is None:
        raise SchemaMismatch(
            f"Expected key field '{descriptor.key_field}' not found",
            expected=descriptor.key_field,
            found=headers[:10],
            file_name=descriptor.file_name,
        )

    field_cols = _field_columns(headers, key_col, descriptor)
    for h in field_cols:
        df[h] = df[h].map(parse_count)

    records: dict = {}
    for row in df.to_dict("records"):
        if descriptor.is_year_keyed:
            ident = parse_year(row[key_col])
            if ident is None or not descriptor.contains_year(ident):
                continue
        else:
            label = clean_label(row[key_col])
            if not label or label.upper().startswith(TOTAL_LABELS):
                continue
            ident = descriptor.canonical_category(label)

        rec = {descriptor.id_field: ident}
        for h, field in field_cols.items():
            rec[field] = rec.get(field, 0) + int(row[h])

        if ident in records:
            merge_into(records[ident], rec, descriptor.id_field)
        else:
            records[ident] = rec

    if not records:
        raise EmptyOrUnrecognizedFormat(
            "The uploaded CSV file appears to be empty or invalid",
            file_name=descriptor.file_name,
            headers=headers[:10],
        )
    return list(records.values())


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def export_fields(records: list[dict], descriptor: DatasetDescriptor) -> list[str]:
    """Columns after the key field: year strings or category names."""
    if descriptor.fields:
        return descriptor.fields
    seen: dict[str, None] = {}
    for rec in records:
        for field in rec:
            if field != descriptor.id_field:
                seen.setdefault(field, None)
    return list(seen)


def export_rows(records: list[dict], descriptor: DatasetDescriptor) -> list[dict]:
    fields = export_fields(records, descriptor)
    return [
        {descriptor.key_field: rec[descriptor.id_field], **{f: parse_count(rec.get(f, 0)) for f in fields}}
        for rec in records
    ]


def export_csv(records: list[dict], descriptor: DatasetDescriptor) -> str:
    """Rebuild a CSV with header [keyField, ...fields] from the store."""
    columns = [descriptor.key_field, *export_fields(records, descriptor)]
    df = pd.DataFrame(export_rows(records, descriptor), columns=columns)
    return df.to_csv(index=False, lineterminator="\n")


# ---------------------------------------------------------------------------
# Inbox seed files
# ---------------------------------------------------------------------------

def discover_seed_files(inbox: Path = INBOX_FOLDER) -> dict[str, Path]:
    """Map dataset id → newest inbox CSV named like that dataset's expected file."""
    found: dict[str, Path] = {}
    if not inbox.exists():
        return found
    for csv_file in inbox.rglob("*.csv"):
        descriptor = descriptor_for_file(csv_file.name)
        if descriptor is None:
            continue
        current = found.get(descriptor.id)
        if current is None or csv_file.stat().st_mtime > current.stat().st_mtime:
            found[descriptor.id] = csv_file
    return found


def load_seed_file(path: Path, descriptor: DatasetDescriptor) -> list[dict]:
    """Parse one inbox file through the structured path."""
    return parse_structured(path.read_text(encoding="utf-8-sig"), descriptor)
