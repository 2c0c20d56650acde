"""
Count parsing, label cleanup, and record <-> tuple normalization.
"""
from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Optional

from emigrant_analytics.data.schemas import DatasetDescriptor, NormalizedTuple


# ---------------------------------------------------------------------------
# Scalar tokens
# ---------------------------------------------------------------------------

_NOISE_RE = re.compile(r"[\"',\s]")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")
_YEAR_RE = re.compile(r"^\d{4}$")


def parse_count(token: Any) -> int:
    """Parse a noisy numeric token ('"1,234"', ' 56 ', 78.0) into an int.

    Empty or non-numeric input yields 0; never raises.
    """
    if token is None:
        return 0
    if isinstance(token, bool):
        return int(token)
    if isinstance(token, int):
        return token
    if isinstance(token, float):
        if math.isnan(token) or math.isinf(token):
            return 0
        return int(token)
    cleaned = _NOISE_RE.sub("", str(token))
    m = _LEADING_INT_RE.match(cleaned)
    return int(m.group(0)) if m else 0


def clean_label(token: Any) -> str:
    """Strip quotes and collapse whitespace in a category label."""
    if token is None:
        return ""
    return " ".join(str(token).replace('"', "").split())


def parse_year(token: Any) -> Optional[int]:
    """Return a 4-digit year, or None when the token isn't one."""
    if token is None or isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token if 1000 <= token <= 9999 else None
    cleaned = str(token).replace('"', "").strip()
    if _YEAR_RE.match(cleaned):
        return int(cleaned)
    return None


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def _find_key(raw: Mapping[str, Any], candidates: Iterable[str]) -> Optional[str]:
    lowered = {str(k).strip().lower(): k for k in raw.keys()}
    for cand in candidates:
        hit = lowered.get(cand.strip().lower())
        if hit is not None:
            return hit
    return None


def identifier_of(raw: Mapping[str, Any], descriptor: DatasetDescriptor) -> Any:
    """Return the normalized identifier of a raw mapping, or None."""
    if descriptor.is_year_keyed:
        key = _find_key(raw, ("year", descriptor.key_field))
        return parse_year(raw[key]) if key is not None else None
    key = _find_key(raw, ("category", descriptor.key_field))
    if key is None:
        return None
    label = clean_label(raw[key])
    return descriptor.canonical_category(label) if label else None


def normalize_record(raw: Mapping[str, Any], descriptor: DatasetDescriptor) -> Optional[dict]:
    """Coerce a raw mapping into the canonical record shape.

    YearKeyed  → {"year": int, <category>: int, ...}
    CategoryKeyed → {"category": str, "<yyyy>": int, ...}

    Returns None when the identifier is missing or malformed.
    """
    ident = identifier_of(raw, descriptor)
    if ident is None:
        return None

    id_keys = {"year", "category", descriptor.key_field.strip().lower()}
    record: dict[str, Any] = {descriptor.id_field: ident}
    for key, value in raw.items():
        name = str(key).strip()
        if not name or name.lower() in id_keys or name.lower() == "id":
            continue
        if descriptor.is_year_keyed:
            field = descriptor.canonical_category(name)
        else:
            year = parse_year(name)
            if year is None:
                continue
            field = str(year)
        record[field] = record.get(field, 0) + parse_count(value)
    return record


def record_to_tuples(
    record: Mapping[str, Any],
    descriptor: DatasetDescriptor,
    keep_zero: bool = False,
) -> list[NormalizedTuple]:
    """Decompose one record into (category, year, count) tuples.

    Zero and negative counts are dropped unless ``keep_zero`` is set, in
    which case only negatives are dropped.
    """
    out: list[NormalizedTuple] = []
    if descriptor.is_year_keyed:
        year = parse_year(record.get("year"))
        if year is None:
            return out
        for field, value in record.items():
            if field == "year":
                continue
            count = parse_count(value)
            if count > 0 or (keep_zero and count == 0):
                out.append(NormalizedTuple(str(field), year, count))
        return out

    category = record.get("category")
    if not category:
        return out
    for field, value in record.items():
        if field == "category":
            continue
        year = parse_year(field)
        if year is None:
            continue
        count = parse_count(value)
        if count > 0 or (keep_zero and count == 0):
            out.append(NormalizedTuple(str(category), year, count))
    return out


def merge_into(target: dict, source: Mapping[str, Any], id_field: str) -> dict:
    """Add every non-identifying count of ``source`` onto ``target``."""
    for field, value in source.items():
        if field == id_field:
            continue
        target[field] = parse_count(target.get(field, 0)) + parse_count(value)
    return target
