"""
Record enumeration: flatten a store into (category, year, count) rows for tables.
"""
from __future__ import annotations

import math
from typing import Optional

from emigrant_analytics.config import DEFAULT_PAGE_SIZE
from emigrant_analytics.data.normalize import record_to_tuples
from emigrant_analytics.data.schemas import DatasetDescriptor, NormalizedTuple


def enumerate_tuples(records: list[dict], descriptor: DatasetDescriptor) -> list[NormalizedTuple]:
    """Every positive cell, ordered by year then vocabulary position."""
    tuples = [t for rec in records for t in record_to_tuples(rec, descriptor)]
    unranked = len(descriptor.categories)

    def sort_key(t: NormalizedTuple):
        rank = descriptor.category_rank(t.category)
        return (t.year, unranked if rank is None else rank, t.category)

    return sorted(tuples, key=sort_key)


def search(tuples: list[NormalizedTuple], term: Optional[str]) -> list[NormalizedTuple]:
    """Case-insensitive substring match on category, year or count."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(tuples)
    return [
        t for t in tuples
        if needle in t.category.lower() or needle in str(t.year) or needle in str(t.count)
    ]


def paginate(items: list, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> dict:
    """Slice one page; ``page`` is clamped into [1, total_pages]."""
    page_size = max(1, int(page_size))
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(1, int(page)), total_pages)
    start = (page - 1) * page_size
    return {
        "items": items[start:start + page_size],
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": total_pages,
    }
