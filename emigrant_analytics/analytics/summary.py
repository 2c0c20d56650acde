"""
Dataset summary: headline KPIs for one dataset.
"""
from __future__ import annotations

from emigrant_analytics.analytics.common import pct_change
from emigrant_analytics.analytics.views import to_wide
from emigrant_analytics.data.schemas import DatasetDescriptor


def dataset_summary(records: list[dict], descriptor: DatasetDescriptor) -> dict:
    """Totals, per-year totals, peak and latest year with YoY change."""
    wide = to_wide(records, descriptor)
    year_totals = wide.sum(axis=1)
    cat_totals = wide.sum(axis=0)
    active = year_totals[year_totals > 0]

    peak_year = int(active.idxmax()) if len(active) else None
    latest_year = int(active.index.max()) if len(active) else None
    latest_total = int(active[latest_year]) if latest_year is not None else 0
    prev_total = int(year_totals.get(latest_year - 1, 0)) if latest_year is not None else 0

    return {
        "dataset": descriptor.id,
        "display_name": descriptor.display_name,
        "record_count": len(records),
        "total": int(year_totals.sum()),
        "categories_with_data": int((cat_totals > 0).sum()),
        "year_totals": [{"year": int(y), "total": int(v)} for y, v in year_totals.items()],
        "peak_year": peak_year,
        "peak_total": int(active[peak_year]) if peak_year is not None else 0,
        "latest_year": latest_year,
        "latest_total": latest_total,
        "yoy_pct_change": (
            round(pct_change(latest_total, prev_total), 1)
            if latest_year is not None and prev_total else None
        ),
        "default_year": latest_year,
    }
