"""
View engine: reshape one dataset's records into chart-ready rows.

Every function here is pure: (records, descriptor[, year]) in, plain
lists/dicts of native ints out. A view that needs a year returns [] when
none is given.
"""
from __future__ import annotations

from typing import Callable, Optional

import pandas as pd

from emigrant_analytics.analytics.common import pct_of_total
from emigrant_analytics.data.normalize import parse_year, record_to_tuples
from emigrant_analytics.data.schemas import DatasetDescriptor, NormalizedTuple, ViewKind


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def long_frame(records: list[dict], descriptor: DatasetDescriptor) -> pd.DataFrame:
    """One row per (category, year, count) cell; negatives dropped, zeros kept."""
    rows = [t for rec in records for t in record_to_tuples(rec, descriptor, keep_zero=True)]
    df = pd.DataFrame(rows, columns=list(NormalizedTuple._fields))
    return df.astype({"year": "int64", "count": "int64"})


def category_order(df: pd.DataFrame, descriptor: DatasetDescriptor) -> list[str]:
    """Declared vocabulary first, then extra labels in order of appearance."""
    cats = list(descriptor.categories)
    for cat in df["category"].unique():
        if cat not in cats:
            cats.append(cat)
    return cats


def year_order(records: list[dict], descriptor: DatasetDescriptor) -> list[int]:
    """Years present for YearKeyed data; the declared range for CategoryKeyed."""
    if not descriptor.is_year_keyed:
        return descriptor.years
    years = {parse_year(r.get("year")) for r in records}
    return sorted(y for y in years if y is not None)


def to_wide(records: list[dict], descriptor: DatasetDescriptor) -> pd.DataFrame:
    """Year × category count matrix; missing cells are 0."""
    df = long_frame(records, descriptor)
    years = year_order(records, descriptor)
    cats = category_order(df, descriptor)
    if df.empty:
        return pd.DataFrame(0, index=pd.Index(years, name="year"), columns=cats, dtype="int64")
    wide = df.pivot_table(index="year", columns="category", values="count", aggfunc="sum", fill_value=0)
    return wide.reindex(index=years, columns=cats, fill_value=0).astype("int64")


def _year_values(wide: pd.DataFrame, year: Optional[int]) -> pd.Series:
    if year is None or year not in wide.index:
        return pd.Series(dtype="int64")
    return wide.loc[year]


def _ranked(rows: list[dict], key: str = "value") -> list[dict]:
    return sorted(rows, key=lambda r: r[key], reverse=True)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

def to_trend(records: list[dict], descriptor: DatasetDescriptor) -> list[dict]:
    """One row per year with every category as an int column."""
    wide = to_wide(records, descriptor)
    return [
        {"year": int(year), **{cat: int(v) for cat, v in row.items()}}
        for year, row in wide.iterrows()
    ]


def to_composition(records: list[dict], descriptor: DatasetDescriptor, year: Optional[int] = None) -> list[dict]:
    """Positive categories for one year with their share of the year total."""
    if year is None:
        return []
    values = _year_values(to_wide(records, descriptor), year)
    positive = values[values > 0]
    total = int(positive.sum())
    return [
        {"name": cat, "value": int(v), "pct": round(pct_of_total(int(v), total), 1)}
        for cat, v in positive.items()
    ]


def to_comparison(records: list[dict], descriptor: DatasetDescriptor, year: Optional[int] = None) -> list[dict]:
    """Categories ranked by value for one year, or by all-years total."""
    if year is not None:
        values = _year_values(to_wide(records, descriptor), year)
        return _ranked([{"name": cat, "value": int(v)} for cat, v in values.items() if v > 0])

    wide = to_wide(records, descriptor)
    rows = []
    for cat, col in wide.items():
        total = int(col.sum())
        if total <= 0:
            continue
        rows.append({"name": cat, **{str(y): int(v) for y, v in col.items()}, "total": total})
    return _ranked(rows, key="total")


def to_distribution(records: list[dict], descriptor: DatasetDescriptor, year: Optional[int] = None) -> list[dict]:
    """Category totals in declared order (or by value when free text)."""
    if year is not None:
        return to_comparison(records, descriptor, year)

    totals = to_wide(records, descriptor).sum(axis=0)
    if not descriptor.categories:
        return _ranked([{"name": cat, "value": int(v)} for cat, v in totals.items() if v > 0])

    rows = []
    for cat, v in totals.items():
        # Vocabulary bins stay even when empty
        if descriptor.category_rank(cat) is not None or v > 0:
            rows.append({"name": cat, "value": int(v)})
    return rows


def to_relationship_pairs(records: list[dict], descriptor: DatasetDescriptor) -> list[dict]:
    """(x, y) per year from the first two vocabulary fields, tagged with the decade."""
    if len(descriptor.categories) < 2:
        return []
    x_field, y_field = descriptor.categories[:2]
    wide = to_wide(records, descriptor)
    points = []
    for year, row in wide.iterrows():
        x, y = int(row[x_field]), int(row[y_field])
        if not descriptor.is_year_keyed and x == 0 and y == 0:
            continue
        points.append({"year": int(year), "x": x, "y": y, "decade": int(year) // 10 * 10})
    return points


def to_hierarchy(records: list[dict], descriptor: DatasetDescriptor) -> dict:
    """Year → category tree; years with no positive count are left out."""
    wide = to_wide(records, descriptor)
    branches = []
    for year, row in wide.iterrows():
        leaves = [{"name": cat, "value": int(v)} for cat, v in row.items() if v > 0]
        if not leaves:
            continue
        branches.append({
            "name": str(year),
            "year": int(year),
            "value": sum(leaf["value"] for leaf in leaves),
            "children": leaves,
        })
    return {"name": descriptor.display_name, "children": branches}


def to_geographic(records: list[dict], descriptor: DatasetDescriptor, year: Optional[int] = None) -> list[dict]:
    """(key, value) per place for one year, or summed across all years."""
    wide = to_wide(records, descriptor)
    values = _year_values(wide, year) if year is not None else wide.sum(axis=0)
    return _ranked([{"key": cat, "value": int(v)} for cat, v in values.items() if v > 0])


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_VIEWS: dict[ViewKind, Callable] = {
    ViewKind.TREND: lambda recs, d, year: to_trend(recs, d),
    ViewKind.COMPOSITION: to_composition,
    ViewKind.COMPARISON: to_comparison,
    ViewKind.DISTRIBUTION: to_distribution,
    ViewKind.RELATIONSHIP: lambda recs, d, year: to_relationship_pairs(recs, d),
    ViewKind.HIERARCHICAL: lambda recs, d, year: to_hierarchy(recs, d),
    ViewKind.GEOGRAPHIC: to_geographic,
}

YEAR_REQUIRED = {ViewKind.COMPOSITION}


def build_view(
    records: list[dict],
    descriptor: DatasetDescriptor,
    kind: ViewKind | str | None = None,
    year: Optional[int] = None,
):
    """Render ``kind`` (default: the descriptor's own view kind)."""
    view_kind = ViewKind(kind) if kind is not None else descriptor.view_kind
    return _VIEWS[view_kind](records, descriptor, year)
