"""
Dataset Report: summary, export rows and tuples as JSON, or a two-sheet workbook.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from emigrant_analytics.analytics.common import sanitize_for_json
from emigrant_analytics.analytics.records import enumerate_tuples
from emigrant_analytics.analytics.summary import dataset_summary
from emigrant_analytics.data.loader import export_fields, export_rows
from emigrant_analytics.data.store import RecordStore
from emigrant_analytics.excel.writer import ExcelWriter


YEAR_TOTAL_COLS = [
    ("year", "year", "Year"),
    ("total", "number", "Emigrants"),
]


def generate_json(store: RecordStore) -> dict:
    records = store.records
    descriptor = store.descriptor
    return sanitize_for_json({
        "dataset": descriptor.id,
        "display_name": descriptor.display_name,
        "key_field": descriptor.key_field,
        "fields": export_fields(records, descriptor),
        "summary": dataset_summary(records, descriptor),
        "rows": export_rows(records, descriptor),
        "tuples": [t._asdict() for t in enumerate_tuples(records, descriptor)],
    })


def generate_excel(store: RecordStore, output_path: str | Path) -> Path:
    data = generate_json(store)
    s = data["summary"]
    ew = ExcelWriter()

    # Summary
    ws = ew.add_sheet("Summary")
    ew.write_title(ws, data["display_name"].upper(),
                   f"Registered Emigrants  |  {data['key_field']}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (s["total"], "TOTAL EMIGRANTS", "number"),
        (s["categories_with_data"], "CATEGORIES WITH DATA", "number"),
        (s["peak_year"] or "n/a", "PEAK YEAR", "year"),
        (s["peak_total"], "PEAK YEAR TOTAL", "number"),
    ])

    row = ew.write_section(ws, row, "LATEST YEAR")
    ew.write_kpi_row(ws, row, [
        (s["latest_year"] or "n/a", "LATEST YEAR", "year"),
        (s["latest_total"], "LATEST YEAR TOTAL", "number"),
    ])
    ew.write_delta_kpi(ws, row, 5, s["yoy_pct_change"], "CHANGE VS PRIOR YEAR")
    row += 3

    row = ew.write_section(ws, row, "TOTALS BY YEAR")
    peak = s["peak_year"]
    ew.write_table(
        ws, row, YEAR_TOTAL_COLS, s["year_totals"],
        highlight_fn=lambda _, r: "peak" if r["year"] == peak else None,
        freeze=False,
    )

    # Data
    ws_d = ew.add_sheet("Data")
    columns = [(data["key_field"], "text", data["key_field"])]
    columns += [(f, "number", f) for f in data["fields"]]
    ew.write_table(ws_d, 1, columns, data["rows"], show_total=True)

    return ew.save(output_path)
