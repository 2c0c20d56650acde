"""
ExcelWriter: builder for styled dataset workbooks.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from emigrant_analytics.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    KPI_LABEL_FONT, RISE_KPI_FONT, FALL_KPI_FONT,
    CENTER,
)
from emigrant_analytics.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    add_kpi_card,
)


ColSpec = tuple[str, str, str]  # (key, col_type, label)

TOTAL_TYPES = ("number",)


class ExcelWriter:
    """Fluent builder for styled workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    def add_sheet(self, title: str) -> Worksheet:
        """Create a worksheet, reusing the default sheet on the first call."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, merge_cols: int = 6) -> int:
        """Write title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = title
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)

        ws.cell(row=2, column=1).value = subtitle
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)

        for col in range(1, merge_cols + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(
        self,
        ws: Worksheet,
        row: int,
        kpis: list[tuple],  # [(value, label, format_type), ...]
        start_col: int = 1,
        col_spacing: int = 2,
    ) -> int:
        """Write a row of KPI cards. Returns the row after the cards."""
        col = start_col
        for value, label, fmt in kpis:
            add_kpi_card(ws, row, col, value, label, fmt)
            col += col_spacing
        return row + 3

    def write_delta_kpi(self, ws: Worksheet, row: int, col: int, value: float | None, label: str) -> None:
        """Percent change card: green when rising, red when falling, n/a when unknown."""
        cell = ws.cell(row=row, column=col)
        if value is None:
            cell.value = "n/a"
            cell.font = RISE_KPI_FONT
        else:
            cell.value = value
            cell.font = RISE_KPI_FONT if value >= 0 else FALL_KPI_FONT
            cell.number_format = '+0.0"%";-0.0"%";0.0"%"'
        cell.alignment = CENTER

        lbl = ws.cell(row=row + 1, column=col)
        lbl.value = label
        lbl.font = KPI_LABEL_FONT
        lbl.alignment = CENTER

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        highlight_fn=None,
        freeze: bool = True,
        show_total: bool = False,
        total_label: str = "TOTAL",
    ) -> int:
        """Write headers, data rows and an optional TOTAL row.

        highlight_fn(row_idx, row_data) -> str|None, e.g. 'peak'.
        Returns the row number after the last written row.
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = label
        format_header_row(ws, start_row, len(columns))

        rows = data.to_dict("records") if isinstance(data, pd.DataFrame) else data

        row = start_row + 1
        for idx, row_data in enumerate(rows):
            hl = highlight_fn(idx, row_data) if highlight_fn else None
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                val = row_data.get(key, 0)
                if val is None or (not isinstance(val, str) and pd.isna(val)):
                    val = 0
                format_data_cell(ws, row, col_num, val, col_type, highlight=hl)
            row += 1

        if show_total and rows:
            df_rows = pd.DataFrame(rows)
            format_data_cell(ws, row, 1, total_label, "text", is_total=True)
            for col_num, (key, col_type, _) in enumerate(columns[1:], 2):
                if col_type in TOTAL_TYPES and key in df_rows.columns:
                    format_data_cell(ws, row, col_num, int(df_rows[key].fillna(0).sum()), col_type, is_total=True)
                else:
                    format_data_cell(ws, row, col_num, "", "text", is_total=True)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"B{start_row + 1}"
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
