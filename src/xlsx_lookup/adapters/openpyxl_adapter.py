"""openpyxl adapter: decodes one worksheet into tagged cells for the grid loader.

The workbook is opened twice in normal (non-read-only) mode:

- ``data_only=False`` exposes formula cells with ``data_type == "f"`` so they can
  be tagged as formulas.
- ``data_only=True`` exposes the cached result Excel stored for each formula,
  which becomes the cell's ``cached_type`` / ``cached_value``.

Date-formatted cells are handed over as their stored serial number, so a
date reads the same as any other numeric cell.

Read-only mode is avoided because its dimensions come from the sheet's
``<dimension>`` tag, which some writers omit.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from openpyxl import load_workbook
from openpyxl.utils.datetime import to_excel

from xlsx_lookup.snapshot.cells import Cell, CellType
from xlsx_lookup.utils.errors import SheetNotFoundError

# openpyxl data_type codes
_TYPE_MAP = {
    "n": CellType.NUMERIC,
    "s": CellType.TEXT,
    "str": CellType.TEXT,
    "inlineStr": CellType.TEXT,
    "b": CellType.BOOLEAN,
    "e": CellType.ERROR,
    "f": CellType.FORMULA,
    "d": CellType.NUMERIC,
}


def _cell_type(data_type: str, value: Any) -> CellType:
    if value is None and data_type != "f":
        return CellType.BLANK
    return _TYPE_MAP.get(data_type, CellType.OTHER)


def _stored_value(data_type: str, value: Any, epoch: Any) -> Any:
    # Date cells are numbers on disk; undo openpyxl's number-format conversion
    if data_type == "d" and value is not None:
        return to_excel(value, epoch)
    return value


class OpenpyxlSheetSource:
    """Row/cell access over a worksheet pair (formulas + cached values).

    Rows and columns are zero-based. Every row is materialised from column A
    and row 1 so that positions line up with the grid, whatever the sheet's
    first used cell is.
    """

    def __init__(self, formula_ws: Any, values_ws: Any):
        max_row = formula_ws.max_row
        max_col = formula_ws.max_column
        self.title = formula_ws.title
        self._epoch = formula_ws.parent.epoch
        self._formula_rows = tuple(
            formula_ws.iter_rows(min_row=1, max_row=max_row, min_col=1, max_col=max_col)
        )
        self._value_rows = tuple(
            values_ws.iter_rows(min_row=1, max_row=max_row, min_col=1, max_col=max_col)
        )

    @property
    def last_row_index(self) -> int:
        return len(self._formula_rows) - 1

    def last_cell_index(self, row: int) -> int:
        """Index of the last non-empty cell in *row*, or -1 for an empty/absent row."""
        if not 0 <= row < len(self._formula_rows):
            return -1
        cells = self._formula_rows[row]
        for idx in range(len(cells) - 1, -1, -1):
            if cells[idx].value is not None:
                return idx
        return -1

    def cell(self, row: int, column: int) -> Cell | None:
        """Return the decoded cell, or None when nothing is stored at that position."""
        if not 0 <= row < len(self._formula_rows):
            return None
        cells = self._formula_rows[row]
        if not 0 <= column < len(cells):
            return None

        source = cells[column]
        if source.value is None:
            return None
        cell_type = _cell_type(source.data_type, source.value)
        if cell_type is not CellType.FORMULA:
            return Cell(cell_type, _stored_value(source.data_type, source.value, self._epoch))

        cached = self._value_rows[row][column]
        return Cell(
            CellType.FORMULA,
            source.value,
            cached_type=_cell_type(cached.data_type, cached.value),
            cached_value=_stored_value(cached.data_type, cached.value, self._epoch),
        )


@contextmanager
def open_sheet(filepath: str | Path, sheet_name: str) -> Iterator[OpenpyxlSheetSource]:
    """Open *sheet_name* of *filepath*; both workbooks are closed on every exit path."""
    formula_wb = load_workbook(str(filepath), data_only=False)
    try:
        if sheet_name not in formula_wb.sheetnames:
            raise SheetNotFoundError(sheet_name, formula_wb.sheetnames)
        values_wb = load_workbook(str(filepath), data_only=True)
        try:
            yield OpenpyxlSheetSource(formula_wb[sheet_name], values_wb[sheet_name])
        finally:
            values_wb.close()
    finally:
        formula_wb.close()


def get_sheet_names(filepath: str | Path) -> list[str]:
    """Return the workbook's sheet names in tab order."""
    wb = load_workbook(str(filepath), read_only=True)
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()
