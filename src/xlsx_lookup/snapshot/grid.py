"""Grid loader: reads a whole worksheet into a dense, immutable text grid."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Protocol

from xlsx_lookup.snapshot.cells import Cell, normalize_cell

logger = logging.getLogger(__name__)

Grid = tuple[tuple[str, ...], ...]

EMPTY_GRID: Grid = ()


class SheetSource(Protocol):
    """What the loader needs from a decoded worksheet (zero-based positions)."""

    @property
    def last_row_index(self) -> int: ...

    def last_cell_index(self, row: int) -> int: ...

    def cell(self, row: int, column: int) -> Cell | None: ...


def load_grid(source: SheetSource) -> Grid:
    """Normalize every in-bounds position of *source* into text.

    Rows come from ``last_row_index`` and columns from the first row's last
    cell index. A last row index of 0 yields an empty grid even when row 0
    has content; callers depend on that row count, so it is kept as is.
    """
    last_row = source.last_row_index
    if last_row <= 0:
        return EMPTY_GRID

    rows_count = last_row + 1
    columns_count = source.last_cell_index(0) + 1

    grid: list[tuple[str, ...]] = []
    for row in range(rows_count):
        values: list[str] = []
        for column in range(columns_count):
            cell = source.cell(row, column)
            values.append("" if cell is None else normalize_cell(cell))
        grid.append(tuple(values))
    return tuple(grid)


def load_sheet_grid(filepath: str | Path, sheet_name: str) -> Grid:
    """Decode *sheet_name* from *filepath* and load it; the workbook is released afterwards."""
    from xlsx_lookup.adapters.openpyxl_adapter import open_sheet

    start = time.perf_counter()
    with open_sheet(filepath, sheet_name) as source:
        grid = load_grid(source)
    elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
    logger.debug(
        "Loaded grid %s[%s]: %d rows x %d columns in %sms",
        filepath,
        sheet_name,
        len(grid),
        len(grid[0]) if grid else 0,
        elapsed_ms,
    )
    return grid
