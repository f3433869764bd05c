"""Immutable, indexed snapshot of one worksheet."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from xlsx_lookup.snapshot.grid import Grid, load_sheet_grid
from xlsx_lookup.snapshot.indexes import (
    build_header_index,
    build_lookup_index,
    resolve_column,
)
from xlsx_lookup.utils.errors import LookupNotSupportedError


class IndexedSheet:
    """Queryable text snapshot of a worksheet.

    Row and column numbers are zero-based grid positions, so with header
    support the header row is row 0 and data starts at row 1. Columns can be
    given as an index or, when the sheet was built with a header, as a header
    name.

    Instances never change after construction and can be shared freely
    between threads.
    """

    __slots__ = ("_grid", "_header_index", "_lookup_index", "_lookup_column")

    def __init__(
        self,
        grid: Grid,
        has_header: bool = False,
        lookup_column: int | str | None = None,
    ):
        self._grid = grid
        self._header_index: Mapping[str, int] | None = None
        self._lookup_index: Mapping[str, int] | None = None
        self._lookup_column: int | None = None

        if has_header:
            self._header_index = MappingProxyType(build_header_index(grid))

        if lookup_column is not None:
            column = resolve_column(self._header_index, lookup_column)
            self._lookup_index = MappingProxyType(build_lookup_index(grid, column))
            self._lookup_column = column

    @classmethod
    def build(
        cls,
        filepath: str | Path,
        sheet_name: str,
        has_header: bool = False,
        lookup_column: int | str | None = None,
    ) -> "IndexedSheet":
        """Load *sheet_name* from *filepath* and index it."""
        grid = load_sheet_grid(filepath, sheet_name)
        return cls(grid, has_header=has_header, lookup_column=lookup_column)

    # ------------------------------------------------------------------
    # Shape and capabilities
    # ------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        return len(self._grid)

    @property
    def column_count(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def supports_header(self) -> bool:
        return self._header_index is not None

    @property
    def supports_lookup(self) -> bool:
        return self._lookup_index is not None

    @property
    def lookup_column(self) -> int | None:
        """Index of the column the lookup index was built on."""
        return self._lookup_column

    @property
    def headers(self) -> tuple[str, ...]:
        if self._header_index is None:
            return ()
        return tuple(self._header_index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def cell_at(self, row: int, column: int | str) -> str:
        """Return the text at *row* / *column*.

        Positions outside the grid raise IndexError. A header name needs
        header support (HeaderNotSupportedError) and must exist
        (UnknownHeaderError).
        """
        index = resolve_column(self._header_index, column)
        if row < 0 or index < 0:
            raise IndexError(f"Cell position ({row}, {index}) is outside the sheet")
        return self._grid[row][index]

    def row(self, row: int) -> tuple[str, ...]:
        if row < 0:
            raise IndexError(f"Row {row} is outside the sheet")
        return self._grid[row]

    def row_index(self, value: str) -> int | None:
        """First row whose lookup-column text equals *value*, or None."""
        if self._lookup_index is None:
            raise LookupNotSupportedError()
        return self._lookup_index.get(value)

    def lookup(self, value: str, column: int | str) -> str | None:
        """Return *column* of the first row whose lookup-column text equals *value*.

        None means no row matched, which is different from a matching row
        whose cell is empty text ("").
        """
        if self._lookup_index is None:
            raise LookupNotSupportedError()
        index = resolve_column(self._header_index, column)
        row = self._lookup_index.get(value)
        if row is None:
            return None
        return self.cell_at(row, index)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.row_count,
            "columns": self.column_count,
            "headers": list(self.headers),
            "supports_header": self.supports_header,
            "supports_lookup": self.supports_lookup,
            "lookup_column": self._lookup_column,
        }

    def __repr__(self) -> str:
        return (
            f"IndexedSheet(rows={self.row_count}, columns={self.column_count}, "
            f"header={self.supports_header}, lookup_column={self._lookup_column})"
        )
