"""Header and lookup indexes derived from a loaded grid."""

from __future__ import annotations

import logging
from typing import Mapping

from xlsx_lookup.snapshot.grid import Grid
from xlsx_lookup.utils.errors import (
    DuplicateHeaderError,
    HeaderNotSupportedError,
    UnknownHeaderError,
)

logger = logging.getLogger(__name__)


def build_header_index(grid: Grid) -> dict[str, int]:
    """Map each header in row 0 to its column. Raises DuplicateHeaderError on repeats."""
    index: dict[str, int] = {}
    if not grid:
        return index
    for column, header in enumerate(grid[0]):
        if header in index:
            raise DuplicateHeaderError(header, index[header], column)
        index[header] = column
    logger.debug("Built header index with %d headers", len(index))
    return index


def resolve_column(header_index: Mapping[str, int] | None, column: int | str) -> int:
    """Turn a column specifier into an index.

    ints pass through untouched unless negative (IndexError); strings are
    header names and need a header index that contains them.
    """
    if isinstance(column, int):
        if column < 0:
            raise IndexError(f"Column {column} is outside the sheet")
        return column
    if header_index is None:
        raise HeaderNotSupportedError()
    try:
        return header_index[column]
    except KeyError:
        raise UnknownHeaderError(column, header_index.keys()) from None


def build_lookup_index(grid: Grid, column: int) -> dict[str, int]:
    """Map each distinct text in *column* to the first row holding it."""
    index: dict[str, int] = {}
    for row, values in enumerate(grid):
        index.setdefault(values[column], row)
    logger.debug("Built lookup index on column %d: %d distinct values", column, len(index))
    return index
