"""Cell model and cell-to-text normalization.

Every cell the decoder hands over carries a closed type tag. Normalization
dispatches on that tag; formula cells are first resolved to the tag of their
cached result so the snapshot holds computed values, never formula strings.
"""

from __future__ import annotations

import datetime
import enum
import math
from typing import Any, NamedTuple


class CellType(enum.Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"
    ERROR = "error"
    FORMULA = "formula"
    BLANK = "blank"
    OTHER = "other"


class Cell(NamedTuple):
    """One decoded source cell.

    ``cached_type`` and ``cached_value`` describe the last computed result of a
    formula cell and are ignored for every other type.
    """

    type: CellType
    value: Any
    cached_type: CellType = CellType.BLANK
    cached_value: Any = None


def normalize_cell(cell: Cell) -> str:
    """Return the canonical text of *cell*. Never raises."""
    cell_type, value = cell.type, cell.value
    if cell_type is CellType.FORMULA:
        cell_type, value = cell.cached_type, cell.cached_value

    if cell_type is CellType.NUMERIC:
        return _numeric_text(value)
    if cell_type is CellType.TEXT:
        return "" if value is None else str(value)
    if cell_type is CellType.BOOLEAN:
        return "True" if value else "False"
    if cell_type is CellType.ERROR:
        return "" if value is None else str(value)
    if cell_type is CellType.BLANK:
        return ""
    return _fallback_text(value)


def _numeric_text(value: Any) -> str:
    """Render a number in its default decimal form (integral floats drop ``.0``)."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        if math.isfinite(value) and value == int(value):
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    return _fallback_text(value)


def _fallback_text(value: Any) -> str:
    """Best-effort printable form for dates and anything unrecognised."""
    if value is None:
        return ""
    try:
        if isinstance(value, datetime.datetime):
            # Midnight datetimes are date-only cells in practice
            if value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0:
                return value.strftime("%Y-%m-%d")
            return value.isoformat()
        if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat()
        if isinstance(value, float):
            return _numeric_text(value)
        return str(value)
    except Exception:
        return repr(value)
