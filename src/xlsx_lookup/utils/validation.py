"""Shared validation helpers for file paths and column specifiers."""

from __future__ import annotations

from pathlib import Path

from xlsx_lookup.utils.constants import EXCEL_EXTENSIONS
from xlsx_lookup.utils.errors import ExcelFileNotFoundError, InvalidFormatError


def validate_file(filepath: str | Path) -> Path:
    """Validate that the file exists and has a supported extension. Returns resolved Path."""
    p = Path(filepath).resolve()
    if not p.exists():
        raise ExcelFileNotFoundError(str(filepath))
    if p.suffix.lower() not in EXCEL_EXTENSIONS:
        raise InvalidFormatError(str(filepath))
    return p


def parse_column_arg(column: str, by_header: bool) -> int | str:
    """Interpret a CLI column argument.

    Digits become a zero-based index unless *by_header* is set, in which case
    the text is always a header name (headers like "2024" stay addressable).
    """
    column = column.strip()
    if not by_header and column.isdigit():
        return int(column)
    return column
