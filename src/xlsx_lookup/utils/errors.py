"""Consistent error types and JSON error formatting."""

from __future__ import annotations

import functools
import json
import sys
from typing import Any, Iterable


class XlsxLookupError(Exception):
    """Base error with structured JSON output."""

    def __init__(self, code: str, message: str, suggestions: list[str] | None = None):
        self.code = code
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": True,
            "code": self.code,
            "message": self.message,
        }
        if self.suggestions:
            result["suggestions"] = self.suggestions
        return result


class ExcelFileNotFoundError(XlsxLookupError):
    def __init__(self, path: str):
        super().__init__(
            "FILE_NOT_FOUND",
            f"The file '{path}' does not exist",
            ["Check the file path is correct", "Ensure the file has a supported extension"],
        )


class InvalidFormatError(XlsxLookupError):
    def __init__(self, path: str):
        super().__init__(
            "INVALID_FORMAT",
            f"'{path}' is not a supported Excel file",
            ["Supported formats: .xlsx, .xlsm"],
        )


class SheetNotFoundError(XlsxLookupError):
    def __init__(self, name: str, available: list[str]):
        super().__init__(
            "SHEET_NOT_FOUND",
            f"Sheet '{name}' not found",
            [f"Available sheets: {', '.join(available)}"],
        )


# ---------------------------------------------------------------------------
# Snapshot capability / schema / construction errors
# ---------------------------------------------------------------------------


class LookupNotSupportedError(XlsxLookupError):
    def __init__(self):
        super().__init__(
            "LOOKUP_NOT_SUPPORTED",
            "Lookup not supported.",
            ["Build the snapshot with a lookup column to enable value lookups"],
        )


class HeaderNotSupportedError(XlsxLookupError):
    def __init__(self):
        super().__init__(
            "HEADER_NOT_SUPPORTED",
            "Column header navigation not supported.",
            [
                "Build the snapshot with has_header=True (--header) to address columns by name",
                "Or address the column by its zero-based index",
            ],
        )


class UnknownHeaderError(XlsxLookupError):
    def __init__(self, header: str, available: Iterable[str]):
        self.header = header
        self.available = list(available)
        super().__init__(
            "UNKNOWN_HEADER",
            f"Header [{header}] does not exist. "
            f"Please use one of the following: [{','.join(self.available)}]",
            [f"Available headers: {', '.join(self.available)}"],
        )


class DuplicateHeaderError(XlsxLookupError):
    """Row 0 holds the same header text twice; the snapshot cannot be indexed."""

    def __init__(self, header: str, first_column: int, second_column: int):
        self.header = header
        self.first_column = first_column
        self.second_column = second_column
        super().__init__(
            "DUPLICATE_HEADER",
            f"Header [{header}] appears more than once "
            f"(columns {first_column} and {second_column})",
            [
                "Make every header in the first row unique",
                "Or build the snapshot without header support and use column indexes",
            ],
        )


class MemoryExceededError(XlsxLookupError):
    def __init__(self, used_mb: float, limit_mb: float):
        super().__init__(
            "MEMORY_EXCEEDED",
            f"Memory usage {used_mb:.0f}MB exceeds limit {limit_mb:.0f}MB",
            [
                "Raise the limit with XLSX_LOOKUP_MAX_MEMORY_MB",
                "Split the worksheet into smaller sheets",
            ],
        )


def handle_error(func):
    """Decorator that catches XlsxLookupError and prints JSON to stdout."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except XlsxLookupError as e:
            json.dump(e.to_dict(), sys.stdout, indent=2)
            sys.stdout.write("\n")
            raise SystemExit(1)

    return wrapper
