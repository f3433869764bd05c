"""JSON output formatting."""

from __future__ import annotations

import json
import sys
from typing import Any


def output(data: dict[str, Any]) -> None:
    """Print a dict as JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def output_spreadsheet_data(data: dict[str, Any]) -> None:
    """Output spreadsheet-sourced content, tagged as untrusted external data.

    Prepends ``_data_origin`` so a consuming agent has per-call provenance
    context for cell text it did not author.
    """
    output({"_data_origin": "untrusted_spreadsheet", **data})
