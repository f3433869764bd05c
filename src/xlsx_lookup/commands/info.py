"""Describe a workbook's sheets or the shape of one indexed snapshot."""

from typing import Optional

import typer

from xlsx_lookup.cli import app
from xlsx_lookup.formatters.json_formatter import output, output_spreadsheet_data
from xlsx_lookup.snapshot.cache import get_or_build
from xlsx_lookup.utils.errors import handle_error
from xlsx_lookup.utils.validation import parse_column_arg, validate_file


@app.command()
@handle_error
def info(
    file: str = typer.Argument(..., help="Path to the Excel file"),
    sheet: Optional[str] = typer.Option(
        None, "--sheet", "-s", help="Sheet to snapshot (omit to list sheets)"
    ),
    header: bool = typer.Option(
        False, "--header", help="Treat row 0 as column headers (needs --sheet)"
    ),
    lookup_column: Optional[str] = typer.Option(
        None,
        "--lookup-column",
        "-k",
        help="Column to build the lookup index on (index, or header name with --header; needs --sheet)",
    ),
) -> None:
    """List sheets, or summarise the snapshot built for --sheet."""
    path = validate_file(file)

    if sheet is None:
        if header or lookup_column is not None:
            raise typer.BadParameter(
                "only applies together with --sheet", param_hint="'--header' / '--lookup-column'"
            )
        from xlsx_lookup.adapters.openpyxl_adapter import get_sheet_names

        names = get_sheet_names(path)
        output({"file": path.name, "sheets": names, "count": len(names)})
        return

    key = parse_column_arg(lookup_column, header) if lookup_column is not None else None
    snapshot = get_or_build(path, sheet, has_header=header, lookup_column=key)
    output_spreadsheet_data({"file": path.name, "sheet": sheet, **snapshot.to_dict()})
