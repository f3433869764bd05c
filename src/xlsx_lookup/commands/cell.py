"""Read one cell of a snapshot by position or header name."""

import typer

from xlsx_lookup.cli import app
from xlsx_lookup.formatters.json_formatter import output_spreadsheet_data
from xlsx_lookup.snapshot.cache import get_or_build
from xlsx_lookup.utils.errors import XlsxLookupError, handle_error
from xlsx_lookup.utils.validation import parse_column_arg, validate_file


@app.command()
@handle_error
def cell(
    file: str = typer.Argument(..., help="Path to the Excel file"),
    row: int = typer.Argument(..., help="Zero-based row (the header row is row 0)"),
    column: str = typer.Argument(..., help="Zero-based column index, or header name with --header"),
    sheet: str = typer.Option(..., "--sheet", "-s", help="Sheet name"),
    header: bool = typer.Option(False, "--header", help="Treat row 0 as column headers"),
) -> None:
    """Return the text of one cell."""
    path = validate_file(file)
    column_key = parse_column_arg(column, header)
    snapshot = get_or_build(path, sheet, has_header=header)

    try:
        value = snapshot.cell_at(row, column_key)
    except IndexError:
        raise XlsxLookupError(
            "CELL_OUT_OF_RANGE",
            f"Cell ({row}, {column}) is outside the sheet",
            [f"Sheet has {snapshot.row_count} rows and {snapshot.column_count} columns"],
        ) from None

    output_spreadsheet_data({"sheet": sheet, "row": row, "column": column, "value": value})
