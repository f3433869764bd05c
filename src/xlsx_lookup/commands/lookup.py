"""Find the first row matching a value and return one of its cells."""

import typer

from xlsx_lookup.cli import app
from xlsx_lookup.formatters.json_formatter import output_spreadsheet_data
from xlsx_lookup.snapshot.cache import get_or_build
from xlsx_lookup.utils.errors import XlsxLookupError, handle_error
from xlsx_lookup.utils.validation import parse_column_arg, validate_file


@app.command()
@handle_error
def lookup(
    file: str = typer.Argument(..., help="Path to the Excel file"),
    value: str = typer.Argument(..., help="Text to match in the --by column"),
    column: str = typer.Argument(..., help="Column to return (index, or header name with --header)"),
    sheet: str = typer.Option(..., "--sheet", "-s", help="Sheet name"),
    by: str = typer.Option(
        ..., "--by", "-k", help="Lookup column (index, or header name with --header)"
    ),
    header: bool = typer.Option(False, "--header", help="Treat row 0 as column headers"),
) -> None:
    """Look up VALUE in the --by column and return COLUMN from the first matching row.

    Matching is exact on the cell text; only the first matching row counts.
    A miss returns found=false and value=null.
    """
    path = validate_file(file)

    try:
        snapshot = get_or_build(
            path, sheet, has_header=header, lookup_column=parse_column_arg(by, header)
        )
        result = snapshot.lookup(value, parse_column_arg(column, header))
    except IndexError:
        raise XlsxLookupError(
            "CELL_OUT_OF_RANGE",
            f"Column {column} or lookup column {by} is outside the sheet",
            ["Columns are zero-based; use 'info --sheet' to see the sheet width"],
        ) from None

    output_spreadsheet_data(
        {
            "sheet": sheet,
            "lookup": value,
            "column": column,
            "found": result is not None,
            "row": snapshot.row_index(value),
            "value": result,
        }
    )
