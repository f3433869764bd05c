"""Entry point wrapper ensuring all CLI errors produce structured JSON.

Intercepts Click/Typer UsageErrors (e.g. negative row numbers parsed as flags)
and unexpected exceptions, formatting both as JSON so callers that parse
stdout always get a machine-readable result.
"""

import json
import re
import sys
import traceback

import click

try:
    # Newer typer releases vendor click and raise their own exception classes
    from typer._click import exceptions as _typer_click_exceptions
    from typer import exceptions as _typer_exceptions
except ImportError:
    USAGE_ERRORS: tuple[type[Exception], ...] = (click.UsageError,)
    ABORT_ERRORS: tuple[type[BaseException], ...] = (click.Abort,)
else:
    USAGE_ERRORS = (click.UsageError, _typer_click_exceptions.UsageError)
    ABORT_ERRORS = (click.Abort, _typer_exceptions.Abort)


def main() -> None:
    """Run the CLI app with structured error handling for Click errors."""
    from xlsx_lookup.cli import app

    try:
        app(standalone_mode=False)
    except USAGE_ERRORS as e:
        _handle_usage_error(e)
    except SystemExit:
        raise
    except ABORT_ERRORS:
        raise SystemExit(1)
    except Exception as e:
        _handle_internal_error(e)


def _handle_usage_error(error: Exception) -> None:
    """Format a Click UsageError as structured JSON with helpful suggestions."""
    message = error.format_message()
    suggestions: list[str] = []

    # Detect negative number mistaken for a flag (e.g. "No such option: -4")
    if re.search(r"No such option: (-\d)", message):
        suggestions = [
            "Negative numbers are parsed as flags by the shell",
            "Rows and columns are zero-based and never negative",
        ]

    result = {"error": True, "code": "CLI_USAGE_ERROR", "message": message}
    if suggestions:
        result["suggestions"] = suggestions
    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    raise SystemExit(2)


def _handle_internal_error(error: Exception) -> None:
    """Report an unexpected exception as JSON on stdout, traceback on stderr."""
    traceback.print_exc(file=sys.stderr)
    result = {
        "error": True,
        "code": "INTERNAL_ERROR",
        "exception_type": type(error).__name__,
        "message": str(error),
    }
    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    raise SystemExit(1)


if __name__ == "__main__":
    main()
