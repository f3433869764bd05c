"""Tests for __main__.py entry point: broad exception handler.

CliRunner invokes app (cli.py) directly, bypassing __main__.py.
These tests call main() directly to exercise the except-Exception handler.
"""

import json
import sys
from io import StringIO
from unittest.mock import patch

from xlsx_lookup.__main__ import main


def test_internal_error_produces_json(people_xlsx):
    """Unexpected exceptions produce structured JSON on stdout, traceback on stderr."""
    stdout_buf = StringIO()
    stderr_buf = StringIO()

    with (
        patch("sys.argv", ["xlsx-lookup", "cell", str(people_xlsx), "1", "0", "-s", "People"]),
        patch(
            "xlsx_lookup.commands.cell.get_or_build",
            side_effect=ValueError("simulated internal error"),
        ),
        patch.object(sys, "stdout", stdout_buf),
        patch.object(sys, "stderr", stderr_buf),
    ):
        try:
            main()
        except SystemExit as e:
            assert e.code == 1

    data = json.loads(stdout_buf.getvalue())
    assert data["error"] is True
    assert data["code"] == "INTERNAL_ERROR"
    assert data["exception_type"] == "ValueError"
    assert "simulated internal error" in data["message"]

    # Traceback preserved on stderr for developers
    assert "ValueError: simulated internal error" in stderr_buf.getvalue()


def test_unknown_option_returns_cli_usage_error():
    """Unknown CLI flags produce structured JSON with CLI_USAGE_ERROR code."""
    stdout_buf = StringIO()

    with (
        patch("sys.argv", ["xlsx-lookup", "--nonexistent-flag"]),
        patch.object(sys, "stdout", stdout_buf),
    ):
        try:
            main()
        except SystemExit as e:
            assert e.code == 2

    data = json.loads(stdout_buf.getvalue())
    assert data["error"] is True
    assert data["code"] == "CLI_USAGE_ERROR"
    assert "--nonexistent-flag" in data["message"]


def test_negative_row_gets_suggestion(people_xlsx):
    stdout_buf = StringIO()

    with (
        patch("sys.argv", ["xlsx-lookup", "cell", str(people_xlsx), "-1", "0", "-s", "People"]),
        patch.object(sys, "stdout", stdout_buf),
    ):
        try:
            main()
        except SystemExit as e:
            assert e.code == 2

    data = json.loads(stdout_buf.getvalue())
    assert data["code"] == "CLI_USAGE_ERROR"
    assert any("zero-based" in s for s in data["suggestions"])


def test_info_index_options_need_a_sheet(people_xlsx):
    """--header / --lookup-column without --sheet is a usage error, not silently ignored."""
    stdout_buf = StringIO()

    with (
        patch("sys.argv", ["xlsx-lookup", "info", str(people_xlsx), "-k", "Team"]),
        patch.object(sys, "stdout", stdout_buf),
    ):
        try:
            main()
        except SystemExit as e:
            assert e.code == 2

    data = json.loads(stdout_buf.getvalue())
    assert data["code"] == "CLI_USAGE_ERROR"
    assert "--sheet" in data["message"]
