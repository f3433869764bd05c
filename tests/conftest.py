"""Shared pytest fixtures for xlsx-lookup tests."""

import datetime
import re
import zipfile

import pytest
from openpyxl import Workbook

from xlsx_lookup.snapshot.cells import Cell, CellType


def inject_cached_results(path, cached: dict[str, tuple[str, str | None]]) -> None:
    """Give formula cells a cached result, as Excel does when it saves.

    openpyxl never computes formulas, so the files it writes carry empty
    ``<v/>`` elements. *cached* maps a cell reference on the first sheet to
    ``(value text, t attribute or None)``.
    """
    sheet_xml = "xl/worksheets/sheet1.xml"
    with zipfile.ZipFile(path) as zin:
        entries = {name: zin.read(name) for name in zin.namelist()}

    xml = entries[sheet_xml].decode("utf-8")
    for ref, (value, type_attr) in cached.items():
        pattern = re.compile(rf'<c r="{ref}"(?P<attrs>[^>]*)>(?P<body>.*?)</c>', re.S)
        match = pattern.search(xml)
        assert match, f"cell {ref} not found in sheet XML"
        formula = re.search(r"<f[^>]*>.*?</f>", match.group("body"), re.S).group(0)
        attrs = re.sub(r'\s+t="[^"]*"', "", match.group("attrs"))
        if type_attr:
            attrs += f' t="{type_attr}"'
        replacement = f'<c r="{ref}"{attrs}>{formula}<v>{value}</v></c>'
        xml = xml[: match.start()] + replacement + xml[match.end() :]
    entries[sheet_xml] = xml.encode("utf-8")

    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zout:
        for name, data in entries.items():
            zout.writestr(name, data)


class FakeSource:
    """In-memory SheetSource built from rows of raw Python values (None = absent)."""

    def __init__(self, rows):
        self.rows = rows

    @property
    def last_row_index(self):
        return len(self.rows) - 1

    def last_cell_index(self, row):
        if row >= len(self.rows):
            return -1
        values = self.rows[row]
        for idx in range(len(values) - 1, -1, -1):
            if values[idx] is not None:
                return idx
        return -1

    def cell(self, row, column):
        if row >= len(self.rows) or column >= len(self.rows[row]):
            return None
        value = self.rows[row][column]
        if value is None:
            return None
        if isinstance(value, Cell):
            return value
        if isinstance(value, bool):
            return Cell(CellType.BOOLEAN, value)
        if isinstance(value, (int, float)):
            return Cell(CellType.NUMERIC, value)
        return Cell(CellType.TEXT, value)


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def people_xlsx(tmp_path):
    """Header + 5 data rows with a repeated key in column "Team".

    Sheet "People":
        Name   | Team  | Age | Active | Joined
        Alice  | red   | 30  | True   | 2024-01-15
        Bob    | blue  | 41  | False  | (blank)
        Carol  | red   | 25  | True   | 2023-06-01 08:30
        Dave   | green | 2.5 | (blank)| (blank)
        Eve    | blue  | 0   | False  | (blank)
    Sheet "Other": single cell.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "People"
    ws.append(["Name", "Team", "Age", "Active", "Joined"])
    ws.append(["Alice", "red", 30, True, datetime.datetime(2024, 1, 15)])
    ws.append(["Bob", "blue", 41, False, None])
    ws.append(["Carol", "red", 25, True, datetime.datetime(2023, 6, 1, 8, 30)])
    ws.append(["Dave", "green", 2.5, None, None])
    ws.append(["Eve", "blue", 0, False, None])

    other = wb.create_sheet("Other")
    other["A1"] = "only"

    p = tmp_path / "people.xlsx"
    wb.save(p)
    return p


@pytest.fixture
def abc_xlsx(tmp_path):
    """Header ["A","B","C"] over one data row ["1","x","true"]."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Sheet1"
    ws.append(["A", "B", "C"])
    ws.append(["1", "x", "true"])
    p = tmp_path / "abc.xlsx"
    wb.save(p)
    return p


@pytest.fixture
def formula_xlsx(tmp_path):
    """Formulas with cached numeric, error, boolean and string results.

    Sheet "Calc":
        Input | Double      | Ratio        | Check       | Label
        10    | =A2*2 (20)  | =A2/0 (#DIV/0!) | =A2>5 (1) | =A2&"x" ("10x")
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Calc"
    ws.append(["Input", "Double", "Ratio", "Check", "Label"])
    ws["A2"] = 10
    ws["B2"] = "=A2*2"
    ws["C2"] = "=A2/0"
    ws["D2"] = "=A2>5"
    ws["E2"] = '=A2&"x"'
    ws["A3"] = "end"
    p = tmp_path / "formulas.xlsx"
    wb.save(p)
    inject_cached_results(
        p,
        {
            "B2": ("20", None),
            "C2": ("#DIV/0!", "e"),
            "D2": ("1", "b"),
            "E2": ("10x", "str"),
        },
    )
    return p


@pytest.fixture
def duplicate_header_xlsx(tmp_path):
    wb = Workbook()
    ws = wb.active
    ws.title = "Dupes"
    ws.append(["Id", "Name", "Id"])
    ws.append(["1", "a", "2"])
    p = tmp_path / "dupes.xlsx"
    wb.save(p)
    return p


@pytest.fixture
def ragged_xlsx(tmp_path):
    """Rows shorter than the header and a fully empty row in the middle."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Ragged"
    ws["A1"] = "K"
    ws["B1"] = "V"
    ws["C1"] = "Note"
    ws["A2"] = "k1"
    # row 3 left empty
    ws["A4"] = "k2"
    ws["B4"] = "v2"
    p = tmp_path / "ragged.xlsx"
    wb.save(p)
    return p
