from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from xlsxpack.model import Cell, EnumCellType, Workbook, Worksheet  # noqa: E402
from xlsxpack.spec.document import SpecProtection  # noqa: E402
from xlsxpack.util.address import (  # noqa: E402
    parse_cell_ref,
    parse_column,
    parse_range_ref,
    to_cell_ref,
)


def test_cell_reference_helpers() -> None:
    assert parse_cell_ref("B3") == (2, 1)
    assert parse_cell_ref("$C$10") == (9, 2)
    assert to_cell_ref(0, 0) == "A1"
    assert to_cell_ref(9, 27) == "AB10"
    assert parse_column("C") == 2
    assert parse_column(4) == 4
    assert parse_range_ref("C3:A1") == ((0, 0), (2, 2))


def test_cell_reference_helpers_reject_invalid_input() -> None:
    with pytest.raises(ValueError):
        parse_cell_ref("3B")
    with pytest.raises(ValueError):
        to_cell_ref(-1, 0)
    with pytest.raises(TypeError):
        parse_column(True)
    with pytest.raises(ValueError):
        parse_range_ref("A1")


def test_cell_infers_its_type() -> None:
    assert Cell("x").cell_type is EnumCellType.STRING
    assert Cell(True).cell_type is EnumCellType.BOOL
    assert Cell(1.5).cell_type is EnumCellType.NUMBER
    assert Cell(datetime(2024, 1, 1)).cell_type is EnumCellType.DATE
    assert Cell(None).cell_type is EnumCellType.EMPTY
    with pytest.raises(TypeError):
        Cell(object())
    with pytest.raises(TypeError):
        Cell(1, cell_type=EnumCellType.FORMULA)


def test_worksheet_name_validation() -> None:
    with pytest.raises(ValueError):
        Worksheet("")
    with pytest.raises(ValueError):
        Worksheet("a" * 32)
    with pytest.raises(ValueError):
        Worksheet("bad/name")


def test_worksheet_cells_and_dimension() -> None:
    cls_ws = Worksheet("Data")
    assert cls_ws.dimension is None
    cls_ws.set_value("B2", 42)
    cls_ws.set_value("D5", "x")
    cls_ws.set_cell(0, 2, 1.5)
    cell = cls_ws.set_formula(3, 0, "=SUM(B2:B3)")

    assert cell.value == "SUM(B2:B3)"
    assert cell.cell_type is EnumCellType.FORMULA
    assert cls_ws.get_value("B2") == 42
    assert cls_ws.get_value("Z9") is None
    assert cls_ws.dimension == "A1:D5"
    assert [r for r, _ in cls_ws.iter_rows()] == [0, 1, 3, 4]


def test_worksheet_merge_rejects_overlap() -> None:
    cls_ws = Worksheet("Data")
    cls_ws.merge("A1:B2")
    cls_ws.merge("C1:C2")
    with pytest.raises(ValueError, match="overlaps"):
        cls_ws.merge("B2:D4")
    assert cls_ws.merged_ranges == [((0, 0), (1, 1)), ((0, 2), (1, 2))]


def test_worksheet_column_width_and_password() -> None:
    cls_ws = Worksheet("Data")
    cls_ws.set_column_width("C", 12.5)
    assert cls_ws.column_widths == {2: 12.5}
    with pytest.raises(ValueError):
        cls_ws.set_column_width(0, 300)

    cls_ws.set_password("x")
    assert cls_ws.protection == SpecProtection(password_hash="CEBA")
    cls_ws.set_password(None)
    assert cls_ws.protection is None


def test_workbook_add_worksheet_names() -> None:
    cls_wb = Workbook()
    assert cls_wb.add_worksheet().name == "Sheet1"
    assert cls_wb.add_worksheet("Data").name == "Data"
    assert cls_wb.add_worksheet("data").name == "data_1"
    assert cls_wb.add_worksheet("a:b").name == "a_b"
    assert cls_wb.get_worksheet("Data").name == "Data"
    with pytest.raises(KeyError):
        cls_wb.get_worksheet("Missing")


def test_workbook_password() -> None:
    cls_wb = Workbook()
    cls_wb.set_password("x", lock_windows=True)
    assert cls_wb.protection == SpecProtection(
        password_hash="CEBA", lock_structure=True, lock_windows=True
    )
    assert cls_wb.protection.is_password_set
