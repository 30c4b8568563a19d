from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

pl = pytest.importorskip("polars")

from xlsxpack.model import Worksheet  # noqa: E402
from xlsxpack.spec.text import SpecRichText, SpecTextRun  # noqa: E402
from xlsxpack.util.frame import to_polars  # noqa: E402


def _build_worksheet() -> Worksheet:
    cls_ws = Worksheet("Data")
    cls_ws.set_value("B2", "name")
    cls_ws.set_value("C2", "name")
    cls_ws.set_value("B3", "a")
    cls_ws.set_value("C3", "x")
    cls_ws.set_value("B4", SpecRichText(runs=(SpecTextRun(text="b"), SpecTextRun(text="c"))))
    cls_ws.set_formula(3, 2, "=UPPER(C3)")
    return cls_ws


def test_to_polars_with_header() -> None:
    df = to_polars(_build_worksheet())
    assert df.columns == ["name", "name_1"]
    assert df["name"].to_list() == ["a", "bc"]
    assert df["name_1"].to_list() == ["x", "UPPER(C3)"]
    assert df.height == 2


def test_to_polars_without_header_drops_formulas() -> None:
    df = to_polars(_build_worksheet(), if_header=False, if_formula_as_text=False)
    assert df.columns == ["B", "C"]
    assert df["B"].to_list() == ["name", "a", "bc"]
    assert df["C"].to_list()[2] is None


def test_to_polars_empty_sheet() -> None:
    assert to_polars(Worksheet("Empty")).is_empty()
