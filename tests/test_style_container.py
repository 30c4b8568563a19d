from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from xlsxpack.errors import StyleError  # noqa: E402
from xlsxpack.reader.container import StyleReaderContainer  # noqa: E402
from xlsxpack.spec.style import (  # noqa: E402
    STYLE_DATE,
    STYLE_TIME,
    SpecBorder,
    SpecFill,
    SpecFont,
    SpecNumberFormat,
    SpecStyle,
)


def test_positional_lookups_return_none_out_of_range() -> None:
    cls_container = StyleReaderContainer.new()
    assert cls_container.get_border(0) is None
    assert cls_container.get_fill(-1) is None

    cls_container.add_border(SpecBorder())
    cls_container.add_fill(SpecFill())
    cls_container.add_font(SpecFont(bold=True))
    assert cls_container.get_border(0) == SpecBorder()
    assert cls_container.get_border(1) is None
    assert cls_container.get_font(0) == SpecFont(bold=True)
    assert cls_container.get_style(0) is None


def test_number_formats_are_keyed_by_id() -> None:
    cls_container = StyleReaderContainer.new()
    cls_container.add_number_format(164, SpecNumberFormat.custom("0.000"))
    assert cls_container.get_number_format(164).format_code == "0.000"
    assert cls_container.has_number_format(164)
    with pytest.raises(StyleError, match="numFmtId=165"):
        cls_container.get_number_format(165)


def test_style_kind_lookups() -> None:
    cls_container = StyleReaderContainer.new()
    cls_container.add_style(SpecStyle())
    cls_container.add_style(STYLE_DATE)
    cls_container.add_style(STYLE_TIME)
    assert cls_container.style_count == 3
    assert not cls_container.is_date_style(0)
    assert cls_container.is_date_style(1)
    assert cls_container.is_time_style(2)
    assert not cls_container.is_date_style(9)
