from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .._optional_deps import import_optional_module
from ..model import EnumCellType, Worksheet
from ..spec.text import SpecRichText
from .address import to_column_name

if TYPE_CHECKING:
    import polars as pl


def _to_frame_value(value: Any) -> Any:
    if isinstance(value, SpecRichText):
        return value.plain
    if isinstance(value, Decimal):
        return float(value)
    return value


def to_polars(
    worksheet: Worksheet,
    *,
    if_header: bool = True,
    if_formula_as_text: bool = True,
) -> pl.DataFrame:
    """
    Export the used range of a worksheet as a polars DataFrame.

    Args:
        worksheet: Source worksheet (typically a read result).
        if_header: Use the first used row as column names; otherwise columns
            are named by their letters.
        if_formula_as_text: Keep formula cells as their text; otherwise
            they become nulls.

    Returns:
        pl.DataFrame: One column per used column; a column mixing value
        types is built non-strictly, i.e. widened to a common supertype.

    Raises:
        ModuleNotFoundError: If polars is not installed.
    """
    pl_mod = import_optional_module("polars", feature="xlsxpack.util.frame.to_polars")
    if not worksheet.cells:
        return pl_mod.DataFrame()

    n_row_min = min(r for r, _ in worksheet.cells)
    n_row_max = max(r for r, _ in worksheet.cells)
    n_col_min = min(c for _, c in worksheet.cells)
    n_col_max = max(c for _, c in worksheet.cells)
    l_cols = list(range(n_col_min, n_col_max + 1))

    def _value(row: int, col: int) -> Any:
        cell = worksheet.get_cell(row, col)
        if cell is None:
            return None
        if cell.cell_type is EnumCellType.FORMULA and not if_formula_as_text:
            return None
        return _to_frame_value(cell.value)

    n_body_start = n_row_min
    if if_header:
        l_names: list[str] = []
        set_seen: set[str] = set()
        for _col in l_cols:
            raw = _value(n_row_min, _col)
            c_name = str(raw) if raw is not None else to_column_name(_col)
            c_unique, n_dup = c_name, 1
            while c_unique in set_seen:
                c_unique = f"{c_name}_{n_dup}"
                n_dup += 1
            set_seen.add(c_unique)
            l_names.append(c_unique)
        n_body_start += 1
    else:
        l_names = [to_column_name(_col) for _col in l_cols]

    dict_data: dict[str, list[Any]] = {
        _name: [_value(_row, _col) for _row in range(n_body_start, n_row_max + 1)]
        for _name, _col in zip(l_names, l_cols, strict=True)
    }
    return pl_mod.DataFrame(dict_data, strict=False)
