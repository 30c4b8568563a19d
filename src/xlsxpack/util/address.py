"""A1-style address helpers built on ``xlsxwriter.utility``.

Rows and columns are zero-based everywhere in xlsxpack, as in xlsxwriter.
"""

import re

from xlsxwriter.utility import xl_cell_to_rowcol, xl_col_to_name, xl_rowcol_to_cell

from ..conf import N_COL_MAX, N_ROW_MAX

_RE_CELL = re.compile(r"^\$?[A-Za-z]{1,3}\$?[1-9][0-9]*$")
_RE_COLUMN = re.compile(r"^[A-Za-z]{1,3}$")
_RE_RANGE = re.compile(r"^(\$?[A-Za-z]{1,3}\$?[1-9][0-9]*):(\$?[A-Za-z]{1,3}\$?[1-9][0-9]*)$")


def _validate_rowcol(row: int, col: int) -> None:
    if row < 0 or row > N_ROW_MAX:
        raise ValueError(f"Arg `row` must be within [0, {N_ROW_MAX}], got {row}.")
    if col < 0 or col > N_COL_MAX:
        raise ValueError(f"Arg `col` must be within [0, {N_COL_MAX}], got {col}.")


def to_cell_ref(row: int, col: int) -> str:
    _validate_rowcol(row, col)
    return xl_rowcol_to_cell(row, col)


def parse_cell_ref(ref: str) -> tuple[int, int]:
    """Parse ``"B3"`` (``$`` anchors allowed) into ``(2, 1)``."""
    if not _RE_CELL.fullmatch(ref):
        raise ValueError(f"Invalid cell reference: {ref!r}.")
    row, col = xl_cell_to_rowcol(ref.upper())
    _validate_rowcol(row, col)
    return row, col


def to_column_name(col: int) -> str:
    _validate_rowcol(0, col)
    return xl_col_to_name(col)


def parse_column(value: int | str) -> int:
    """Resolve a zero-based column index or a column letter (``"C"``) to an index."""
    if isinstance(value, bool):
        raise TypeError("Arg `value` must be int or str, not bool.")
    if isinstance(value, int):
        _validate_rowcol(0, value)
        return value
    if not _RE_COLUMN.fullmatch(value):
        raise ValueError(f"Invalid column name: {value!r}.")
    _, col = xl_cell_to_rowcol(f"{value.upper()}1")
    _validate_rowcol(0, col)
    return col


def parse_range_ref(ref: str) -> tuple[tuple[int, int], tuple[int, int]]:
    """Parse ``"A1:C3"`` into normalized ``((r0, c0), (r1, c1))`` corners."""
    match = _RE_RANGE.fullmatch(ref)
    if match is None:
        raise ValueError(f"Invalid range reference: {ref!r}.")
    r0, c0 = parse_cell_ref(match.group(1))
    r1, c1 = parse_cell_ref(match.group(2))
    return (min(r0, r1), min(c0, c1)), (max(r0, r1), max(c0, c1))


def to_range_ref(start: tuple[int, int], end: tuple[int, int]) -> str:
    return f"{to_cell_ref(*start)}:{to_cell_ref(*end)}"
