# Thin document model: plain containers filled by callers or by the reader.

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import StrEnum
from typing import Any

from .conf import N_LEN_SHEET_NAME_MAX, SET_SHEET_NAME_FORBIDDEN
from .spec.document import SpecMetadata, SpecProtection, SpecTheme
from .spec.style import SpecStyle
from .spec.text import SpecRichText
from .util.address import (
    parse_cell_ref,
    parse_column,
    parse_range_ref,
    to_cell_ref,
    to_range_ref,
)
from .util.password import LEGACY_PASSWORD_HASHER, PasswordHasher


class EnumCellType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    BOOL = "bool"
    FORMULA = "formula"
    EMPTY = "empty"


def infer_cell_type(value: Any) -> EnumCellType:
    if value is None:
        return EnumCellType.EMPTY
    if isinstance(value, bool):
        return EnumCellType.BOOL
    if isinstance(value, int | float | Decimal):
        return EnumCellType.NUMBER
    if isinstance(value, datetime | date):
        return EnumCellType.DATE
    if isinstance(value, timedelta | time):
        return EnumCellType.TIME
    if isinstance(value, str | SpecRichText):
        return EnumCellType.STRING
    raise TypeError(f"Unsupported cell value type: {type(value).__name__}.")


@dataclass(slots=True)
class Cell:
    value: Any
    style: SpecStyle | None = None
    cell_type: EnumCellType | None = None

    def __post_init__(self) -> None:
        if self.cell_type is None:
            self.cell_type = infer_cell_type(self.value)
        elif self.cell_type is EnumCellType.FORMULA and not isinstance(self.value, str):
            raise TypeError("A formula cell holds its formula text as `str`.")


def sanitize_sheet_name(name: str, *, replace_to: str = "_") -> str:
    for ch in SET_SHEET_NAME_FORBIDDEN:
        name = name.replace(ch, replace_to)
    name = name.strip().strip("'") or "Sheet"
    return name[:N_LEN_SHEET_NAME_MAX]


class Worksheet:
    """
    One worksheet: sparse cells keyed by zero-based ``(row, col)``.

    Examples:
        >>> ws = Worksheet("Data")
        >>> ws.set_value("B2", 42).cell_type
        <EnumCellType.NUMBER: 'number'>
        >>> ws.get_cell(1, 1).value
        42
    """

    def __init__(self, name: str) -> None:
        if not name or len(name) > N_LEN_SHEET_NAME_MAX:
            raise ValueError(
                f"Arg `name` must have 1 to {N_LEN_SHEET_NAME_MAX} characters, got {name!r}."
            )
        if set(name) & SET_SHEET_NAME_FORBIDDEN:
            raise ValueError(f"Arg `name` contains a forbidden character: {name!r}.")
        self.name = name
        self.cells: dict[tuple[int, int], Cell] = {}
        self.column_widths: dict[int, float] = {}
        self.merged_ranges: list[tuple[tuple[int, int], tuple[int, int]]] = []
        self.hidden = False
        self.protection: SpecProtection | None = None

    def __repr__(self) -> str:
        return f"Worksheet(name={self.name!r}, cells={len(self.cells)})"

    def set_cell(
        self, row: int, col: int, value: Any, *, style: SpecStyle | None = None
    ) -> Cell:
        to_cell_ref(row, col)
        cell = Cell(value=value, style=style)
        self.cells[(row, col)] = cell
        return cell

    def set_value(self, ref: str, value: Any, *, style: SpecStyle | None = None) -> Cell:
        row, col = parse_cell_ref(ref)
        return self.set_cell(row, col, value, style=style)

    def set_formula(
        self, row: int, col: int, formula: str, *, style: SpecStyle | None = None
    ) -> Cell:
        # Stored as text only, never evaluated.
        to_cell_ref(row, col)
        cell = Cell(
            value=formula.removeprefix("="),
            style=style,
            cell_type=EnumCellType.FORMULA,
        )
        self.cells[(row, col)] = cell
        return cell

    def get_cell(self, row: int, col: int) -> Cell | None:
        return self.cells.get((row, col))

    def get_value(self, ref: str) -> Any:
        cell = self.cells.get(parse_cell_ref(ref))
        return None if cell is None else cell.value

    def iter_rows(self) -> Iterator[tuple[int, list[tuple[int, Cell]]]]:
        """Yield ``(row, [(col, cell), ...])`` in ascending row and column order."""
        dict_rows: dict[int, list[tuple[int, Cell]]] = {}
        for (_row, _col), _cell in self.cells.items():
            dict_rows.setdefault(_row, []).append((_col, _cell))
        for _row in sorted(dict_rows):
            yield _row, sorted(dict_rows[_row], key=lambda x: x[0])

    def set_column_width(self, col: int | str, width: float) -> None:
        if width < 0 or width > 255:
            raise ValueError(f"Arg `width` must be within [0, 255], got {width}.")
        self.column_widths[parse_column(col)] = width

    def merge(self, ref: str) -> None:
        start, end = parse_range_ref(ref)
        for _start, _end in self.merged_ranges:
            if_disjoint = (
                end[0] < _start[0]
                or start[0] > _end[0]
                or end[1] < _start[1]
                or start[1] > _end[1]
            )
            if not if_disjoint:
                raise ValueError(
                    f"Range {ref!r} overlaps merged range {to_range_ref(_start, _end)!r}."
                )
        self.merged_ranges.append((start, end))

    def set_password(
        self, password: str | None, *, hasher: PasswordHasher = LEGACY_PASSWORD_HASHER
    ) -> None:
        if not password:
            self.protection = None
            return
        self.protection = SpecProtection(password_hash=hasher.hash(password))

    @property
    def dimension(self) -> str | None:
        if not self.cells:
            return None
        l_rows = [r for r, _ in self.cells]
        l_cols = [c for _, c in self.cells]
        return to_range_ref((min(l_rows), min(l_cols)), (max(l_rows), max(l_cols)))


@dataclass(slots=True)
class Workbook:
    worksheets: list[Worksheet] = field(default_factory=list)
    metadata: SpecMetadata | None = field(default_factory=SpecMetadata)
    theme: SpecTheme | None = field(default_factory=SpecTheme)
    protection: SpecProtection | None = None
    mru_colors: list[str] = field(default_factory=list)
    selected_index: int = 0

    def add_worksheet(self, name: str | None = None) -> Worksheet:
        """
        Append a worksheet.

        ``None`` picks ``Sheet{n}``; a given name is sanitized and made
        unique with a numeric suffix.
        """
        if name is None:
            c_base = f"Sheet{len(self.worksheets) + 1}"
        else:
            c_base = sanitize_sheet_name(name)
        set_taken = {ws.name.casefold() for ws in self.worksheets}
        c_name, n_suffix = c_base, 1
        while c_name.casefold() in set_taken:
            c_tail = f"_{n_suffix}"
            c_name = f"{c_base[: N_LEN_SHEET_NAME_MAX - len(c_tail)]}{c_tail}"
            n_suffix += 1
        worksheet = Worksheet(c_name)
        self.worksheets.append(worksheet)
        return worksheet

    def get_worksheet(self, name: str) -> Worksheet:
        for ws in self.worksheets:
            if ws.name == name:
                return ws
        raise KeyError(f"Worksheet not found: {name!r}")

    def set_password(
        self,
        password: str | None,
        *,
        lock_structure: bool = True,
        lock_windows: bool = False,
        hasher: PasswordHasher = LEGACY_PASSWORD_HASHER,
    ) -> None:
        self.protection = SpecProtection(
            password_hash=hasher.hash(password) or None,
            lock_structure=lock_structure,
            lock_windows=lock_windows,
        )
