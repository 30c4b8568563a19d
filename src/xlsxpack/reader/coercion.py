"""Type-coercion engine applied to every cell the reader decodes.

Resolution runs in two steps:

1. :meth:`CellCoercer.decode` turns the stored text into a Python primitive
   from the cell type attribute and the cell style (date and time formats).
2. :meth:`CellCoercer.enforce` applies ``SpecReaderOptions``: a non-default
   global mode first and exclusively, otherwise the column rule; then the
   date-as-number and empty-as-string flags.

Conversions never raise: a value that cannot be converted to the requested
type is kept as it is.
"""

import re
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

from ..model import EnumCellType
from ..spec.reader import EnumColumnType, EnumGlobalEnforcing, SpecReaderOptions
from ..spec.text import SpecRichText
from ..util.oadate import (
    FIRST_ALLOWED_DATE,
    LAST_ALLOWED_DATE,
    MAX_OADATE_VALUE,
    MIN_OADATE_VALUE,
    from_oadate,
    from_oatime,
    to_oadate,
    to_oatime,
)

_RE_INTEGER = re.compile(r"^[+-]?\d+$")
_RE_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

N_INT32_MIN = -(2**31)
N_INT32_MAX = 2**31 - 1


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


def resolve_cell_type(value: Any, default: EnumCellType) -> EnumCellType:
    if default is EnumCellType.FORMULA:
        return default
    if value is None:
        return EnumCellType.EMPTY
    if isinstance(value, bool):
        return EnumCellType.BOOL
    if _is_number(value):
        return EnumCellType.NUMBER
    if isinstance(value, datetime):
        return EnumCellType.DATE
    if isinstance(value, timedelta):
        return EnumCellType.TIME
    return EnumCellType.STRING


class CellCoercer:
    """
    Decode and enforce cell values according to ``SpecReaderOptions``.

    Examples:
        >>> coercer = CellCoercer(SpecReaderOptions())
        >>> coercer.decode("42", type_attr=None)
        (42, <EnumCellType.NUMBER: 'number'>)
        >>> coercer.decode("1", type_attr="b")
        (True, <EnumCellType.BOOL: 'bool'>)
    """

    def __init__(self, options: SpecReaderOptions) -> None:
        self.options = options

    ############################################################################
    # #region Parsing
    @staticmethod
    def parse_bool(raw: str) -> bool | None:
        if raw == "0":
            return False
        if raw == "1":
            return True
        c_lower = raw.strip().lower()
        if c_lower == "true":
            return True
        if c_lower == "false":
            return False
        return None

    @staticmethod
    def parse_number(raw: str) -> int | float | None:
        c_raw = raw.strip()
        if _RE_INTEGER.fullmatch(c_raw):
            return int(c_raw)
        if _RE_NUMBER.fullmatch(c_raw):
            return float(c_raw)
        return None

    def parse_date(self, raw: str) -> datetime | None:
        try:
            value = datetime.strptime(raw.strip(), self.options.date_time_format)
        except ValueError:
            return None
        if value < FIRST_ALLOWED_DATE or value > LAST_ALLOWED_DATE:
            return None
        return value

    def parse_time(self, raw: str) -> timedelta | None:
        try:
            value = datetime.strptime(raw.strip(), self.options.time_span_format)
        except ValueError:
            return None
        return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)

    # #endregion
    ############################################################################
    # #region Decode
    def _decode_temporal(
        self, raw: str, cell_type: EnumCellType
    ) -> tuple[Any, EnumCellType]:
        n_value = self.parse_number(raw)
        if n_value is None:
            return raw, EnumCellType.STRING
        d = float(n_value)
        if cell_type is EnumCellType.DATE:
            if d < MIN_OADATE_VALUE or d > MAX_OADATE_VALUE:
                return n_value, EnumCellType.NUMBER
            value = from_oadate(d)
            if d < 1.0:
                # Serial 0.x is a time on the 0th day, moved onto 1900-01-01.
                value += timedelta(days=1)
            return value, EnumCellType.DATE
        if d < 0.0 or d > MAX_OADATE_VALUE:
            return n_value, EnumCellType.NUMBER
        return from_oatime(d), EnumCellType.TIME

    def decode(
        self,
        raw: str,
        *,
        type_attr: str | None,
        if_formula: bool = False,
        if_date_style: bool = False,
        if_time_style: bool = False,
    ) -> tuple[Any, EnumCellType]:
        """
        Decode the stored text of a non-shared-string cell.

        Args:
            raw: Content of ``<v>``, or of ``<f>`` for formula cells.
            type_attr: The ``t`` attribute (``None`` when absent).
            if_formula: The cell carries an ``<f>`` element.
            if_date_style / if_time_style: The cell style uses a builtin date
                or time format.

        Returns:
            tuple[Any, EnumCellType]: Value and its imported type.
        """
        if type_attr == "str" or if_formula:
            return raw, EnumCellType.FORMULA
        if raw == "":
            return None, EnumCellType.EMPTY

        value: Any = None
        cell_type = EnumCellType.NUMBER
        if type_attr == "b":
            value = self.parse_bool(raw)
            if value is not None:
                return value, EnumCellType.BOOL
            value = self.parse_number(raw)
        elif type_attr == "d":
            try:
                return datetime.fromisoformat(raw), EnumCellType.DATE
            except ValueError:
                value = None
        elif type_attr in {None, "", "n"} and if_date_style:
            return self._decode_temporal(raw, EnumCellType.DATE)
        elif type_attr in {None, "", "n"} and if_time_style:
            return self._decode_temporal(raw, EnumCellType.TIME)
        elif type_attr in {None, "", "n"}:
            value = self.parse_number(raw)

        if value is None:
            return raw, EnumCellType.STRING
        return value, cell_type

    # #endregion
    ############################################################################
    # #region Conversions
    def to_decimal(self, value: Any) -> Any:
        if isinstance(value, bool):
            return Decimal(1) if value else Decimal(0)
        if isinstance(value, Decimal):
            return value
        if isinstance(value, int):
            return Decimal(value)
        if isinstance(value, float):
            return Decimal(repr(value))
        if isinstance(value, datetime):
            return Decimal(repr(to_oadate(value, if_skip_check=True)))
        if isinstance(value, timedelta):
            return Decimal(repr(to_oatime(value)))
        if isinstance(value, str):
            if self.parse_number(value) is not None:
                try:
                    return Decimal(value.strip())
                except InvalidOperation:
                    return value
            date_value = self.parse_date(value)
            if date_value is not None:
                return Decimal(repr(to_oadate(date_value)))
            time_value = self.parse_time(value)
            if time_value is not None:
                return Decimal(repr(to_oatime(time_value)))
        return value

    def to_double(self, value: Any) -> Any:
        converted = self.to_decimal(value)
        if isinstance(converted, Decimal):
            return float(converted)
        return converted

    def to_int(self, value: Any) -> int | None:
        """Integer conversion; ``None`` means "keep the value as is"."""
        if isinstance(value, bool):
            return 1 if value else 0
        if isinstance(value, datetime):
            return round(to_oadate(value, if_skip_check=True))
        if isinstance(value, timedelta):
            return round(to_oatime(value))
        if isinstance(value, float | Decimal):
            if N_INT32_MIN < value < N_INT32_MAX:
                return round(value)
            return None
        if isinstance(value, str):
            c_raw = value.strip()
            if _RE_INTEGER.fullmatch(c_raw) and N_INT32_MIN <= int(c_raw) <= N_INT32_MAX:
                return int(c_raw)
        return None

    def _date_from_number(self, value: Any) -> Any:
        d = self.to_double(value)
        if isinstance(d, float) and MIN_OADATE_VALUE <= d < MAX_OADATE_VALUE:
            date_value = from_oadate(d)
            if FIRST_ALLOWED_DATE <= date_value <= LAST_ALLOWED_DATE:
                return date_value
        return value

    def _time_from_number(self, value: Any) -> Any:
        d = self.to_double(value)
        if isinstance(d, float) and MIN_OADATE_VALUE <= d <= MAX_OADATE_VALUE:
            return from_oatime(d)
        return value

    def to_date(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, datetime):
            return value
        if isinstance(value, timedelta):
            # Time of day on the first valid date; whole days are dropped.
            return FIRST_ALLOWED_DATE + timedelta(seconds=value.seconds)
        if _is_number(value):
            return self._date_from_number(value)
        if isinstance(value, str):
            date_value = self.parse_date(value)
            if date_value is not None:
                return date_value
            return self._date_from_number(value)
        return value

    def to_time(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, timedelta):
            return value
        if isinstance(value, datetime) or _is_number(value):
            return self._time_from_number(value)
        if isinstance(value, str):
            time_value = self.parse_time(value)
            if time_value is not None:
                return time_value
            return self._time_from_number(value)
        return value

    def to_bool(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if _is_number(value):
            if value == 0:
                return False
            if value == 1:
                return True
            return value
        if isinstance(value, str):
            parsed = self.parse_bool(value)
            return value if parsed is None else parsed
        return value

    def _format_timedelta(self, value: timedelta) -> str:
        c_text = (FIRST_ALLOWED_DATE + timedelta(seconds=value.seconds)).strftime(
            self.options.time_span_format
        )
        if value.days:
            return f"{value.days}.{c_text}"
        return c_text

    def to_string(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.strftime(self.options.date_time_format)
        if isinstance(value, timedelta):
            return self._format_timedelta(value)
        if isinstance(value, SpecRichText):
            return value.plain
        if isinstance(value, float):
            return repr(value)
        return str(value)

    def to_numeric(self, value: Any, cell_type: EnumCellType) -> Any:
        if value is None:
            return None
        match cell_type:
            case EnumCellType.STRING:
                c_text = value.plain if isinstance(value, SpecRichText) else str(value)
                n_value = self.parse_number(c_text)
                if n_value is not None:
                    return n_value
                date_value = self.parse_date(c_text)
                if date_value is not None:
                    return to_oadate(date_value)
                time_value = self.parse_time(c_text)
                if time_value is not None:
                    return to_oatime(time_value)
                b_value = self.parse_bool(c_text)
                if b_value is not None:
                    return 1 if b_value else 0
            case EnumCellType.DATE:
                return to_oadate(value, if_skip_check=True)
            case EnumCellType.TIME:
                return to_oatime(value)
            case EnumCellType.BOOL:
                return 1 if value else 0
        return value

    # #endregion
    ############################################################################
    # #region Enforce
    def _apply_global(self, value: Any) -> Any:
        match self.options.global_enforcing_type:
            case EnumGlobalEnforcing.ALL_NUMBERS_TO_DOUBLE:
                return self.to_double(value)
            case EnumGlobalEnforcing.ALL_NUMBERS_TO_DECIMAL:
                return self.to_decimal(value)
            case EnumGlobalEnforcing.ALL_NUMBERS_TO_INT:
                n_value = self.to_int(value)
                return value if n_value is None else n_value
            case EnumGlobalEnforcing.EVERYTHING_TO_STRING:
                return self.to_string(value)
        return value

    def _apply_column(self, value: Any, cell_type: EnumCellType, col: int) -> Any:
        column_type = self.options.get_column_type(col)
        match column_type:
            case None:
                return value
            case EnumColumnType.NUMERIC:
                return self.to_numeric(value, cell_type)
            case EnumColumnType.DECIMAL:
                return self.to_decimal(value)
            case EnumColumnType.DOUBLE:
                return self.to_double(value)
            case EnumColumnType.DATE:
                return self.to_date(value)
            case EnumColumnType.TIME:
                return self.to_time(value)
            case EnumColumnType.BOOL:
                return self.to_bool(value)
            case _:
                return self.to_string(value)

    def _apply_flags(self, value: Any) -> Any:
        if self.options.enforce_date_times_as_numbers:
            if isinstance(value, datetime):
                value = to_oadate(value, if_skip_check=True)
            elif isinstance(value, timedelta):
                value = to_oatime(value)
        if self.options.enforce_empty_values_as_string and value is None:
            return ""
        return value

    def enforce(
        self, value: Any, cell_type: EnumCellType, *, row: int, col: int
    ) -> tuple[Any, EnumCellType]:
        """
        Apply the enforcement options to a decoded value at zero-based ``(row, col)``.

        Column rules never reach formula cells; the global mode and the flags
        do, and the cell stays a formula.
        """
        if row < self.options.enforcing_start_row:
            return value, cell_type
        if self.options.global_enforcing_type is not EnumGlobalEnforcing.DEFAULT:
            value = self._apply_global(value)
        elif cell_type is not EnumCellType.FORMULA:
            value = self._apply_column(value, cell_type, col)
        value = self._apply_flags(value)
        return value, resolve_cell_type(value, cell_type)

    # #endregion
