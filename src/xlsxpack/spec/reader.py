from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from ..util.address import parse_column


class EnumGlobalEnforcing(StrEnum):
    DEFAULT = "default"
    ALL_NUMBERS_TO_DOUBLE = "all_numbers_to_double"
    ALL_NUMBERS_TO_DECIMAL = "all_numbers_to_decimal"
    ALL_NUMBERS_TO_INT = "all_numbers_to_int"
    EVERYTHING_TO_STRING = "everything_to_string"


class EnumColumnType(StrEnum):
    NUMERIC = "numeric"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATE = "date"
    TIME = "time"
    BOOL = "bool"
    STRING = "string"


@dataclass(frozen=True, slots=True)
class SpecReaderOptions:
    """
    Options of the type-coercion engine and of tolerant decoding.

    Precedence when a cell value is resolved: a non-default
    ``global_enforcing_type`` overrides everything, then the column rule in
    ``enforced_column_types``, then inference from the stored value and its
    style. Rows with a zero-based index below ``enforcing_start_row`` keep
    their literal type.

    Attributes:
        global_enforcing_type: Global conversion mode.
        enforced_column_types: Column (zero-based index or letter) to target type.
            Keys are normalized to indices.
        enforce_date_times_as_numbers: Return dates/times as OA numbers.
        enforce_empty_values_as_string: Return ``""`` instead of ``None``.
        enforce_strict_validation: Turn every tolerated degrade into an error.
        ignore_not_supported_password_algorithms: Accept protections hashed
            with an unsupported algorithm (the hash is dropped).
        enforce_phonetic_character_import: Append phonetic runs in parentheses.
        enforcing_start_row: First zero-based row subject to enforcement.
        date_time_format: ``strptime`` pattern for text to datetime, and
            ``strftime`` pattern for datetime to text.
        time_span_format: Same for time spans.
    """

    global_enforcing_type: EnumGlobalEnforcing = EnumGlobalEnforcing.DEFAULT
    enforced_column_types: Mapping[int | str, EnumColumnType] = field(
        default_factory=dict
    )
    enforce_date_times_as_numbers: bool = False
    enforce_empty_values_as_string: bool = False
    enforce_strict_validation: bool = False
    ignore_not_supported_password_algorithms: bool = False
    enforce_phonetic_character_import: bool = False
    enforcing_start_row: int = 0
    date_time_format: str = "%Y-%m-%d %H:%M:%S"
    time_span_format: str = "%H:%M:%S"

    def __post_init__(self) -> None:
        if self.enforcing_start_row < 0:
            raise ValueError(
                f"Arg `enforcing_start_row` must be >= 0, got {self.enforcing_start_row}."
            )
        dict_columns: dict[int | str, EnumColumnType] = {}
        for _key, _value in self.enforced_column_types.items():
            dict_columns[parse_column(_key)] = EnumColumnType(_value)
        object.__setattr__(
            self, "enforced_column_types", MappingProxyType(dict_columns)
        )

    def get_column_type(self, col: int) -> EnumColumnType | None:
        return self.enforced_column_types.get(col)
