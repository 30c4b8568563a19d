from .address import parse_cell_ref, parse_column, parse_range_ref, to_cell_ref
from .oadate import from_oadate, from_oatime, to_oadate, to_oatime
from .password import LEGACY_PASSWORD_HASHER, LegacyPasswordHasher, PasswordHasher

__all__ = [
    "LEGACY_PASSWORD_HASHER",
    "LegacyPasswordHasher",
    "PasswordHasher",
    "from_oadate",
    "from_oatime",
    "parse_cell_ref",
    "parse_column",
    "parse_range_ref",
    "to_cell_ref",
    "to_oadate",
    "to_oatime",
]
