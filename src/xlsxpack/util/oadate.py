"""OLE automation (OA) date encoding used by spreadsheet cells.

Day 1 is 1900-01-01. Serial 60 is the nonexistent 1900-02-29 kept for
compatibility, so dates before 1900-03-01 are shifted by one day.
"""

import math
from datetime import datetime, timedelta

from ..errors import PackageFormatError

ROOT_DATE = datetime(1899, 12, 30)
FIRST_ALLOWED_DATE = datetime(1900, 1, 1)
FIRST_VALID_DATE = datetime(1900, 3, 1)
LAST_ALLOWED_DATE = datetime(9999, 12, 31, 23, 59, 59)
MIN_OADATE_VALUE = 0.0
MAX_OADATE_VALUE = 2958465.999988426


def to_oadate(value: datetime, *, if_skip_check: bool = False) -> float:
    """
    Convert a datetime to its OA serial number (sub-second part dropped).

    Raises:
        PackageFormatError: If ``value`` is outside 1900-01-01 .. 9999-12-31
            and ``if_skip_check`` is false.
    """
    if value.tzinfo is not None:
        # Wall-clock time is what the cell shows.
        value = value.replace(tzinfo=None)
    if not if_skip_check and (value < FIRST_ALLOWED_DATE or value > LAST_ALLOWED_DATE):
        raise PackageFormatError(
            f"The date {value.isoformat()} is not in a valid range. "
            f"Dates before 1900-01-01 or after 9999-12-31 cannot be encoded."
        )
    if value < FIRST_VALID_DATE:
        value = value - timedelta(days=1)
    n_days = (value.replace(hour=0, minute=0, second=0, microsecond=0) - ROOT_DATE).days
    n_seconds = value.hour * 3600 + value.minute * 60 + value.second
    return n_days + n_seconds / 86400


def from_oadate(value: float) -> datetime:
    if value < 60:
        value += 1
    return ROOT_DATE + timedelta(seconds=round(value * 86400))


def to_oatime(value: timedelta) -> float:
    return value.days + value.seconds / 86400


def from_oatime(value: float) -> timedelta:
    """Whole days plus hours/minutes/seconds of the fractional part."""
    n_days = math.floor(value)
    n_seconds = round((value - n_days) * 86400)
    if n_seconds >= 86400:
        n_days, n_seconds = n_days + 1, 0
    return timedelta(days=n_days, seconds=n_seconds)


def format_number(value: float | int) -> str:
    """Shortest round-trip text of a number as stored in ``<v>``."""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    return str(value)
