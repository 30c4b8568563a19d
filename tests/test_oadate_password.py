from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from xlsxpack.errors import PackageFormatError  # noqa: E402
from xlsxpack.util.oadate import (  # noqa: E402
    format_number,
    from_oadate,
    from_oatime,
    to_oadate,
    to_oatime,
)
from xlsxpack.util.password import LegacyPasswordHasher  # noqa: E402


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime(1900, 1, 1), 1.0),
        (datetime(1900, 2, 28), 59.0),
        (datetime(1900, 3, 1), 61.0),
        (datetime(2024, 1, 1), 45292.0),
        (datetime(2024, 1, 1, 12), 45292.5),
    ],
)
def test_to_oadate_applies_leap_year_correction(value: datetime, expected: float) -> None:
    assert to_oadate(value) == expected


def test_from_oadate_inverts_to_oadate() -> None:
    assert from_oadate(1.0) == datetime(1900, 1, 1)
    assert from_oadate(59.0) == datetime(1900, 2, 28)
    assert from_oadate(61.0) == datetime(1900, 3, 1)
    assert from_oadate(45292.5) == datetime(2024, 1, 1, 12)
    value = datetime(2023, 7, 14, 8, 30, 15)
    assert from_oadate(to_oadate(value)) == value


def test_to_oadate_rejects_out_of_range_dates() -> None:
    with pytest.raises(PackageFormatError):
        to_oadate(datetime(1899, 12, 31))
    assert to_oadate(datetime(1899, 12, 31), if_skip_check=True) == 0.0


def test_oatime_conversions() -> None:
    assert to_oatime(timedelta(hours=6)) == 0.25
    assert to_oatime(timedelta(days=1, hours=12)) == 1.5
    assert from_oatime(0.25) == timedelta(hours=6)
    assert from_oatime(1.5) == timedelta(days=1, hours=12)


def test_format_number_is_shortest_text() -> None:
    assert format_number(1.0) == "1"
    assert format_number(0.25) == "0.25"
    assert format_number(3) == "3"
    assert format_number(-2.5) == "-2.5"


@pytest.mark.parametrize(
    ("password", "expected"),
    [("x", "CEBA"), ("a", "CE88"), ("ab", "CF03"), ("", ""), (None, "")],
)
def test_legacy_password_hash(password: str | None, expected: str) -> None:
    assert LegacyPasswordHasher().hash(password) == expected
