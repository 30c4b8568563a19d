import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from ..conf import THEME_DEFAULT_COLORS, TUP_THEME_COLOR_SLOTS

_RE_RGB = re.compile(r"^[0-9A-Fa-f]{6}$")


@dataclass(frozen=True, slots=True)
class SpecMetadata:
    # docProps/core.xml
    title: str | None = None
    subject: str | None = None
    creator: str | None = None
    keywords: str | None = None
    description: str | None = None
    category: str | None = None
    content_status: str | None = None
    # docProps/app.xml
    application: str | None = "xlsxpack"
    application_version: str | None = None
    company: str | None = None
    manager: str | None = None
    hyperlink_base: str | None = None

    def with_(self, **kwargs: Any) -> "SpecMetadata":
        return replace(self, **kwargs)


@dataclass(frozen=True, slots=True)
class SpecTheme:
    """Named theme with its 12-slot color scheme (RGB hex, no alpha)."""

    name: str = "Office Theme"
    color_scheme_name: str = "Office"
    colors: Mapping[str, str] = field(
        default_factory=lambda: dict(THEME_DEFAULT_COLORS)
    )

    def __post_init__(self) -> None:
        dict_colors = dict(THEME_DEFAULT_COLORS)
        for _slot, _color in self.colors.items():
            if _slot not in THEME_DEFAULT_COLORS:
                raise ValueError(
                    f"Unknown theme color slot: {_slot!r}. "
                    f"Available slots: {list(TUP_THEME_COLOR_SLOTS)}."
                )
            if not _RE_RGB.fullmatch(_color):
                raise ValueError(
                    f"Theme color {_slot!r} must be an RGB hex code of 6 characters, "
                    f"got {_color!r}."
                )
            dict_colors[_slot] = _color.upper()
        object.__setattr__(self, "colors", MappingProxyType(dict_colors))


@dataclass(frozen=True, slots=True)
class SpecProtection:
    """
    Workbook or worksheet protection.

    ``password_hash`` is the legacy 16-bit hash as hex (see
    :mod:`xlsxpack.util.password`). ``if_unsupported_algorithm`` is set by the
    reader when the source used a hash it cannot represent and the reader was
    told to ignore that; no hash is kept then.
    """

    password_hash: str | None = None
    lock_structure: bool = True
    lock_windows: bool = False
    if_unsupported_algorithm: bool = False

    @property
    def is_password_set(self) -> bool:
        return self.password_hash is not None or self.if_unsupported_algorithm
