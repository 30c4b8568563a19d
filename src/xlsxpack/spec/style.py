# Style components: the tagged variant interned by the style cache and
# rebuilt by the style reader.

import re
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, ClassVar, TypeAlias

from ..conf import (
    C_DEFAULT_COLOR,
    C_DEFAULT_FONT_NAME,
    N_CUSTOM_NUMBER_FORMAT_START,
    N_DEFAULT_FONT_FAMILY,
    N_DEFAULT_FONT_SIZE,
    N_DEFAULT_FONT_THEME,
    N_DEFAULT_INDEXED_COLOR,
    N_FORMAT_DATE,
    N_FORMAT_DATETIME,
    N_FORMAT_TIME,
    N_TEXT_ROTATION_VERTICAL,
    NUM_FMT_BUILTIN,
    SET_DATE_FORMAT_IDS,
    SET_TIME_FORMAT_IDS,
)
from ..errors import StyleError

_RE_ARGB = re.compile(r"^[0-9A-Fa-f]{8}$")


def _validate_argb(value: str, *, name: str, allow_empty: bool) -> None:
    if value == "" and allow_empty:
        return
    if not _RE_ARGB.fullmatch(value):
        raise StyleError(
            f"Arg `{name}` must be an ARGB hex code of 8 characters, got {value!r}."
        )


################################################################################
# #region Enums
class EnumStyleComponent(StrEnum):
    BORDER = "border"
    FILL = "fill"
    FONT = "font"
    NUMBER_FORMAT = "number_format"
    CELL_XF = "cell_xf"
    STYLE = "style"


class EnumBorderStyle(StrEnum):
    NONE = "none"
    HAIR = "hair"
    DOTTED = "dotted"
    DASH_DOT_DOT = "dashDotDot"
    DASH_DOT = "dashDot"
    DASHED = "dashed"
    THIN = "thin"
    MEDIUM_DASH_DOT_DOT = "mediumDashDotDot"
    SLANT_DASH_DOT = "slantDashDot"
    MEDIUM_DASH_DOT = "mediumDashDot"
    MEDIUM_DASHED = "mediumDashed"
    MEDIUM = "medium"
    THICK = "thick"
    DOUBLE = "double"


class EnumPatternFill(StrEnum):
    NONE = "none"
    SOLID = "solid"
    DARK_GRAY = "darkGray"
    MEDIUM_GRAY = "mediumGray"
    LIGHT_GRAY = "lightGray"
    GRAY_0625 = "gray0625"
    GRAY_125 = "gray125"


class EnumUnderline(StrEnum):
    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"
    SINGLE_ACCOUNTING = "singleAccounting"
    DOUBLE_ACCOUNTING = "doubleAccounting"


class EnumVerticalTextAlign(StrEnum):
    NONE = "none"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"


class EnumFontScheme(StrEnum):
    NONE = "none"
    MAJOR = "major"
    MINOR = "minor"


class EnumHorizontalAlign(StrEnum):
    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    FILL = "fill"
    JUSTIFY = "justify"
    CENTER_CONTINUOUS = "centerContinuous"
    DISTRIBUTED = "distributed"
    GENERAL = "general"


class EnumVerticalAlign(StrEnum):
    NONE = "none"
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"
    JUSTIFY = "justify"
    DISTRIBUTED = "distributed"


class EnumTextBreak(StrEnum):
    NONE = "none"
    WRAP_TEXT = "wrapText"
    SHRINK_TO_FIT = "shrinkToFit"


# #endregion
################################################################################
# #region Components
@dataclass(frozen=True, slots=True)
class SpecBorder:
    kind: ClassVar[EnumStyleComponent] = EnumStyleComponent.BORDER

    left_style: EnumBorderStyle = EnumBorderStyle.NONE
    right_style: EnumBorderStyle = EnumBorderStyle.NONE
    top_style: EnumBorderStyle = EnumBorderStyle.NONE
    bottom_style: EnumBorderStyle = EnumBorderStyle.NONE
    diagonal_style: EnumBorderStyle = EnumBorderStyle.NONE
    # "" means automatic color
    left_color: str = ""
    right_color: str = ""
    top_color: str = ""
    bottom_color: str = ""
    diagonal_color: str = ""
    diagonal_up: bool = False
    diagonal_down: bool = False

    def __post_init__(self) -> None:
        for c_side in ("left", "right", "top", "bottom", "diagonal"):
            _validate_argb(
                getattr(self, f"{c_side}_color"),
                name=f"{c_side}_color",
                allow_empty=True,
            )

    @property
    def is_empty(self) -> bool:
        return self == SpecBorder()

    def with_(self, **kwargs: Any) -> "SpecBorder":
        return replace(self, **kwargs)


@dataclass(frozen=True, slots=True)
class SpecFill:
    kind: ClassVar[EnumStyleComponent] = EnumStyleComponent.FILL

    pattern: EnumPatternFill = EnumPatternFill.NONE
    fg_color: str = C_DEFAULT_COLOR
    bg_color: str = C_DEFAULT_COLOR
    indexed_color: int = N_DEFAULT_INDEXED_COLOR

    def __post_init__(self) -> None:
        _validate_argb(self.fg_color, name="fg_color", allow_empty=False)
        _validate_argb(self.bg_color, name="bg_color", allow_empty=True)

    @classmethod
    def solid(cls, color: str) -> "SpecFill":
        return cls(pattern=EnumPatternFill.SOLID, fg_color=color)

    def with_(self, **kwargs: Any) -> "SpecFill":
        return replace(self, **kwargs)


@dataclass(frozen=True, slots=True)
class SpecFont:
    kind: ClassVar[EnumStyleComponent] = EnumStyleComponent.FONT

    name: str = C_DEFAULT_FONT_NAME
    size: float = N_DEFAULT_FONT_SIZE
    bold: bool = False
    italic: bool = False
    strike: bool = False
    underline: EnumUnderline = EnumUnderline.NONE
    vertical_align: EnumVerticalTextAlign = EnumVerticalTextAlign.NONE
    # "" means the theme color `color_theme` applies
    color: str = ""
    color_theme: int = N_DEFAULT_FONT_THEME
    family: int = N_DEFAULT_FONT_FAMILY
    scheme: EnumFontScheme = EnumFontScheme.MINOR
    charset: int | None = None

    def __post_init__(self) -> None:
        _validate_argb(self.color, name="color", allow_empty=True)
        if not self.name:
            raise StyleError("Arg `name` of a font must be non-empty.")
        if self.size < 1 or self.size > 409:
            raise StyleError(f"Arg `size` must be within [1, 409], got {self.size}.")

    @property
    def is_default(self) -> bool:
        return self == SpecFont()

    def with_(self, **kwargs: Any) -> "SpecFont":
        return replace(self, **kwargs)


@dataclass(frozen=True, slots=True)
class SpecNumberFormat:
    """
    Builtin format (``number`` < 164) or custom format code.

    Custom formats carry no id: ids from 164 upwards are handed out by the
    style cache in first-seen order, so two formats with the same code are
    the same format.
    """

    kind: ClassVar[EnumStyleComponent] = EnumStyleComponent.NUMBER_FORMAT

    number: int = 0
    custom_code: str | None = None

    def __post_init__(self) -> None:
        if self.custom_code is not None:
            if not self.custom_code:
                raise StyleError("Arg `custom_code` must be non-empty when given.")
            return
        if self.number < 0 or self.number >= N_CUSTOM_NUMBER_FORMAT_START:
            raise StyleError(
                f"Arg `number` must be a builtin format id within "
                f"[0, {N_CUSTOM_NUMBER_FORMAT_START}), got {self.number}."
            )

    @classmethod
    def custom(cls, code: str) -> "SpecNumberFormat":
        return cls(custom_code=code)

    @property
    def is_custom(self) -> bool:
        return self.custom_code is not None

    @property
    def is_date(self) -> bool:
        return not self.is_custom and self.number in SET_DATE_FORMAT_IDS

    @property
    def is_time(self) -> bool:
        return not self.is_custom and self.number in SET_TIME_FORMAT_IDS

    @property
    def format_code(self) -> str:
        if self.custom_code is not None:
            return self.custom_code
        return NUM_FMT_BUILTIN.get(self.number, "General")


@dataclass(frozen=True, slots=True)
class SpecCellXf:
    kind: ClassVar[EnumStyleComponent] = EnumStyleComponent.CELL_XF

    horizontal_align: EnumHorizontalAlign = EnumHorizontalAlign.NONE
    vertical_align: EnumVerticalAlign = EnumVerticalAlign.NONE
    text_break: EnumTextBreak = EnumTextBreak.NONE
    text_rotation: int = 0
    vertical_text: bool = False
    indent: int = 0
    locked: bool = False
    hidden: bool = False
    force_apply_alignment: bool = False

    def __post_init__(self) -> None:
        if self.text_rotation < -90 or self.text_rotation > 90:
            raise StyleError(
                f"Arg `text_rotation` must be within [-90, 90], got {self.text_rotation}."
            )
        if self.indent < 0:
            raise StyleError(f"Arg `indent` must be >= 0, got {self.indent}.")

    def calculate_internal_rotation(self) -> int:
        if self.vertical_text:
            return N_TEXT_ROTATION_VERTICAL
        if self.text_rotation < 0:
            return 90 - self.text_rotation
        return self.text_rotation

    @classmethod
    def from_internal_rotation(cls, value: int) -> dict[str, Any]:
        # Inverse of `calculate_internal_rotation`, as constructor kwargs.
        if value == N_TEXT_ROTATION_VERTICAL:
            return {"vertical_text": True, "text_rotation": 0}
        if 90 < value <= 180:
            return {"text_rotation": 90 - value}
        if 0 <= value <= 90:
            return {"text_rotation": value}
        raise StyleError(f"Invalid internal text rotation: {value}.")

    def with_(self, **kwargs: Any) -> "SpecCellXf":
        return replace(self, **kwargs)


StyleComponent: TypeAlias = SpecBorder | SpecFill | SpecFont | SpecNumberFormat | SpecCellXf


@dataclass(frozen=True, slots=True)
class SpecStyle:
    kind: ClassVar[EnumStyleComponent] = EnumStyleComponent.STYLE

    border: SpecBorder = field(default_factory=SpecBorder)
    fill: SpecFill = field(default_factory=SpecFill)
    font: SpecFont = field(default_factory=SpecFont)
    number_format: SpecNumberFormat = field(default_factory=SpecNumberFormat)
    cell_xf: SpecCellXf = field(default_factory=SpecCellXf)

    def with_(self, **kwargs: Any) -> "SpecStyle":
        return replace(self, **kwargs)

    def iter_components(self) -> tuple[StyleComponent, ...]:
        return (self.border, self.fill, self.font, self.number_format, self.cell_xf)


# #endregion
################################################################################
# #region BasicStyles
DEFAULT_STYLE = SpecStyle()
FILL_GRAY_125 = SpecFill(pattern=EnumPatternFill.GRAY_125)
STYLE_DATE = SpecStyle(number_format=SpecNumberFormat(number=N_FORMAT_DATE))
STYLE_DATETIME = SpecStyle(number_format=SpecNumberFormat(number=N_FORMAT_DATETIME))
STYLE_TIME = SpecStyle(number_format=SpecNumberFormat(number=N_FORMAT_TIME))
STYLE_BOLD = SpecStyle(font=SpecFont(bold=True))

# #endregion
