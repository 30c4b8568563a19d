from dataclasses import dataclass, field

from ..errors import StyleError
from ..spec.style import SpecBorder, SpecFill, SpecFont, SpecNumberFormat, SpecStyle


@dataclass(slots=True)
class StyleReaderContainer:
    """
    Style tables rebuilt from ``xl/styles.xml``, in document order.

    Positional lookups (``get_border``, ``get_fill``, ``get_font``,
    ``get_style``) return ``None`` on a miss; the caller picks the default
    and reports the degrade. Number formats are keyed by ``numFmtId``.

    Attributes:
        number_formats (dict[int, SpecNumberFormat]): ``numFmtId`` to format.
        borders (list[SpecBorder]): ``<borders>`` entries.
        fills (list[SpecFill]): ``<fills>`` entries.
        fonts (list[SpecFont]): ``<fonts>`` entries.
        styles (list[SpecStyle]): Resolved ``<cellXfs>`` entries; a cell
            ``s`` attribute is an index into this list.
        mru_colors (list[str]): ``<colors><mruColors>`` ARGB values.
    """

    number_formats: dict[int, SpecNumberFormat] = field(default_factory=dict)
    borders: list[SpecBorder] = field(default_factory=list)
    fills: list[SpecFill] = field(default_factory=list)
    fonts: list[SpecFont] = field(default_factory=list)
    styles: list[SpecStyle] = field(default_factory=list)
    mru_colors: list[str] = field(default_factory=list)

    @classmethod
    def new(cls) -> "StyleReaderContainer":
        return cls()

    def add_number_format(self, number_format_id: int, number_format: SpecNumberFormat) -> None:
        self.number_formats[number_format_id] = number_format

    def add_border(self, border: SpecBorder) -> None:
        self.borders.append(border)

    def add_fill(self, fill: SpecFill) -> None:
        self.fills.append(fill)

    def add_font(self, font: SpecFont) -> None:
        self.fonts.append(font)

    def add_style(self, style: SpecStyle) -> None:
        self.styles.append(style)

    def add_mru_color(self, color: str) -> None:
        self.mru_colors.append(color)

    def get_number_format(self, number_format_id: int) -> SpecNumberFormat:
        """
        Return the format declared (or synthesized) under ``number_format_id``.

        Raises:
            StyleError: If no format is known under that id.
        """
        number_format = self.number_formats.get(number_format_id)
        if number_format is None:
            raise StyleError(f"Number format not found: numFmtId={number_format_id}.")
        return number_format

    def has_number_format(self, number_format_id: int) -> bool:
        return number_format_id in self.number_formats

    @staticmethod
    def _get_at(items: list, index: int):  # type: ignore[no-untyped-def]
        if 0 <= index < len(items):
            return items[index]
        return None

    def get_border(self, index: int) -> SpecBorder | None:
        return self._get_at(self.borders, index)

    def get_fill(self, index: int) -> SpecFill | None:
        return self._get_at(self.fills, index)

    def get_font(self, index: int) -> SpecFont | None:
        return self._get_at(self.fonts, index)

    def get_style(self, index: int) -> SpecStyle | None:
        return self._get_at(self.styles, index)

    def is_date_style(self, index: int) -> bool:
        style = self.get_style(index)
        return style is not None and style.number_format.is_date

    def is_time_style(self, index: int) -> bool:
        style = self.get_style(index)
        return style is not None and style.number_format.is_time

    @property
    def style_count(self) -> int:
        return len(self.styles)
