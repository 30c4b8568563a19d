"""Default ``writer.part`` plugins.

Each writer renders one part of the package into ``WriteContext.contents``.
They are registered under the ids of :class:`EnumWriterPartId` by
:func:`xlsxpack.plugins.build_default_plugin_registry`; registering another
factory under the same id with a higher priority replaces one of them.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any

from ..conf import (
    C_DEFAULT_COLOR,
    NS_APP_PROPS,
    NS_CORE_PROPS,
    NS_DC,
    NS_DCMITYPE,
    NS_DCTERMS,
    NS_DRAWING,
    NS_MAIN,
    NS_MC,
    NS_REL,
    NS_VT,
    NS_X14AC,
    NS_XSI,
    PATH_APP_PROPS,
    PATH_CORE_PROPS,
    PATH_SHARED_STRINGS,
    PATH_STYLES,
    PATH_THEME,
    PATH_WORKBOOK,
    TUP_THEME_COLOR_SLOTS,
    XML_DECLARATION,
)
from ..errors import PackageFormatError
from ..model import Cell, EnumCellType, Worksheet
from ..sanitize import escape_attribute, escape_text
from ..spec.plugin import SpecPluginDescriptor
from ..spec.style import (
    STYLE_DATE,
    STYLE_DATETIME,
    STYLE_TIME,
    EnumBorderStyle,
    EnumFontScheme,
    EnumHorizontalAlign,
    EnumPatternFill,
    EnumStyleComponent,
    EnumTextBreak,
    EnumUnderline,
    EnumVerticalAlign,
    EnumVerticalTextAlign,
    SpecBorder,
    SpecFill,
    SpecFont,
    SpecStyle,
)
from ..spec.text import FormattableText, SpecRichText
from ..util.address import to_cell_ref, to_range_ref
from ..util.oadate import format_number, to_oadate, to_oatime
from .context import WriteContext

_SET_GRAY_PATTERNS = frozenset(
    {
        EnumPatternFill.DARK_GRAY,
        EnumPatternFill.MEDIUM_GRAY,
        EnumPatternFill.LIGHT_GRAY,
        EnumPatternFill.GRAY_0625,
    }
)
_SET_INDENT_ALIGNS = frozenset(
    {EnumHorizontalAlign.LEFT, EnumHorizontalAlign.RIGHT, EnumHorizontalAlign.DISTRIBUTED}
)


################################################################################
# #region Helpers
def create_text_element(text: str) -> str:
    """``<t>`` element; leading or trailing whitespace switches on ``xml:space``."""
    if not text:
        return "<t></t>"
    c_text = escape_text(text.replace("\r\n", "\n").replace("\r", "\n"))
    if text[0].isspace() or text[-1].isspace():
        return f'<t xml:space="preserve">{c_text}</t>'
    return f"<t>{c_text}</t>"


def create_font_elements(font: SpecFont, *, name_tag: str = "name") -> str:
    """Child elements of ``<font>`` (or of ``<rPr>`` with ``name_tag="rFont"``)."""
    l_xml: list[str] = []
    if font.bold:
        l_xml.append("<b/>")
    if font.italic:
        l_xml.append("<i/>")
    if font.strike:
        l_xml.append("<strike/>")
    if font.underline is EnumUnderline.SINGLE:
        l_xml.append("<u/>")
    elif font.underline is not EnumUnderline.NONE:
        l_xml.append(f'<u val="{font.underline.value}"/>')
    if font.vertical_align is not EnumVerticalTextAlign.NONE:
        l_xml.append(f'<vertAlign val="{font.vertical_align.value}"/>')
    l_xml.append(f'<sz val="{format_number(font.size)}"/>')
    if font.color:
        l_xml.append(f'<color rgb="{font.color}"/>')
    else:
        l_xml.append(f'<color theme="{font.color_theme}"/>')
    l_xml.append(f'<{name_tag} val="{escape_attribute(font.name)}"/>')
    l_xml.append(f'<family val="{font.family}"/>')
    if font.scheme is not EnumFontScheme.NONE:
        l_xml.append(f'<scheme val="{font.scheme.value}"/>')
    if font.charset is not None:
        l_xml.append(f'<charset val="{font.charset}"/>')
    return "".join(l_xml)


def create_shared_text_item(text: FormattableText) -> str:
    if isinstance(text, SpecRichText):
        l_runs: list[str] = []
        for _run in text.runs:
            if _run.font is None:
                l_runs.append(f"<r>{create_text_element(_run.text)}</r>")
            else:
                l_runs.append(
                    f"<r><rPr>{create_font_elements(_run.font, name_tag='rFont')}</rPr>"
                    f"{create_text_element(_run.text)}</r>"
                )
        return f"<si>{''.join(l_runs)}</si>"
    return f"<si>{create_text_element(text)}</si>"


def _create_tag(value: str | None, name: str) -> str:
    if not value:
        return ""
    return f"<{name}>{escape_text(value)}</{name}>"


def _to_number_text(value: int | float | Decimal) -> str:
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, float) and not math.isfinite(value):
        raise PackageFormatError(f"Non-finite number cannot be stored in a cell: {value}.")
    return format_number(value)


def _to_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _to_timedelta(value: time | timedelta) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(
        hours=value.hour,
        minutes=value.minute,
        seconds=value.second,
        microseconds=value.microsecond,
    )


# #endregion
################################################################################
# #region Base
class BasePartWriter:
    """
    Common ``init``/``execute`` of the default part writers.

    Subclasses set ``path`` (or override :meth:`get_path`) and implement
    :meth:`create_document`, which returns the XML without declaration.
    """

    path: str = ""

    def __init__(self) -> None:
        self.context: WriteContext | None = None
        self.descriptor: SpecPluginDescriptor | None = None
        self.index: int | None = None

    def init(
        self,
        context: WriteContext,
        *,
        descriptor: SpecPluginDescriptor,
        index: int | None = None,
    ) -> None:
        self.context = context
        self.descriptor = descriptor
        self.index = index

    @property
    def ctx(self) -> WriteContext:
        if self.context is None:
            raise RuntimeError(f"{type(self).__name__} used before `init`.")
        return self.context

    def get_path(self) -> str:
        return self.path

    def create_document(self) -> str:
        raise NotImplementedError

    def execute(self) -> None:
        self.ctx.write_part(self.get_path(), XML_DECLARATION + self.create_document())


# #endregion
################################################################################
# #region Workbook
class WorkbookWriter(BasePartWriter):
    path = PATH_WORKBOOK

    def create_document(self) -> str:
        workbook = self.ctx.workbook
        l_worksheets = self.ctx.worksheets
        if not 0 <= workbook.selected_index < len(l_worksheets):
            raise ValueError(
                f"Arg `selected_index` must be within [0, {len(l_worksheets) - 1}], "
                f"got {workbook.selected_index}."
            )
        l_xml = [f'<workbook xmlns="{NS_MAIN}" xmlns:r="{NS_REL}">']

        protection = workbook.protection
        if protection is not None:
            c_attrs = ""
            if protection.lock_windows:
                c_attrs += ' lockWindows="1"'
            if protection.lock_structure:
                c_attrs += ' lockStructure="1"'
            if protection.password_hash:
                c_attrs += f' workbookPassword="{escape_attribute(protection.password_hash)}"'
            l_xml.append(f"<workbookProtection{c_attrs}/>")

        if workbook.selected_index > 0:
            l_xml.append(
                f'<bookViews><workbookView activeTab="{workbook.selected_index}"/></bookViews>'
            )
        else:
            l_xml.append("<bookViews><workbookView/></bookViews>")

        l_xml.append("<sheets>")
        for _i, _ws in enumerate(l_worksheets):
            related = self.ctx.get_sheet_part(_i)
            c_state = ' state="hidden"' if _ws.hidden else ""
            l_xml.append(
                f'<sheet name="{escape_attribute(_ws.name)}" sheetId="{_i + 1}" '
                f'r:id="{related.rel_id}"{c_state}/>'
            )
        l_xml.append("</sheets></workbook>")
        return "".join(l_xml)


# #endregion
################################################################################
# #region Worksheet
class WorksheetWriter(BasePartWriter):
    """Renders the sheet at ``index``; every text and style goes through the caches."""

    def get_index(self) -> int:
        if self.index is None:
            raise ValueError("WorksheetWriter requires a sheet `index`.")
        return self.index

    def get_path(self) -> str:
        return self.ctx.get_sheet_part(self.get_index()).part.path

    def execute(self) -> None:
        super().execute()
        self.ctx.report.cnt_sheets += 1

    def _create_cell(self, row: int, col: int, cell: Cell) -> str:
        c_ref = to_cell_ref(row, col)
        value: Any = cell.value
        style = cell.style
        c_type = ""
        c_inner = ""

        match cell.cell_type:
            case EnumCellType.STRING:
                c_type = ' t="s"'
                c_inner = f"<v>{self.ctx.add_text(value)}</v>"
            case EnumCellType.NUMBER:
                c_inner = f"<v>{_to_number_text(value)}</v>"
            case EnumCellType.BOOL:
                c_type = ' t="b"'
                c_inner = f"<v>{1 if value else 0}</v>"
            case EnumCellType.FORMULA:
                c_type = ' t="str"'
                c_inner = f"<f>{escape_text(value)}</f>"
            case EnumCellType.DATE:
                dt = _to_datetime(value)
                if style is None:
                    if_has_time = (dt.hour, dt.minute, dt.second) != (0, 0, 0)
                    style = STYLE_DATETIME if if_has_time else STYLE_DATE
                c_inner = f"<v>{format_number(to_oadate(dt))}</v>"
            case EnumCellType.TIME:
                if style is None:
                    style = STYLE_TIME
                c_inner = f"<v>{format_number(to_oatime(_to_timedelta(value)))}</v>"
            case _:
                pass

        n_style = self.ctx.intern_style(style)
        c_style = f' s="{n_style}"' if n_style else ""
        if not c_inner:
            return f'<c r="{c_ref}"{c_style}/>'
        return f'<c r="{c_ref}"{c_style}{c_type}>{c_inner}</c>'

    def _create_cols(self, worksheet: Worksheet) -> str:
        if not worksheet.column_widths:
            return ""
        l_cols = [
            f'<col min="{_col + 1}" max="{_col + 1}" '
            f'width="{format_number(float(_width))}" customWidth="1"/>'
            for _col, _width in sorted(worksheet.column_widths.items())
        ]
        return f"<cols>{''.join(l_cols)}</cols>"

    def create_document(self) -> str:
        worksheet = self.ctx.worksheets[self.get_index()]
        l_xml = [
            f'<worksheet xmlns="{NS_MAIN}" xmlns:r="{NS_REL}" '
            f'xmlns:mc="{NS_MC}" mc:Ignorable="x14ac" xmlns:x14ac="{NS_X14AC}">'
        ]
        c_dimension = worksheet.dimension
        if c_dimension is not None:
            l_xml.append(f'<dimension ref="{c_dimension}"/>')
        l_xml.append(self._create_cols(worksheet))

        l_xml.append("<sheetData>")
        for _row, _cells in worksheet.iter_rows():
            l_xml.append(f'<row r="{_row + 1}">')
            l_xml.extend(self._create_cell(_row, _col, _cell) for _col, _cell in _cells)
            l_xml.append("</row>")
        l_xml.append("</sheetData>")

        protection = worksheet.protection
        if protection is not None:
            c_password = (
                f' password="{escape_attribute(protection.password_hash)}"'
                if protection.password_hash
                else ""
            )
            l_xml.append(f'<sheetProtection{c_password} sheet="1"/>')

        if worksheet.merged_ranges:
            l_xml.append(f'<mergeCells count="{len(worksheet.merged_ranges)}">')
            l_xml.extend(
                f'<mergeCell ref="{to_range_ref(_start, _end)}"/>'
                for _start, _end in worksheet.merged_ranges
            )
            l_xml.append("</mergeCells>")
        l_xml.append("</worksheet>")
        return "".join(l_xml)


# #endregion
################################################################################
# #region Styles
class StyleWriter(BasePartWriter):
    """Renders ``xl/styles.xml`` from the style cache; runs after all worksheets."""

    path = PATH_STYLES

    @staticmethod
    def _create_border_side(tag: str, style: EnumBorderStyle, color: str) -> str:
        if style is EnumBorderStyle.NONE:
            return f"<{tag}/>"
        c_color = f'<color rgb="{color}"/>' if color else '<color auto="1"/>'
        return f'<{tag} style="{style.value}">{c_color}</{tag}>'

    def _create_border(self, border: SpecBorder) -> str:
        c_attrs = ""
        if border.diagonal_down:
            c_attrs += ' diagonalDown="1"'
        if border.diagonal_up:
            c_attrs += ' diagonalUp="1"'
        c_sides = "".join(
            self._create_border_side(
                _side, getattr(border, f"{_side}_style"), getattr(border, f"{_side}_color")
            )
            for _side in ("left", "right", "top", "bottom", "diagonal")
        )
        return f"<border{c_attrs}>{c_sides}</border>"

    @staticmethod
    def _create_fill(fill: SpecFill) -> str:
        c_pattern = f'<patternFill patternType="{fill.pattern.value}"'
        if fill.pattern is EnumPatternFill.SOLID:
            return (
                f'<fill>{c_pattern}><fgColor rgb="{fill.fg_color}"/>'
                f'<bgColor indexed="{fill.indexed_color}"/></patternFill></fill>'
            )
        if fill.pattern in _SET_GRAY_PATTERNS:
            c_bg = f'<bgColor rgb="{fill.bg_color}"/>' if fill.bg_color else ""
            return (
                f'<fill>{c_pattern}><fgColor rgb="{fill.fg_color}"/>{c_bg}'
                f"</patternFill></fill>"
            )
        return f"<fill>{c_pattern}/></fill>"

    def _create_xf(self, style: SpecStyle) -> str:
        cache = self.ctx.style_cache
        cell_xf = style.cell_xf
        n_rotation = cell_xf.calculate_internal_rotation()

        c_alignment = ""
        if (
            cell_xf.horizontal_align is not EnumHorizontalAlign.NONE
            or cell_xf.vertical_align is not EnumVerticalAlign.NONE
            or cell_xf.text_break is not EnumTextBreak.NONE
            or n_rotation != 0
        ):
            c_attrs = ""
            if cell_xf.horizontal_align is not EnumHorizontalAlign.NONE:
                c_attrs += f' horizontal="{cell_xf.horizontal_align.value}"'
            if cell_xf.vertical_align is not EnumVerticalAlign.NONE:
                c_attrs += f' vertical="{cell_xf.vertical_align.value}"'
            if cell_xf.indent > 0 and cell_xf.horizontal_align in _SET_INDENT_ALIGNS:
                c_attrs += f' indent="{cell_xf.indent}"'
            if cell_xf.text_break is not EnumTextBreak.NONE:
                c_attrs += f' {cell_xf.text_break.value}="1"'
            if n_rotation != 0:
                c_attrs += f' textRotation="{n_rotation}"'
            c_alignment = f"<alignment{c_attrs}/>"

        c_protection = ""
        if cell_xf.locked or cell_xf.hidden:
            c_protection = (
                f'<protection locked="{int(cell_xf.locked)}" hidden="{int(cell_xf.hidden)}"/>'
            )

        number_format = style.number_format
        l_attrs = [
            f'numFmtId="{cache.get_number_format_id(number_format)}"',
            f'borderId="{cache.get_index(style.border)}"',
            f'fillId="{cache.get_index(style.fill)}"',
            f'fontId="{cache.get_index(style.font)}"',
        ]
        if not style.font.is_default:
            l_attrs.append('applyFont="1"')
        if style.fill.pattern is not EnumPatternFill.NONE:
            l_attrs.append('applyFill="1"')
        if not style.border.is_empty:
            l_attrs.append('applyBorder="1"')
        if c_alignment or cell_xf.force_apply_alignment:
            l_attrs.append('applyAlignment="1"')
        if c_protection:
            l_attrs.append('applyProtection="1"')
        if number_format.is_custom or number_format.number != 0:
            l_attrs.append('applyNumberFormat="1"')

        c_head = f"<xf {' '.join(l_attrs)}"
        if c_alignment or c_protection:
            return f"{c_head}>{c_alignment}{c_protection}</xf>"
        return f"{c_head}/>"

    def _create_mru_colors(self) -> str:
        l_colors: list[str] = []
        for _color in self.ctx.workbook.mru_colors:
            if _color == C_DEFAULT_COLOR or _color in l_colors:
                continue
            l_colors.append(_color)
        if not l_colors:
            return ""
        c_items = "".join(f'<color rgb="{escape_attribute(c)}"/>' for c in l_colors)
        return f"<colors><mruColors>{c_items}</mruColors></colors>"

    def create_document(self) -> str:
        cache = self.ctx.style_cache
        l_xml = [
            f'<styleSheet xmlns="{NS_MAIN}" xmlns:mc="{NS_MC}" '
            f'mc:Ignorable="x14ac" xmlns:x14ac="{NS_X14AC}">'
        ]

        l_formats = list(cache.iter_custom_number_formats())
        if l_formats:
            l_xml.append(f'<numFmts count="{len(l_formats)}">')
            l_xml.extend(
                f'<numFmt numFmtId="{_id}" formatCode="{escape_attribute(_fmt.format_code)}"/>'
                for _id, _fmt in l_formats
            )
            l_xml.append("</numFmts>")

        l_fonts = cache.list_components(EnumStyleComponent.FONT)
        l_xml.append(f'<fonts x14ac:knownFonts="1" count="{len(l_fonts)}">')
        l_xml.extend(f"<font>{create_font_elements(f)}</font>" for f in l_fonts)  # type: ignore[arg-type]
        l_xml.append("</fonts>")

        l_fills = cache.list_components(EnumStyleComponent.FILL)
        l_xml.append(f'<fills count="{len(l_fills)}">')
        l_xml.extend(self._create_fill(f) for f in l_fills)  # type: ignore[arg-type]
        l_xml.append("</fills>")

        l_borders = cache.list_components(EnumStyleComponent.BORDER)
        l_xml.append(f'<borders count="{len(l_borders)}">')
        l_xml.extend(self._create_border(b) for b in l_borders)  # type: ignore[arg-type]
        l_xml.append("</borders>")

        l_styles = cache.list_styles()
        l_xml.append(f'<cellXfs count="{len(l_styles)}">')
        l_xml.extend(self._create_xf(s) for s in l_styles)
        l_xml.append("</cellXfs>")

        l_xml.append(self._create_mru_colors())
        l_xml.append("</styleSheet>")
        self.ctx.report.cnt_styles = len(l_styles)
        return "".join(l_xml)


# #endregion
################################################################################
# #region SharedStrings
class SharedStringWriter(BasePartWriter):
    path = PATH_SHARED_STRINGS

    def create_document(self) -> str:
        table = self.ctx.shared_texts
        self.ctx.report.cnt_shared_texts = table.size
        self.ctx.report.cnt_text_references = table.n_references
        c_items = "".join(create_shared_text_item(t) for t in table.list_entries())
        return (
            f'<sst xmlns="{NS_MAIN}" count="{table.n_references}" '
            f'uniqueCount="{table.size}">{c_items}</sst>'
        )


# #endregion
################################################################################
# #region Metadata
class MetadataCoreWriter(BasePartWriter):
    path = PATH_CORE_PROPS

    def create_document(self) -> str:
        md = self.ctx.workbook.metadata
        if md is None:
            raise ValueError("The workbook carries no metadata.")
        c_now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return "".join(
            [
                f'<cp:coreProperties xmlns:cp="{NS_CORE_PROPS}" xmlns:dc="{NS_DC}" '
                f'xmlns:dcterms="{NS_DCTERMS}" xmlns:dcmitype="{NS_DCMITYPE}" '
                f'xmlns:xsi="{NS_XSI}">',
                _create_tag(md.title, "dc:title"),
                _create_tag(md.subject, "dc:subject"),
                _create_tag(md.creator, "dc:creator"),
                _create_tag(md.creator, "cp:lastModifiedBy"),
                _create_tag(md.keywords, "cp:keywords"),
                _create_tag(md.description, "dc:description"),
                f'<dcterms:created xsi:type="dcterms:W3CDTF">{c_now}</dcterms:created>',
                f'<dcterms:modified xsi:type="dcterms:W3CDTF">{c_now}</dcterms:modified>',
                _create_tag(md.category, "cp:category"),
                _create_tag(md.content_status, "cp:contentStatus"),
                "</cp:coreProperties>",
            ]
        )


class MetadataAppWriter(BasePartWriter):
    path = PATH_APP_PROPS

    def create_document(self) -> str:
        md = self.ctx.workbook.metadata
        if md is None:
            raise ValueError("The workbook carries no metadata.")
        return "".join(
            [
                f'<Properties xmlns="{NS_APP_PROPS}" xmlns:vt="{NS_VT}">',
                "<TotalTime>0</TotalTime>",
                _create_tag(md.application, "Application"),
                "<DocSecurity>0</DocSecurity>",
                "<ScaleCrop>false</ScaleCrop>",
                _create_tag(md.manager, "Manager"),
                _create_tag(md.company, "Company"),
                "<LinksUpToDate>false</LinksUpToDate>",
                "<SharedDoc>false</SharedDoc>",
                _create_tag(md.hyperlink_base, "HyperlinkBase"),
                "<HyperlinksChanged>false</HyperlinksChanged>",
                _create_tag(md.application_version, "AppVersion"),
                "</Properties>",
            ]
        )


# #endregion
################################################################################
# #region Theme
class ThemeWriter(BasePartWriter):
    path = PATH_THEME

    def create_document(self) -> str:
        theme = self.ctx.workbook.theme
        if theme is None:
            raise ValueError("The workbook carries no theme.")
        c_colors = "".join(
            f'<a:{_slot}><a:srgbClr val="{theme.colors[_slot]}"/></a:{_slot}>'
            for _slot in TUP_THEME_COLOR_SLOTS
        )
        return (
            f'<a:theme xmlns:a="{NS_DRAWING}" name="{escape_attribute(theme.name)}">'
            f"<a:themeElements>"
            f'<a:clrScheme name="{escape_attribute(theme.color_scheme_name)}">{c_colors}'
            f"</a:clrScheme></a:themeElements></a:theme>"
        )


# #endregion
