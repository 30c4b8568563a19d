"""Default ``reader.part`` plugins.

Each reader parses one part of the package into ``ReadContext``. They are
registered under the ids of :class:`EnumReaderPartId` by
:func:`xlsxpack.plugins.build_default_plugin_registry`. Anything the
readers cannot represent is degraded through ``ReadContext.report``, which
raises instead in strict mode.
"""

import posixpath
import re
from typing import Any
from xml.etree import ElementTree as ET

from loguru import logger

from ..conf import (
    C_DEFAULT_COLOR,
    N_COL_MAX,
    N_CUSTOM_NUMBER_FORMAT_START,
    N_DEFAULT_FONT_SIZE,
    N_ROW_MAX,
    NS_APP_PROPS,
    NS_CORE_PROPS,
    NS_DC,
    NS_DRAWING,
    NS_MAIN,
    NS_PKG_REL,
    NS_REL,
    PATH_APP_PROPS,
    PATH_CORE_PROPS,
    PATH_ROOT_RELS,
    PATH_SHARED_STRINGS,
    PATH_STYLES,
    PATH_THEME,
    PATH_WORKBOOK,
    RT_APP_PROPS,
    RT_CORE_PROPS,
    RT_OFFICE_DOCUMENT,
    RT_SHARED_STRINGS,
    RT_STYLES,
    RT_THEME,
    RT_WORKSHEET,
    TUP_THEME_COLOR_SLOTS,
)
from ..errors import NotSupportedContentError, StyleError
from ..model import Cell, EnumCellType, Worksheet
from ..spec.document import SpecMetadata, SpecProtection, SpecTheme
from ..spec.plugin import EnumReaderPartId, SpecPluginDescriptor
from ..spec.style import (
    EnumBorderStyle,
    EnumFontScheme,
    EnumHorizontalAlign,
    EnumPatternFill,
    EnumTextBreak,
    EnumUnderline,
    EnumVerticalAlign,
    EnumVerticalTextAlign,
    SpecBorder,
    SpecCellXf,
    SpecFill,
    SpecFont,
    SpecNumberFormat,
    SpecStyle,
)
from ..spec.text import FormattableText, SpecRichText, SpecTextRun, normalize_text
from ..util.address import parse_cell_ref
from .context import ReadContext, SpecSheetEntry, resolve_target

_RE_ARGB = re.compile(r"^[0-9A-Fa-f]{8}$")
_RE_RGB = re.compile(r"^[0-9A-Fa-f]{6}$")
_SET_TRUE = frozenset({"1", "true"})
_TUP_BORDER_SIDES = ("left", "right", "top", "bottom", "diagonal")


def _q(tag: str) -> str:
    return f"{{{NS_MAIN}}}{tag}"


def _qa(tag: str) -> str:
    return f"{{{NS_DRAWING}}}{tag}"


################################################################################
# #region Helpers
def _is_true(raw: str | None) -> bool:
    return raw is not None and raw.lower() in _SET_TRUE


def _read_flag(node: ET.Element | None) -> bool:
    # <b/> is on, <b val="0"/> is off.
    if node is None:
        return False
    return _is_true(node.get("val", "1"))


def read_int(context: ReadContext, raw: str | None, *, default: int, what: str) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        context.report.tolerate(f"Invalid {what} {raw!r}, using {default}")
        return default


def read_float(
    context: ReadContext, raw: str | None, *, default: float, what: str
) -> float:
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        context.report.tolerate(f"Invalid {what} {raw!r}, using {default}")
        return default


def read_argb(context: ReadContext, node: ET.Element | None, *, default: str) -> str:
    """``rgb`` of a color element, or ``default`` when absent or not ARGB."""
    if node is None:
        return default
    c_rgb = node.get("rgb")
    if c_rgb is None:
        return default
    if not _RE_ARGB.fullmatch(c_rgb):
        context.report.tolerate(f"Invalid ARGB color {c_rgb!r}, using {default!r}")
        return default
    return c_rgb.upper()


def read_font(context: ReadContext, node: ET.Element, *, name_tag: str = "name") -> SpecFont:
    """
    Rebuild a font from ``<font>``, or from ``<rPr>`` with ``name_tag="rFont"``.

    Unknown underline or vertical-align values and out-of-range sizes
    degrade to the defaults.
    """
    kwargs: dict[str, Any] = {
        "bold": _read_flag(node.find(_q("b"))),
        "italic": _read_flag(node.find(_q("i"))),
        "strike": _read_flag(node.find(_q("strike"))),
    }

    underline = node.find(_q("u"))
    if underline is not None:
        kwargs["underline"] = context.read_enum(
            EnumUnderline,
            underline.get("val", EnumUnderline.SINGLE.value),
            default=EnumUnderline.NONE,
            what="underline",
        )

    vert_align = node.find(_q("vertAlign"))
    if vert_align is not None and vert_align.get("val") != "baseline":
        kwargs["vertical_align"] = context.read_enum(
            EnumVerticalTextAlign,
            vert_align.get("val"),
            default=EnumVerticalTextAlign.NONE,
            what="vertical text alignment",
        )

    size = node.find(_q("sz"))
    if size is not None:
        n_size = read_float(
            context, size.get("val"), default=N_DEFAULT_FONT_SIZE, what="font size"
        )
        if n_size < 1 or n_size > 409:
            context.report.tolerate(
                f"Font size {n_size} out of range, using {N_DEFAULT_FONT_SIZE}"
            )
            n_size = N_DEFAULT_FONT_SIZE
        kwargs["size"] = n_size

    color = node.find(_q("color"))
    if color is not None:
        kwargs["color"] = read_argb(context, color, default="")
        if color.get("theme") is not None:
            kwargs["color_theme"] = read_int(
                context, color.get("theme"), default=1, what="theme color"
            )

    name = node.find(_q(name_tag))
    if name is not None and name.get("val"):
        kwargs["name"] = name.get("val")

    family = node.find(_q("family"))
    if family is not None:
        kwargs["family"] = read_int(context, family.get("val"), default=2, what="font family")

    scheme = node.find(_q("scheme"))
    kwargs["scheme"] = context.read_enum(
        EnumFontScheme,
        None if scheme is None else scheme.get("val"),
        default=EnumFontScheme.NONE,
        what="font scheme",
    )

    charset = node.find(_q("charset"))
    if charset is not None:
        kwargs["charset"] = read_int(context, charset.get("val"), default=0, what="charset")
    return SpecFont(**kwargs)


def _read_text(node: ET.Element | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text


def read_text_item(context: ReadContext, node: ET.Element) -> FormattableText:
    """
    Text of an ``<si>`` or ``<is>`` element.

    Runs with properties make a :class:`SpecRichText`; otherwise the plain
    string is returned. With phonetic import, each ``rPh`` run is inserted
    as ``(text)`` after the base text it annotates and the result is plain.
    """
    l_runs: list[SpecTextRun] = []
    l_phonetic: list[tuple[int, str]] = []
    for _child in node:
        if _child.tag == _q("t"):
            l_runs.append(SpecTextRun(_read_text(_child)))
        elif _child.tag == _q("r"):
            properties = _child.find(_q("rPr"))
            font = (
                None
                if properties is None
                else read_font(context, properties, name_tag="rFont")
            )
            l_runs.append(SpecTextRun(_read_text(_child.find(_q("t"))), font))
        elif _child.tag == _q("rPh") and context.options.enforce_phonetic_character_import:
            n_end = read_int(context, _child.get("eb"), default=0, what="phonetic run end")
            l_phonetic.append((n_end, _read_text(_child.find(_q("t")))))

    if l_phonetic:
        c_text = "".join(r.text for r in l_runs)
        # Right to left, so earlier insert positions stay valid.
        for _end, _text in sorted(l_phonetic, key=lambda x: x[0], reverse=True):
            _end = min(max(_end, 0), len(c_text))
            c_text = f"{c_text[:_end]}({_text}){c_text[_end:]}"
        return c_text
    return normalize_text(SpecRichText(runs=tuple(l_runs)))


# #endregion
################################################################################
# #region Base
class BasePartReader:
    """Common ``init``/``execute`` of the default part readers."""

    def __init__(self) -> None:
        self.context: ReadContext | None = None
        self.descriptor: SpecPluginDescriptor | None = None
        self.index: int | None = None

    def init(
        self,
        context: ReadContext,
        *,
        descriptor: SpecPluginDescriptor,
        index: int | None = None,
    ) -> None:
        self.context = context
        self.descriptor = descriptor
        self.index = index

    @property
    def ctx(self) -> ReadContext:
        if self.context is None:
            raise RuntimeError(f"{type(self).__name__} used before `init`.")
        return self.context

    def execute(self) -> None:
        raise NotImplementedError


# #endregion
################################################################################
# #region Relationships
class RelationshipReader(BasePartReader):
    """Reads ``_rels/.rels`` and the workbook relationships into the context."""

    @staticmethod
    def _iter_relationships(root: ET.Element) -> list[tuple[str, str, str]]:
        return [
            (_rel.get("Id", ""), _rel.get("Type", ""), _rel.get("Target", ""))
            for _rel in root.iterfind(f"{{{NS_PKG_REL}}}Relationship")
        ]

    def execute(self) -> None:
        ctx = self.ctx
        root = ctx.parse_part(PATH_ROOT_RELS)
        if root is None:
            ctx.report.tolerate(f"Missing {PATH_ROOT_RELS}, using default part paths")
        else:
            for _, _type, _target in self._iter_relationships(root):
                ctx.root_relationships.setdefault(_type, resolve_target("", _target))
        ctx.workbook_path = ctx.get_root_related_path(RT_OFFICE_DOCUMENT, PATH_WORKBOOK)

        c_dir, c_name = posixpath.split(ctx.workbook_path)
        c_rels_path = posixpath.join(c_dir, "_rels", f"{c_name}.rels")
        root = ctx.parse_part(c_rels_path)
        if root is None:
            ctx.report.tolerate(f"Missing {c_rels_path}, worksheets cannot be resolved")
            return
        for _id, _type, _target in self._iter_relationships(root):
            c_path = resolve_target(c_dir, _target)
            ctx.relationships[_id] = c_path
            if _type != RT_WORKSHEET:
                ctx.workbook_relationship_types.setdefault(_type, c_path)
        logger.debug(f"Read {len(ctx.relationships)} workbook relationships")


# #endregion
################################################################################
# #region Workbook
class WorkbookReader(BasePartReader):
    def execute(self) -> None:
        ctx = self.ctx
        root = ctx.require_part(ctx.workbook_path)
        for _sheet in root.iterfind(f"{_q('sheets')}/{_q('sheet')}"):
            c_rel_id = _sheet.get(f"{{{NS_REL}}}id", "")
            entry = SpecSheetEntry(
                name=_sheet.get("name", ""),
                sheet_id=read_int(
                    ctx, _sheet.get("sheetId"), default=len(ctx.sheets) + 1, what="sheetId"
                ),
                rel_id=c_rel_id,
                hidden=_sheet.get("state") in {"hidden", "veryHidden"},
                path=ctx.relationships.get(c_rel_id),
            )
            ctx.sheets.append(entry)
            worksheet = Worksheet(entry.name)
            worksheet.hidden = entry.hidden
            ctx.workbook.worksheets.append(worksheet)

        view = root.find(f"{_q('bookViews')}/{_q('workbookView')}")
        if view is not None:
            n_active = read_int(ctx, view.get("activeTab"), default=0, what="activeTab")
            if 0 <= n_active < max(len(ctx.sheets), 1):
                ctx.workbook.selected_index = n_active
            else:
                ctx.report.tolerate(f"Active tab {n_active} is not a sheet, using 0")

        if root.find(_q("workbookProtection")) is not None:
            ctx.run_part_reader(EnumReaderPartId.PASSWORD)


# #endregion
################################################################################
# #region Styles
class StyleReader(BasePartReader):
    """Fills ``ReadContext.styles`` from ``xl/styles.xml`` (optional part)."""

    def _read_number_formats(self, root: ET.Element) -> None:
        ctx = self.ctx
        for _fmt in root.iterfind(f"{_q('numFmts')}/{_q('numFmt')}"):
            n_id = read_int(ctx, _fmt.get("numFmtId"), default=0, what="numFmtId")
            if n_id < N_CUSTOM_NUMBER_FORMAT_START:
                ctx.styles.add_number_format(n_id, SpecNumberFormat(number=max(n_id, 0)))
                continue
            c_code = _fmt.get("formatCode", "")
            if not c_code:
                ctx.report.tolerate(f"Empty format code for numFmtId={n_id}, using General")
                ctx.styles.add_number_format(n_id, SpecNumberFormat())
                continue
            ctx.styles.add_number_format(n_id, SpecNumberFormat.custom(c_code))

    def _read_fill(self, node: ET.Element) -> SpecFill:
        ctx = self.ctx
        pattern_fill = node.find(_q("patternFill"))
        if pattern_fill is None:
            ctx.report.tolerate("Unsupported fill without patternFill, using no fill")
            return SpecFill()
        kwargs: dict[str, Any] = {
            "pattern": ctx.read_enum(
                EnumPatternFill,
                pattern_fill.get("patternType"),
                default=EnumPatternFill.NONE,
                what="fill pattern",
            ),
            "fg_color": read_argb(ctx, pattern_fill.find(_q("fgColor")), default=C_DEFAULT_COLOR),
        }
        bg_color = pattern_fill.find(_q("bgColor"))
        if bg_color is not None:
            kwargs["bg_color"] = read_argb(ctx, bg_color, default=C_DEFAULT_COLOR)
            if bg_color.get("indexed") is not None:
                kwargs["indexed_color"] = read_int(
                    ctx, bg_color.get("indexed"), default=64, what="indexed color"
                )
        return SpecFill(**kwargs)

    def _read_border(self, node: ET.Element) -> SpecBorder:
        ctx = self.ctx
        kwargs: dict[str, Any] = {
            "diagonal_up": _is_true(node.get("diagonalUp")),
            "diagonal_down": _is_true(node.get("diagonalDown")),
        }
        for _side in _TUP_BORDER_SIDES:
            side = node.find(_q(_side))
            if side is None:
                continue
            kwargs[f"{_side}_style"] = ctx.read_enum(
                EnumBorderStyle,
                side.get("style"),
                default=EnumBorderStyle.NONE,
                what="border style",
            )
            kwargs[f"{_side}_color"] = read_argb(ctx, side.find(_q("color")), default="")
        return SpecBorder(**kwargs)

    def _read_cell_xf(self, node: ET.Element) -> SpecCellXf:
        ctx = self.ctx
        kwargs: dict[str, Any] = {}
        alignment = node.find(_q("alignment"))
        if alignment is None:
            kwargs["force_apply_alignment"] = _is_true(node.get("applyAlignment"))
        else:
            kwargs["horizontal_align"] = ctx.read_enum(
                EnumHorizontalAlign,
                alignment.get("horizontal"),
                default=EnumHorizontalAlign.NONE,
                what="horizontal alignment",
            )
            kwargs["vertical_align"] = ctx.read_enum(
                EnumVerticalAlign,
                alignment.get("vertical"),
                default=EnumVerticalAlign.NONE,
                what="vertical alignment",
            )
            kwargs["indent"] = max(
                read_int(ctx, alignment.get("indent"), default=0, what="indent"), 0
            )
            if _is_true(alignment.get("wrapText")):
                kwargs["text_break"] = EnumTextBreak.WRAP_TEXT
            elif _is_true(alignment.get("shrinkToFit")):
                kwargs["text_break"] = EnumTextBreak.SHRINK_TO_FIT
            n_rotation = read_int(
                ctx, alignment.get("textRotation"), default=0, what="text rotation"
            )
            try:
                kwargs.update(SpecCellXf.from_internal_rotation(n_rotation))
            except StyleError as exc:
                ctx.report.tolerate(f"{exc} Using no rotation")

        protection = node.find(_q("protection"))
        if protection is not None:
            kwargs["locked"] = _is_true(protection.get("locked"))
            kwargs["hidden"] = _is_true(protection.get("hidden"))
        return SpecCellXf(**kwargs)

    def _read_style(self, node: ET.Element) -> SpecStyle:
        """
        Resolve one ``<xf>`` of ``cellXfs``.

        Raises:
            StyleError: If the xf refers to a custom number format that the
                part does not declare.
        """
        ctx = self.ctx
        n_format = read_int(ctx, node.get("numFmtId"), default=0, what="numFmtId")
        if_builtin = 0 <= n_format < N_CUSTOM_NUMBER_FORMAT_START
        if if_builtin and not ctx.styles.has_number_format(n_format):
            ctx.styles.add_number_format(n_format, SpecNumberFormat(number=n_format))
        number_format = ctx.styles.get_number_format(n_format)

        n_border = read_int(ctx, node.get("borderId"), default=0, what="borderId")
        border = ctx.styles.get_border(n_border)
        if border is None:
            ctx.report.tolerate(f"Missing border {n_border}, using the default border")
            border = SpecBorder()
        n_fill = read_int(ctx, node.get("fillId"), default=0, what="fillId")
        fill = ctx.styles.get_fill(n_fill)
        if fill is None:
            ctx.report.tolerate(f"Missing fill {n_fill}, using the default fill")
            fill = SpecFill()
        n_font = read_int(ctx, node.get("fontId"), default=0, what="fontId")
        font = ctx.styles.get_font(n_font)
        if font is None:
            ctx.report.tolerate(f"Missing font {n_font}, using the default font")
            font = SpecFont()

        return SpecStyle(
            border=border,
            fill=fill,
            font=font,
            number_format=number_format,
            cell_xf=self._read_cell_xf(node),
        )

    def execute(self) -> None:
        ctx = self.ctx
        root = ctx.parse_part(ctx.get_workbook_related_path(RT_STYLES, PATH_STYLES))
        if root is None:
            logger.debug("Package has no styles part")
            return

        self._read_number_formats(root)
        for _font in root.iterfind(f"{_q('fonts')}/{_q('font')}"):
            ctx.styles.add_font(read_font(ctx, _font))
        for _fill in root.iterfind(f"{_q('fills')}/{_q('fill')}"):
            ctx.styles.add_fill(self._read_fill(_fill))
        for _border in root.iterfind(f"{_q('borders')}/{_q('border')}"):
            ctx.styles.add_border(self._read_border(_border))
        for _xf in root.iterfind(f"{_q('cellXfs')}/{_q('xf')}"):
            ctx.styles.add_style(self._read_style(_xf))
        for _color in root.iterfind(f"{_q('colors')}/{_q('mruColors')}/{_q('color')}"):
            c_rgb = read_argb(ctx, _color, default="")
            if c_rgb:
                ctx.styles.add_mru_color(c_rgb)

        ctx.workbook.mru_colors = list(ctx.styles.mru_colors)
        ctx.report.cnt_styles = ctx.styles.style_count
        logger.debug(f"Read {ctx.styles.style_count} cell styles")


# #endregion
################################################################################
# #region SharedStrings
class SharedStringReader(BasePartReader):
    def execute(self) -> None:
        ctx = self.ctx
        root = ctx.parse_part(
            ctx.get_workbook_related_path(RT_SHARED_STRINGS, PATH_SHARED_STRINGS)
        )
        if root is None:
            return
        ctx.shared_texts.extend(read_text_item(ctx, _si) for _si in root.iterfind(_q("si")))
        ctx.report.cnt_shared_texts = len(ctx.shared_texts)


# #endregion
################################################################################
# #region Worksheet
class WorksheetReader(BasePartReader):
    """Rebuilds the sheet at ``index``: cells, column widths, merges, protection."""

    def get_index(self) -> int:
        if self.index is None:
            raise ValueError("WorksheetReader requires a sheet `index`.")
        return self.index

    def _read_shared_text(self, raw: str, ref: str) -> tuple[Any, EnumCellType]:
        ctx = self.ctx
        if raw == "":
            return None, EnumCellType.EMPTY
        try:
            n_index = int(raw)
        except ValueError:
            n_index = -1
        if 0 <= n_index < len(ctx.shared_texts):
            return ctx.shared_texts[n_index], EnumCellType.STRING
        ctx.report.tolerate(f"Cell {ref} refers to missing shared text {raw!r}")
        return raw, EnumCellType.STRING

    def _read_cell(self, node: ET.Element, row: int, col: int, ref: str) -> Cell:
        ctx = self.ctx
        n_style = read_int(ctx, node.get("s"), default=0, what="cell style index")
        style = None
        if n_style:
            style = ctx.styles.get_style(n_style)
            if style is None:
                ctx.report.tolerate(
                    f"Cell {ref} refers to missing style {n_style}, using the default style"
                )

        c_type = node.get("t")
        formula = node.find(_q("f"))
        if c_type == "s" and formula is None:
            value, cell_type = self._read_shared_text(_read_text(node.find(_q("v"))), ref)
        elif c_type == "inlineStr":
            inline = node.find(_q("is"))
            value = "" if inline is None else read_text_item(ctx, inline)
            cell_type = EnumCellType.STRING
        else:
            c_raw = _read_text(formula if formula is not None else node.find(_q("v")))
            value, cell_type = ctx.coercer.decode(
                c_raw,
                type_attr=c_type,
                if_formula=formula is not None,
                if_date_style=ctx.styles.is_date_style(n_style),
                if_time_style=ctx.styles.is_time_style(n_style),
            )

        value, cell_type = ctx.coercer.enforce(value, cell_type, row=row, col=col)
        ctx.report.cnt_cells += 1
        return Cell(value=value, style=style, cell_type=cell_type)

    def _read_cells(self, root: ET.Element, worksheet: Worksheet) -> None:
        ctx = self.ctx
        n_row = -1
        for _row in root.iterfind(f"{_q('sheetData')}/{_q('row')}"):
            c_row = _row.get("r")
            if c_row:
                try:
                    n_row = int(c_row) - 1
                except ValueError:
                    n_row = -1
                if n_row < 0 or n_row > N_ROW_MAX:
                    ctx.report.tolerate(f"Row with invalid reference {c_row!r} skipped")
                    continue
            else:
                n_row += 1
            n_col = -1
            for _cell in _row.iterfind(_q("c")):
                c_ref = _cell.get("r")
                if c_ref:
                    try:
                        n_cell_row, n_col = parse_cell_ref(c_ref)
                    except ValueError:
                        ctx.report.tolerate(f"Cell with invalid reference {c_ref!r} skipped")
                        continue
                else:
                    n_cell_row, n_col = n_row, n_col + 1
                    c_ref = f"R{n_cell_row + 1}C{n_col + 1}"
                worksheet.cells[(n_cell_row, n_col)] = self._read_cell(
                    _cell, n_cell_row, n_col, c_ref
                )

    def _read_columns(self, root: ET.Element, worksheet: Worksheet) -> None:
        ctx = self.ctx
        for _col in root.iterfind(f"{_q('cols')}/{_q('col')}"):
            if not _is_true(_col.get("customWidth")):
                continue
            n_width = read_float(ctx, _col.get("width"), default=-1.0, what="column width")
            if n_width < 0 or n_width > 255:
                ctx.report.tolerate(f"Column width {_col.get('width')!r} ignored")
                continue
            n_min = read_int(ctx, _col.get("min"), default=1, what="column min")
            n_max = read_int(ctx, _col.get("max"), default=n_min, what="column max")
            for _i in range(max(n_min, 1) - 1, min(n_max, N_COL_MAX + 1)):
                worksheet.column_widths[_i] = n_width

    def _read_merges(self, root: ET.Element, worksheet: Worksheet) -> None:
        for _merge in root.iterfind(f"{_q('mergeCells')}/{_q('mergeCell')}"):
            try:
                worksheet.merge(_merge.get("ref", ""))
            except ValueError as exc:
                self.ctx.report.tolerate(f"Merged range ignored: {exc}")

    def execute(self) -> None:
        ctx = self.ctx
        n_index = self.get_index()
        root = ctx.require_part(ctx.get_sheet_path(n_index))
        worksheet = ctx.workbook.worksheets[n_index]

        self._read_cells(root, worksheet)
        self._read_columns(root, worksheet)
        self._read_merges(root, worksheet)
        if root.find(_q("sheetProtection")) is not None:
            ctx.run_part_reader(EnumReaderPartId.PASSWORD, index=n_index)
        ctx.report.cnt_sheets += 1
        logger.debug(f"Read sheet {worksheet.name!r}: {len(worksheet.cells)} cells")


# #endregion
################################################################################
# #region Password
class PasswordReader(BasePartReader):
    """
    Reads ``workbookProtection`` (``index`` is ``None``) or the
    ``sheetProtection`` of the sheet at ``index``.

    Only the legacy 16-bit hash can be represented. A protection hashed
    with another algorithm raises :class:`NotSupportedContentError` unless
    ``ignore_not_supported_password_algorithms`` is set; the protection is
    then kept without hash.
    """

    def _read_protection(
        self,
        node: ET.Element,
        *,
        algorithm_attr: str,
        password_attr: str,
        **kwargs: Any,
    ) -> SpecProtection:
        c_algorithm = node.get(algorithm_attr)
        if c_algorithm:
            if not self.ctx.options.ignore_not_supported_password_algorithms:
                raise NotSupportedContentError(
                    f"Password algorithm {c_algorithm!r} is not supported. Set "
                    f"`ignore_not_supported_password_algorithms` to read the package "
                    f"without the protection hash."
                )
            logger.warning(f"Protection hash of algorithm {c_algorithm!r} dropped")
            return SpecProtection(if_unsupported_algorithm=True, **kwargs)
        return SpecProtection(password_hash=node.get(password_attr) or None, **kwargs)

    def execute(self) -> None:
        ctx = self.ctx
        if self.index is None:
            node = ctx.require_part(ctx.workbook_path).find(_q("workbookProtection"))
            if node is None:
                return
            ctx.workbook.protection = self._read_protection(
                node,
                algorithm_attr="workbookAlgorithmName",
                password_attr="workbookPassword",
                lock_structure=_is_true(node.get("lockStructure")),
                lock_windows=_is_true(node.get("lockWindows")),
            )
            return

        node = ctx.require_part(ctx.get_sheet_path(self.index)).find(_q("sheetProtection"))
        if node is None:
            return
        ctx.workbook.worksheets[self.index].protection = self._read_protection(
            node, algorithm_attr="algorithmName", password_attr="password"
        )


# #endregion
################################################################################
# #region Metadata
_DICT_CORE_TAGS: dict[str, str] = {
    f"{{{NS_DC}}}title": "title",
    f"{{{NS_DC}}}subject": "subject",
    f"{{{NS_DC}}}creator": "creator",
    f"{{{NS_CORE_PROPS}}}keywords": "keywords",
    f"{{{NS_DC}}}description": "description",
    f"{{{NS_CORE_PROPS}}}category": "category",
    f"{{{NS_CORE_PROPS}}}contentStatus": "content_status",
}
_DICT_APP_TAGS: dict[str, str] = {
    f"{{{NS_APP_PROPS}}}Application": "application",
    f"{{{NS_APP_PROPS}}}AppVersion": "application_version",
    f"{{{NS_APP_PROPS}}}Company": "company",
    f"{{{NS_APP_PROPS}}}Manager": "manager",
    f"{{{NS_APP_PROPS}}}HyperlinkBase": "hyperlink_base",
}


class _BaseMetadataReader(BasePartReader):
    relationship_type: str = ""
    default_path: str = ""
    dict_tags: dict[str, str] = {}

    def execute(self) -> None:
        ctx = self.ctx
        root = ctx.parse_part(
            ctx.get_root_related_path(self.relationship_type, self.default_path)
        )
        if root is None:
            return
        kwargs = {
            _field: _child.text
            for _child in root
            if (_field := self.dict_tags.get(_child.tag)) is not None and _child.text
        }
        metadata = ctx.workbook.metadata
        if metadata is None:
            metadata = SpecMetadata(application=None)
        ctx.workbook.metadata = metadata.with_(**kwargs)


class MetadataCoreReader(_BaseMetadataReader):
    relationship_type = RT_CORE_PROPS
    default_path = PATH_CORE_PROPS
    dict_tags = _DICT_CORE_TAGS


class MetadataAppReader(_BaseMetadataReader):
    relationship_type = RT_APP_PROPS
    default_path = PATH_APP_PROPS
    dict_tags = _DICT_APP_TAGS


# #endregion
################################################################################
# #region Theme
class ThemeReader(BasePartReader):
    def _read_slot_color(self, node: ET.Element, slot: str) -> str | None:
        srgb = node.find(_qa("srgbClr"))
        sys_color = node.find(_qa("sysClr"))
        if srgb is not None:
            c_color = srgb.get("val", "")
        elif sys_color is not None:
            c_color = sys_color.get("lastClr", "")
        else:
            c_color = ""
        if not _RE_RGB.fullmatch(c_color):
            self.ctx.report.tolerate(f"Theme color {slot!r} unreadable, using the default")
            return None
        return c_color

    def execute(self) -> None:
        ctx = self.ctx
        root = ctx.parse_part(ctx.get_workbook_related_path(RT_THEME, PATH_THEME))
        if root is None:
            return
        scheme = root.find(f"{_qa('themeElements')}/{_qa('clrScheme')}")
        dict_colors: dict[str, str] = {}
        if scheme is not None:
            for _slot in TUP_THEME_COLOR_SLOTS:
                node = scheme.find(_qa(_slot))
                if node is None:
                    continue
                c_color = self._read_slot_color(node, _slot)
                if c_color is not None:
                    dict_colors[_slot] = c_color
        ctx.workbook.theme = SpecTheme(
            name=root.get("name", "Office Theme"),
            color_scheme_name="Office" if scheme is None else scheme.get("name", "Office"),
            colors=dict_colors,
        )


# #endregion
