"""Package-level documents: common part registration and the two manifests.

``[Content_Types].xml`` and the relationship files are derived from the
numbered parts of a pass and are not parts themselves.
"""

from collections.abc import Iterable

from ..conf import (
    CT_APP_PROPS,
    CT_CORE_PROPS,
    CT_RELATIONSHIPS,
    CT_SHARED_STRINGS,
    CT_STYLES,
    CT_THEME,
    CT_WORKBOOK,
    CT_WORKSHEET,
    CT_XML,
    N_ORDER_METADATA_START,
    N_ORDER_POST_SHEET_START,
    N_ORDER_SHEET_START,
    N_ORDER_STEP,
    N_ORDER_WORKBOOK,
    NS_CONTENT_TYPES,
    NS_PKG_REL,
    PATH_APP_PROPS,
    PATH_CORE_PROPS,
    PATH_SHARED_STRINGS,
    PATH_STYLES,
    PATH_THEME,
    PATH_WORKBOOK,
    PATH_WORKSHEET_FMT,
    RT_APP_PROPS,
    RT_CORE_PROPS,
    RT_OFFICE_DOCUMENT,
    RT_SHARED_STRINGS,
    RT_STYLES,
    RT_THEME,
    RT_WORKSHEET,
    XML_DECLARATION,
)
from ..model import Worksheet
from ..sanitize import escape_attribute
from ..spec.package import EnumPartKind, SpecPackagePart, SpecRelatedPart
from .context import WriteContext

DEFAULT_SHEET_NAME = "sheet1"


def build_sheet_part(index: int) -> SpecPackagePart:
    return SpecPackagePart(
        path=PATH_WORKSHEET_FMT.format(n=index + 1),
        kind=EnumPartKind.SHEET,
        order_number=N_ORDER_SHEET_START + index,
        content_type=CT_WORKSHEET,
        relationship_type=RT_WORKSHEET,
    )


def register_common_parts(context: WriteContext) -> list[SpecPackagePart]:
    """
    Register the parts every package of the pass carries.

    Metadata parts exist only with metadata, the theme part only with a
    theme. An empty ``sheet1`` is added when the workbook has no worksheet.

    Raises:
        ValueError: If the workbook has no worksheet and the default sheet is
            disabled by the options.
    """
    workbook = context.workbook
    if not context.worksheets:
        if not context.options.if_emit_default_sheet:
            raise ValueError(
                "The workbook has no worksheet and `if_emit_default_sheet` is False."
            )
        context.worksheets.append(Worksheet(DEFAULT_SHEET_NAME))

    l_parts = [
        SpecPackagePart(
            path=PATH_WORKBOOK,
            kind=EnumPartKind.ROOT,
            order_number=N_ORDER_WORKBOOK,
            content_type=CT_WORKBOOK,
            relationship_type=RT_OFFICE_DOCUMENT,
        )
    ]
    if workbook.metadata is not None:
        l_parts.append(
            SpecPackagePart(
                path=PATH_CORE_PROPS,
                kind=EnumPartKind.ROOT,
                order_number=N_ORDER_METADATA_START,
                content_type=CT_CORE_PROPS,
                relationship_type=RT_CORE_PROPS,
            )
        )
        l_parts.append(
            SpecPackagePart(
                path=PATH_APP_PROPS,
                kind=EnumPartKind.ROOT,
                order_number=N_ORDER_METADATA_START + N_ORDER_STEP,
                content_type=CT_APP_PROPS,
                relationship_type=RT_APP_PROPS,
            )
        )
    l_parts.extend(build_sheet_part(_i) for _i in range(len(context.worksheets)))

    n_order = N_ORDER_POST_SHEET_START
    if workbook.theme is not None:
        l_parts.append(
            SpecPackagePart(
                path=PATH_THEME,
                kind=EnumPartKind.OTHER,
                order_number=n_order,
                content_type=CT_THEME,
                relationship_type=RT_THEME,
            )
        )
    n_order += N_ORDER_STEP
    l_parts.append(
        SpecPackagePart(
            path=PATH_STYLES,
            kind=EnumPartKind.OTHER,
            order_number=n_order,
            content_type=CT_STYLES,
            relationship_type=RT_STYLES,
        )
    )
    n_order += N_ORDER_STEP
    l_parts.append(
        SpecPackagePart(
            path=PATH_SHARED_STRINGS,
            kind=EnumPartKind.OTHER,
            order_number=n_order,
            content_type=CT_SHARED_STRINGS,
            relationship_type=RT_SHARED_STRINGS,
        )
    )
    for _part in l_parts:
        context.register_part(_part)
    return l_parts


def create_content_types_document(related_parts: Iterable[SpecRelatedPart]) -> str:
    l_xml = [
        XML_DECLARATION,
        f'<Types xmlns="{NS_CONTENT_TYPES}">',
        f'<Default Extension="rels" ContentType="{CT_RELATIONSHIPS}"/>',
        f'<Default Extension="xml" ContentType="{CT_XML}"/>',
    ]
    for _related in related_parts:
        l_xml.append(
            f'<Override PartName="/{escape_attribute(_related.part.path)}" '
            f'ContentType="{escape_attribute(_related.part.content_type)}"/>'
        )
    l_xml.append("</Types>")
    return "".join(l_xml)


def create_relationships_document(related_parts: Iterable[SpecRelatedPart]) -> str:
    """Relationship file listing ``related_parts`` with their global ids."""
    l_xml = [XML_DECLARATION, f'<Relationships xmlns="{NS_PKG_REL}">']
    for _related in related_parts:
        l_xml.append(
            f'<Relationship Id="{_related.rel_id}" '
            f'Type="{escape_attribute(_related.part.relationship_type)}" '
            f'Target="{escape_attribute(_related.part.target)}"/>'
        )
    l_xml.append("</Relationships>")
    return "".join(l_xml)


def split_manifests(
    related_parts: Iterable[SpecRelatedPart],
) -> tuple[list[SpecRelatedPart], list[SpecRelatedPart]]:
    """Split numbered parts into ``(root manifest, workbook manifest)`` entries."""
    l_root: list[SpecRelatedPart] = []
    l_workbook: list[SpecRelatedPart] = []
    for _related in related_parts:
        if _related.part.kind is EnumPartKind.ROOT:
            l_root.append(_related)
        else:
            l_workbook.append(_related)
    return l_root, l_workbook
