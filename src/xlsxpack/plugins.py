"""Default plugin set: one ``writer.part`` and one ``reader.part`` per part id.

A caller replaces a default by registering another factory under the same
queue and id with a higher priority:

    >>> registry = build_default_plugin_registry()
    >>> registry.register(
    ...     SpecPluginDescriptor(
    ...         id=EnumWriterPartId.THEME.value,
    ...         queue=EnumPluginQueue.WRITER_PART,
    ...         priority=10,
    ...     ),
    ...     MyThemeWriter,
    ... )  # doctest: +SKIP
"""

from collections.abc import Mapping
from types import MappingProxyType

from .reader import parts as reader_parts
from .registry import PluginRegistry
from .spec.plugin import (
    EnumPluginQueue,
    EnumReaderPartId,
    EnumWriterPartId,
    PluginFactory,
    SpecPluginDescriptor,
)
from .writer import parts as writer_parts

DEFAULT_WRITER_PARTS: Mapping[EnumWriterPartId, PluginFactory] = MappingProxyType(
    {
        EnumWriterPartId.WORKBOOK: writer_parts.WorkbookWriter,
        EnumWriterPartId.WORKSHEET: writer_parts.WorksheetWriter,
        EnumWriterPartId.STYLES: writer_parts.StyleWriter,
        EnumWriterPartId.SHARED_STRINGS: writer_parts.SharedStringWriter,
        EnumWriterPartId.METADATA_CORE: writer_parts.MetadataCoreWriter,
        EnumWriterPartId.METADATA_APP: writer_parts.MetadataAppWriter,
        EnumWriterPartId.THEME: writer_parts.ThemeWriter,
    }
)
DEFAULT_READER_PARTS: Mapping[EnumReaderPartId, PluginFactory] = MappingProxyType(
    {
        EnumReaderPartId.RELATIONSHIPS: reader_parts.RelationshipReader,
        EnumReaderPartId.WORKBOOK: reader_parts.WorkbookReader,
        EnumReaderPartId.STYLES: reader_parts.StyleReader,
        EnumReaderPartId.SHARED_STRINGS: reader_parts.SharedStringReader,
        EnumReaderPartId.WORKSHEET: reader_parts.WorksheetReader,
        EnumReaderPartId.METADATA_CORE: reader_parts.MetadataCoreReader,
        EnumReaderPartId.METADATA_APP: reader_parts.MetadataAppReader,
        EnumReaderPartId.THEME: reader_parts.ThemeReader,
        EnumReaderPartId.PASSWORD: reader_parts.PasswordReader,
    }
)


def build_default_plugin_registry() -> PluginRegistry:
    """Fresh registry holding the default part writers and readers at priority 0."""
    registry = PluginRegistry.new()
    for _part_id, _factory in DEFAULT_WRITER_PARTS.items():
        registry.register(
            SpecPluginDescriptor(id=_part_id.value, queue=EnumPluginQueue.WRITER_PART),
            _factory,
        )
    for _part_id, _factory in DEFAULT_READER_PARTS.items():
        registry.register(
            SpecPluginDescriptor(id=_part_id.value, queue=EnumPluginQueue.READER_PART),
            _factory,
        )
    return registry
