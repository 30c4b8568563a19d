import asyncio
import os
import zipfile
from typing import BinaryIO

from loguru import logger

from ..conf import (
    PATH_APP_PROPS,
    PATH_CONTENT_TYPES,
    PATH_CORE_PROPS,
    PATH_ROOT_RELS,
    PATH_SHARED_STRINGS,
    PATH_STYLES,
    PATH_THEME,
    PATH_WORKBOOK,
    PATH_WORKBOOK_RELS,
)
from ..errors import PackageIOError, XlsxPackError
from ..model import Workbook
from ..plugins import build_default_plugin_registry
from ..registry import PluginRegistry
from ..spec.plugin import EnumPluginQueue, EnumWriterPartId, SpecPluginEntry
from ..spec.report import ReportWrite
from ..spec.writer import SpecWriteOptions
from .context import WriteContext
from .package import (
    create_content_types_document,
    create_relationships_document,
    register_common_parts,
    split_manifests,
)

WriteTarget = str | os.PathLike[str] | BinaryIO

# Worksheets come before styles and shared strings: rendering a sheet is
# what fills the caches those two parts are written from.
_TUP_PART_WRITER_SEQUENCE: tuple[tuple[EnumWriterPartId, str | None], ...] = (
    (EnumWriterPartId.WORKBOOK, PATH_WORKBOOK),
    (EnumWriterPartId.WORKSHEET, None),
    (EnumWriterPartId.STYLES, PATH_STYLES),
    (EnumWriterPartId.SHARED_STRINGS, PATH_SHARED_STRINGS),
    (EnumWriterPartId.METADATA_CORE, PATH_CORE_PROPS),
    (EnumWriterPartId.METADATA_APP, PATH_APP_PROPS),
    (EnumWriterPartId.THEME, PATH_THEME),
)


class XlsxPackWriter:
    """
    Assemble a :class:`Workbook` into an XLSX package.

    One call of :meth:`save` is one write pass with its own
    :class:`WriteContext`; the writer object itself keeps no pass state and
    may be saved repeatedly.

    Pass order:

    1. ``writer.prepend`` plugins.
    2. Common parts and ``writer.package`` parts are registered, then numbered.
    3. Part writers (``writer.part``): workbook, worksheets, styles, shared
       strings, metadata, theme.
    4. ``writer.package`` plugins render their parts.
    5. ``writer.append`` plugins.
    6. Manifests and parts are zipped in relationship-id order.

    Examples:
        >>> wb = Workbook()
        >>> wb.add_worksheet("Data").set_value("A1", "hello")  # doctest: +SKIP
        >>> XlsxPackWriter(wb).save("out.xlsx")  # doctest: +SKIP
    """

    def __init__(
        self,
        workbook: Workbook,
        *,
        options: SpecWriteOptions | None = None,
        plugins: PluginRegistry | None = None,
    ) -> None:
        self.workbook = workbook
        self.options = SpecWriteOptions() if options is None else options
        self.plugins = build_default_plugin_registry() if plugins is None else plugins

    def __repr__(self) -> str:
        return f"XlsxPackWriter(sheets={len(self.workbook.worksheets)})"

    @staticmethod
    def _execute_plugin(
        context: WriteContext, entry: SpecPluginEntry, *, index: int | None = None
    ) -> None:
        plugin = entry.create()
        plugin.init(context, descriptor=entry.descriptor, index=index)
        plugin.execute()

    def _run_queue(self, context: WriteContext, queue: EnumPluginQueue) -> None:
        for _entry in self.plugins.resolve(queue):
            logger.debug(f"Running plugin {queue.value}/{_entry.descriptor.id}")
            self._execute_plugin(context, _entry)
            context.report.add_plugin(_entry.descriptor.id)

    def _run_part_writers(self, context: WriteContext) -> None:
        for _part_id, _path in _TUP_PART_WRITER_SEQUENCE:
            if _path is not None and not context.has_part(_path):
                continue
            entry = self.plugins.get(EnumPluginQueue.WRITER_PART, _part_id.value)
            if _part_id is EnumWriterPartId.WORKSHEET:
                for _i in range(len(context.worksheets)):
                    self._execute_plugin(context, entry, index=_i)
            else:
                self._execute_plugin(context, entry)

    def build_context(self) -> WriteContext:
        """
        Run the whole pass in memory and return its context.

        Raises:
            XlsxPackError: Propagated as raised by the pass or a plugin.
            ValueError: On an invalid workbook or plugin setup.
        """
        context = WriteContext.new(self.workbook, options=self.options, plugins=self.plugins)
        self._run_queue(context, EnumPluginQueue.WRITER_PREPEND)
        context.sync_worksheets()

        register_common_parts(context)
        l_package_entries = self.plugins.resolve(EnumPluginQueue.WRITER_PACKAGE)
        for _entry in l_package_entries:
            # `part` is mandatory on this queue, see SpecPluginDescriptor.
            context.register_part(_entry.descriptor.part)  # type: ignore[arg-type]
        context.finalize_parts()
        context.report.parts = [r.part.path for r in context.related_parts]
        logger.debug(f"Numbered {len(context.related_parts)} package parts")

        self._run_part_writers(context)
        for _entry in l_package_entries:
            logger.debug(f"Running plugin writer.package/{_entry.descriptor.id}")
            self._execute_plugin(context, _entry)
            context.report.add_plugin(_entry.descriptor.id)
        self._run_queue(context, EnumPluginQueue.WRITER_APPEND)

        l_missing = context.list_missing_parts()
        if l_missing:
            raise PackageIOError(f"Package parts without content: {l_missing}")
        return context

    def _write_archive(self, context: WriteContext, target: WriteTarget) -> None:
        l_root, l_workbook = split_manifests(context.related_parts)
        with zipfile.ZipFile(
            target,
            mode="w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=self.options.compression_level,
        ) as zf:
            zf.writestr(PATH_CONTENT_TYPES, create_content_types_document(context.related_parts))
            zf.writestr(PATH_ROOT_RELS, create_relationships_document(l_root))
            zf.writestr(PATH_WORKBOOK_RELS, create_relationships_document(l_workbook))
            for _related in context.related_parts:
                zf.writestr(_related.part.path, context.contents[_related.part.path])

    def save(self, target: WriteTarget) -> ReportWrite:
        """
        Write the package to a path or a writable binary stream.

        Raises:
            XlsxPackError: Any library error, unchanged.
            PackageIOError: Wrapping every other failure of the pass or of the
                archive (I/O errors, invalid plugin setup, plugin exceptions).

        Returns:
            ReportWrite: Counters of the pass.
        """
        try:
            context = self.build_context()
            self._write_archive(context, target)
        except XlsxPackError:
            raise
        except Exception as exc:
            raise PackageIOError(f"Failed to write the package: {exc}") from exc

        report = context.report.build()
        logger.success(f"Package written: {report}")
        return report

    async def save_async(self, target: WriteTarget) -> ReportWrite:
        return await asyncio.to_thread(self.save, target)


def save(
    workbook: Workbook,
    target: WriteTarget,
    *,
    options: SpecWriteOptions | None = None,
    plugins: PluginRegistry | None = None,
) -> ReportWrite:
    return XlsxPackWriter(workbook, options=options, plugins=plugins).save(target)


async def save_async(
    workbook: Workbook,
    target: WriteTarget,
    *,
    options: SpecWriteOptions | None = None,
    plugins: PluginRegistry | None = None,
) -> ReportWrite:
    return await XlsxPackWriter(workbook, options=options, plugins=plugins).save_async(
        target
    )
