import asyncio
import os
import zipfile
from typing import BinaryIO

from loguru import logger

from ..errors import PackageIOError, XlsxPackError
from ..model import Workbook
from ..plugins import build_default_plugin_registry
from ..registry import PluginRegistry
from ..spec.plugin import EnumPluginQueue, EnumReaderPartId, SpecPluginEntry
from ..spec.reader import SpecReaderOptions
from ..spec.report import ReportRead
from .context import ReadContext

ReadSource = str | os.PathLike[str] | BinaryIO

# Styles and shared strings come before worksheets: cells are decoded
# against both tables.
_TUP_PART_READER_SEQUENCE: tuple[EnumReaderPartId, ...] = (
    EnumReaderPartId.RELATIONSHIPS,
    EnumReaderPartId.WORKBOOK,
    EnumReaderPartId.STYLES,
    EnumReaderPartId.SHARED_STRINGS,
    EnumReaderPartId.THEME,
    EnumReaderPartId.METADATA_CORE,
    EnumReaderPartId.METADATA_APP,
)


class XlsxPackReader:
    """
    Rebuild a :class:`Workbook` from an XLSX package.

    Pass order:

    1. Part readers (``reader.part``): relationships, workbook, styles,
       shared strings, theme, metadata, then every worksheet. The password
       reader is run by the workbook and worksheet readers when a
       protection element is present.
    2. ``reader.package`` plugins, each reading the archive entry named by
       its descriptor part.
    3. ``reader.append`` plugins.

    ``report`` holds the summary of the last :meth:`read`.

    Examples:
        >>> reader = XlsxPackReader("in.xlsx")  # doctest: +SKIP
        >>> wb = reader.read()  # doctest: +SKIP
        >>> reader.report.cnt_sheets  # doctest: +SKIP
        1
    """

    def __init__(
        self,
        source: ReadSource,
        *,
        options: SpecReaderOptions | None = None,
        plugins: PluginRegistry | None = None,
    ) -> None:
        self.source = source
        self.options = SpecReaderOptions() if options is None else options
        self.plugins = build_default_plugin_registry() if plugins is None else plugins
        self.report = ReportRead()

    def __repr__(self) -> str:
        return f"XlsxPackReader(source={self.source!r})"

    @staticmethod
    def _execute_plugin(
        context: ReadContext, entry: SpecPluginEntry, *, index: int | None = None
    ) -> None:
        plugin = entry.create()
        plugin.init(context, descriptor=entry.descriptor, index=index)
        plugin.execute()

    def _run_part_readers(self, context: ReadContext) -> None:
        for _part_id in _TUP_PART_READER_SEQUENCE:
            logger.debug(f"Reading part {_part_id.value}")
            context.run_part_reader(_part_id)
        for _i in range(len(context.sheets)):
            context.run_part_reader(EnumReaderPartId.WORKSHEET, index=_i)

    def _run_queue(self, context: ReadContext, queue: EnumPluginQueue) -> None:
        for _entry in self.plugins.resolve(queue):
            logger.debug(f"Running plugin {queue.value}/{_entry.descriptor.id}")
            self._execute_plugin(context, _entry)

    def build_context(self, archive: zipfile.ZipFile) -> ReadContext:
        """Run the whole pass over an open archive and return its context."""
        context = ReadContext.new(archive, options=self.options, plugins=self.plugins)
        self._run_part_readers(context)
        self._run_queue(context, EnumPluginQueue.READER_PACKAGE)
        self._run_queue(context, EnumPluginQueue.READER_APPEND)
        return context

    def read(self) -> Workbook:
        """
        Read the package.

        Raises:
            XlsxPackError: Any library error, unchanged (strict-mode
                degrades, unsupported password algorithms, style errors).
            PackageIOError: Wrapping every other failure (unreadable
                stream, corrupt archive, invalid XML, plugin exceptions).

        Returns:
            Workbook: The rebuilt document.
        """
        try:
            with zipfile.ZipFile(self.source, mode="r") as archive:
                context = self.build_context(archive)
        except XlsxPackError:
            raise
        except Exception as exc:
            raise PackageIOError(f"Failed to read the package: {exc}") from exc

        self.report = context.report.build()
        logger.success(f"Package read: {self.report}")
        return context.workbook

    async def read_async(self) -> Workbook:
        return await asyncio.to_thread(self.read)


def read(
    source: ReadSource,
    *,
    options: SpecReaderOptions | None = None,
    plugins: PluginRegistry | None = None,
) -> Workbook:
    return XlsxPackReader(source, options=options, plugins=plugins).read()


async def read_async(
    source: ReadSource,
    *,
    options: SpecReaderOptions | None = None,
    plugins: PluginRegistry | None = None,
) -> Workbook:
    return await XlsxPackReader(source, options=options, plugins=plugins).read_async()
