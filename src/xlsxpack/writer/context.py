from dataclasses import dataclass, field

from ..cache import SharedTextTable, StyleCache
from ..errors import PackageIOError
from ..model import Workbook, Worksheet
from ..registry import PackagePartRegistry, PluginRegistry
from ..spec.package import EnumPartKind, SpecPackagePart, SpecRelatedPart
from ..spec.report import ReportWriteBuilder
from ..spec.style import DEFAULT_STYLE, FILL_GRAY_125, SpecStyle
from ..spec.text import FormattableText
from ..spec.writer import SpecWriteOptions


@dataclass(slots=True)
class WriteContext:
    """
    State of one write pass, handed to every writer plugin through ``init``.

    The style cache and the shared-text table belong to the pass: they are
    created by :meth:`new` and dropped with the context, so two passes never
    see each other's indices.

    Attributes:
        workbook (Workbook): Document being written (read-only for plugins).
        options (SpecWriteOptions): Pass options.
        plugins (PluginRegistry): Registry the pass resolves its queues from.
        style_cache (StyleCache): Seeded with the default style (index 0) and
            the ``gray125`` fill (fill index 1).
        shared_texts (SharedTextTable): Cell texts in emission order.
        part_registry (PackagePartRegistry): Parts of this pass.
        report (ReportWriteBuilder): Counters collected while writing.
        worksheets (list[Worksheet]): Sheets actually emitted; holds one empty
            ``sheet1`` when the workbook has none.
        related_parts (list[SpecRelatedPart]): Result of ``finalize``, empty
            before the parts are numbered.
        contents (dict[str, bytes]): Archive path to encoded XML.
    """

    workbook: Workbook
    options: SpecWriteOptions
    plugins: PluginRegistry
    style_cache: StyleCache
    shared_texts: SharedTextTable
    part_registry: PackagePartRegistry
    report: ReportWriteBuilder
    worksheets: list[Worksheet] = field(default_factory=list)
    related_parts: list[SpecRelatedPart] = field(default_factory=list)
    contents: dict[str, bytes] = field(default_factory=dict)

    @classmethod
    def new(
        cls,
        workbook: Workbook,
        *,
        options: SpecWriteOptions,
        plugins: PluginRegistry,
    ) -> "WriteContext":
        style_cache = StyleCache.new()
        style_cache.intern(DEFAULT_STYLE)
        style_cache.intern_component(FILL_GRAY_125)
        return cls(
            workbook=workbook,
            options=options,
            plugins=plugins,
            style_cache=style_cache,
            shared_texts=SharedTextTable.new(),
            part_registry=PackagePartRegistry.new(),
            report=ReportWriteBuilder(),
            worksheets=list(workbook.worksheets),
        )

    def sync_worksheets(self) -> list[Worksheet]:
        """Take the sheet list from the workbook again, after prepend plugins ran."""
        self.worksheets = list(self.workbook.worksheets)
        return self.worksheets

    def intern_style(self, style: SpecStyle | None) -> int:
        if style is None:
            return 0
        return self.style_cache.intern(style)

    def add_text(self, text: FormattableText) -> int:
        return self.shared_texts.add(text)

    def finalize_parts(self) -> list[SpecRelatedPart]:
        self.related_parts = self.part_registry.finalize()
        return self.related_parts

    def get_related_part(self, path: str) -> SpecRelatedPart:
        """
        Return the numbered part stored at ``path``.

        Raises:
            KeyError: If no part has that path or parts are not numbered yet.
        """
        for _related in self.related_parts:
            if _related.part.path == path:
                return _related
        raise KeyError(f"Package part not found: {path!r}")

    def list_sheet_parts(self) -> list[SpecRelatedPart]:
        return [r for r in self.related_parts if r.part.kind is EnumPartKind.SHEET]

    def get_sheet_part(self, index: int) -> SpecRelatedPart:
        for _related in self.list_sheet_parts():
            if PackagePartRegistry.get_sheet_index(_related.part) == index:
                return _related
        raise KeyError(f"No sheet part with index {index}.")

    def has_part(self, path: str) -> bool:
        return self.part_registry.get_by_path(path) is not None

    def write_part(self, path: str, content: str | bytes) -> None:
        """
        Store the document of a registered part.

        Writing the same path twice replaces the earlier document, so a
        replacement part writer may rewrite what a default one produced.

        Raises:
            ValueError: If ``path`` was never registered in this pass.
        """
        if not self.has_part(path):
            raise ValueError(f"Arg `path` is not a registered package part: {path!r}.")
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.contents[path] = content

    def register_part(self, part: SpecPackagePart) -> SpecPackagePart:
        if self.related_parts:
            raise PackageIOError(
                f"Cannot register part {part.path!r}: parts are already numbered."
            )
        return self.part_registry.register(part)

    def list_missing_parts(self) -> list[str]:
        return [
            p.path for p in self.part_registry.list_parts() if p.path not in self.contents
        ]
