import posixpath
import zipfile
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar
from xml.etree import ElementTree as ET

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from ..conf import PATH_WORKBOOK
from ..errors import PackageIOError
from ..model import Workbook
from ..registry import PluginRegistry
from ..spec.plugin import EnumPluginQueue, EnumReaderPartId
from ..spec.reader import SpecReaderOptions
from ..spec.report import ReportReadBuilder
from ..spec.text import FormattableText
from .coercion import CellCoercer
from .container import StyleReaderContainer

EnumT = TypeVar("EnumT", bound=StrEnum)


@dataclass(frozen=True, slots=True)
class SpecSheetEntry:
    """One ``<sheet>`` of ``xl/workbook.xml`` with its resolved archive path."""

    name: str
    sheet_id: int
    rel_id: str
    hidden: bool = False
    path: str | None = None


def resolve_target(base_dir: str, target: str) -> str:
    """Archive path of a relationship ``target`` seen from ``base_dir``."""
    if target.startswith("/"):
        return target.lstrip("/")
    return posixpath.normpath(posixpath.join(base_dir, target))


@dataclass(slots=True)
class ReadContext:
    """
    State of one read pass, handed to every reader plugin through ``init``.

    Attributes:
        archive (zipfile.ZipFile): Open source archive.
        options (SpecReaderOptions): Coercion and tolerance options.
        plugins (PluginRegistry): Registry the pass resolves its queues from.
        report (ReportReadBuilder): Counters and tolerated degrades.
        workbook (Workbook): Document being rebuilt.
        styles (StyleReaderContainer): Style tables of ``xl/styles.xml``.
        shared_texts (list[FormattableText]): ``<sst>`` entries in order.
        relationships (dict[str, str]): Workbook relationship id to archive path.
        root_relationships (dict[str, str]): Relationship type to archive path
            for ``_rels/.rels``.
        workbook_relationship_types (dict[str, str]): Relationship type to
            archive path for the non-sheet workbook relationships.
        sheets (list[SpecSheetEntry]): Sheets declared by the workbook.
        documents (dict[str, ET.Element]): Parsed parts, by archive path.
        coercer (CellCoercer): Value decoding and enforcement.
        workbook_path (str): Archive path of the workbook part.
    """

    archive: zipfile.ZipFile
    options: SpecReaderOptions
    plugins: PluginRegistry
    report: ReportReadBuilder
    workbook: Workbook
    styles: StyleReaderContainer
    coercer: CellCoercer
    shared_texts: list[FormattableText] = field(default_factory=list)
    relationships: dict[str, str] = field(default_factory=dict)
    root_relationships: dict[str, str] = field(default_factory=dict)
    workbook_relationship_types: dict[str, str] = field(default_factory=dict)
    sheets: list[SpecSheetEntry] = field(default_factory=list)
    documents: dict[str, ET.Element] = field(default_factory=dict)
    workbook_path: str = PATH_WORKBOOK

    @classmethod
    def new(
        cls,
        archive: zipfile.ZipFile,
        *,
        options: SpecReaderOptions,
        plugins: PluginRegistry,
    ) -> "ReadContext":
        return cls(
            archive=archive,
            options=options,
            plugins=plugins,
            report=ReportReadBuilder(if_strict=options.enforce_strict_validation),
            workbook=Workbook(metadata=None, theme=None),
            styles=StyleReaderContainer.new(),
            coercer=CellCoercer(options),
        )

    def has_part(self, path: str) -> bool:
        try:
            self.archive.getinfo(path)
        except KeyError:
            return False
        return True

    def read_part(self, path: str) -> bytes | None:
        """Raw bytes of ``path``, ``None`` if the archive has no such entry."""
        if not self.has_part(path):
            return None
        return self.archive.read(path)

    def parse_part(self, path: str) -> ET.Element | None:
        """
        Parse ``path`` once per pass; ``None`` if the entry is absent.

        Raises:
            PackageIOError: If the entry is not well-formed XML, or declares
                entities or external references.
        """
        cached = self.documents.get(path)
        if cached is not None:
            return cached
        content = self.read_part(path)
        if content is None:
            return None
        try:
            root = DefusedET.fromstring(content)
        except ET.ParseError as exc:
            raise PackageIOError(f"Invalid XML in package part {path!r}: {exc}") from exc
        except DefusedXmlException as exc:
            raise PackageIOError(
                f"Forbidden XML construct in package part {path!r}: {exc!r}"
            ) from exc
        self.documents[path] = root
        return root

    def require_part(self, path: str) -> ET.Element:
        root = self.parse_part(path)
        if root is None:
            raise PackageIOError(f"Mandatory package part is missing: {path!r}")
        return root

    def read_enum(
        self, enum_cls: type[EnumT], raw: str | None, *, default: EnumT, what: str
    ) -> EnumT:
        """Decode an enum attribute; an unknown value degrades to ``default``."""
        if raw is None:
            return default
        try:
            return enum_cls(raw)
        except ValueError:
            self.report.tolerate(f"Unknown {what} {raw!r}, using {default.value!r}")
            return default

    def get_sheet_path(self, index: int) -> str:
        """
        Raises:
            PackageIOError: If the sheet has no resolvable relationship.
        """
        entry = self.sheets[index]
        if entry.path is None:
            raise PackageIOError(
                f"Sheet {entry.name!r} refers to a missing relationship {entry.rel_id!r}."
            )
        return entry.path

    def run_part_reader(self, part_id: EnumReaderPartId, *, index: int | None = None) -> None:
        entry = self.plugins.get(EnumPluginQueue.READER_PART, part_id.value)
        plugin = entry.create()
        plugin.init(self, descriptor=entry.descriptor, index=index)
        plugin.execute()

    def get_root_related_path(self, relationship_type: str, default: str) -> str:
        return self.root_relationships.get(relationship_type, default)

    def get_workbook_related_path(self, relationship_type: str, default: str) -> str:
        return self.workbook_relationship_types.get(relationship_type, default)
