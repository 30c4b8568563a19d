from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol, TypeAlias

from .package import SpecPackagePart


class EnumPluginQueue(StrEnum):
    WRITER_PART = "writer.part"
    WRITER_PREPEND = "writer.prepend"
    WRITER_PACKAGE = "writer.package"
    WRITER_APPEND = "writer.append"
    READER_PART = "reader.part"
    READER_PACKAGE = "reader.package"
    READER_APPEND = "reader.append"


class EnumWriterPartId(StrEnum):
    WORKBOOK = "workbook"
    WORKSHEET = "worksheet"
    STYLES = "styles"
    SHARED_STRINGS = "shared-strings"
    METADATA_CORE = "metadata-core"
    METADATA_APP = "metadata-app"
    THEME = "theme"


class EnumReaderPartId(StrEnum):
    RELATIONSHIPS = "relationships"
    WORKBOOK = "workbook"
    STYLES = "styles"
    SHARED_STRINGS = "shared-strings"
    WORKSHEET = "worksheet"
    METADATA_CORE = "metadata-core"
    METADATA_APP = "metadata-app"
    THEME = "theme"
    PASSWORD = "password"


@dataclass(frozen=True, slots=True)
class SpecPluginDescriptor:
    """
    Metadata a plugin is registered with.

    Attributes:
        id: Unique id within ``queue``. Registrations sharing an id compete;
            the highest ``priority`` wins, the first registration wins ties.
        queue: Extension point the plugin binds to.
        priority: Conflict priority, default 0.
        part: Package part contributed by the plugin. Required on
            ``writer.package``; ``reader.package`` uses ``part.path`` as the
            archive entry handed to the plugin.
    """

    id: str
    queue: EnumPluginQueue
    priority: int = 0
    part: SpecPackagePart | None = None

    def __post_init__(self) -> None:
        if (
            self.queue in {EnumPluginQueue.WRITER_PACKAGE, EnumPluginQueue.READER_PACKAGE}
            and self.part is None
        ):
            raise ValueError(
                f"Plugin {self.id!r} on queue {self.queue.value!r} requires `part`."
            )


class Plugin(Protocol):
    """
    Contract of every plugin implementation.

    ``init`` is called exactly once before ``execute``. ``context`` is the
    current pass context (``WriteContext`` or ``ReadContext``); ``index`` is
    the zero-based sheet index for per-sheet part plugins, ``None`` otherwise.
    ``execute`` returns nothing; any exception aborts the whole operation.
    """

    def init(
        self,
        context: Any,
        *,
        descriptor: SpecPluginDescriptor,
        index: int | None = None,
    ) -> None: ...

    def execute(self) -> None: ...


PluginFactory: TypeAlias = Callable[[], Plugin]


@dataclass(frozen=True, slots=True)
class SpecPluginEntry:
    descriptor: SpecPluginDescriptor
    factory: PluginFactory
    n_seq: int  # global registration sequence

    def create(self) -> Plugin:
        return self.factory()
