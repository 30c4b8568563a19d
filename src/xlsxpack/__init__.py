from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "Cell",
    "Workbook",
    "Worksheet",
    "XlsxPackReader",
    "XlsxPackWriter",
    "build_default_plugin_registry",
    "read",
    "read_async",
    "save",
    "save_async",
]

try:
    __version__ = version("xlsxpack")
except PackageNotFoundError:
    __version__ = "0.0.0"

if TYPE_CHECKING:
    from xlsxpack.model import Cell, Workbook, Worksheet
    from xlsxpack.plugins import build_default_plugin_registry
    from xlsxpack.reader.xlsx import XlsxPackReader, read, read_async
    from xlsxpack.writer.xlsx import XlsxPackWriter, save, save_async

_ALIAS_ATTRS: dict[str, str] = {
    "Cell": "xlsxpack.model",
    "Workbook": "xlsxpack.model",
    "Worksheet": "xlsxpack.model",
    "build_default_plugin_registry": "xlsxpack.plugins",
    "XlsxPackReader": "xlsxpack.reader.xlsx",
    "read": "xlsxpack.reader.xlsx",
    "read_async": "xlsxpack.reader.xlsx",
    "XlsxPackWriter": "xlsxpack.writer.xlsx",
    "save": "xlsxpack.writer.xlsx",
    "save_async": "xlsxpack.writer.xlsx",
}


def __getattr__(name: str) -> Any:
    module_name = _ALIAS_ATTRS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    attr = getattr(import_module(module_name), name)
    globals()[name] = attr
    return attr


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
