from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "CellCoercer",
    "ReadContext",
    "StyleReaderContainer",
    "XlsxPackReader",
    "read",
    "read_async",
]

if TYPE_CHECKING:
    from .coercion import CellCoercer
    from .container import StyleReaderContainer
    from .context import ReadContext
    from .xlsx import XlsxPackReader, read, read_async

_ALIAS_ATTRS: dict[str, str] = {
    "CellCoercer": ".coercion",
    "StyleReaderContainer": ".container",
    "ReadContext": ".context",
    "XlsxPackReader": ".xlsx",
    "read": ".xlsx",
    "read_async": ".xlsx",
}


def __getattr__(name: str) -> Any:
    module_name = _ALIAS_ATTRS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    attr = getattr(import_module(module_name, package=__name__), name)
    globals()[name] = attr
    return attr


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
