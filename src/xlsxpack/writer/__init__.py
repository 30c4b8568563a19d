from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "WriteContext",
    "XlsxPackWriter",
    "save",
    "save_async",
]

if TYPE_CHECKING:
    from .context import WriteContext
    from .xlsx import XlsxPackWriter, save, save_async

_ALIAS_ATTRS: dict[str, str] = {
    "WriteContext": ".context",
    "XlsxPackWriter": ".xlsx",
    "save": ".xlsx",
    "save_async": ".xlsx",
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
