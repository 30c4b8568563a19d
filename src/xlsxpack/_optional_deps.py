from __future__ import annotations

from importlib import import_module
from types import ModuleType

DICT_EXTRA_BY_MODULE: dict[str, str] = {
    "polars": "polars",
}


def build_optional_dependency_error(
    *,
    feature: str,
    extra: str,
    missing_module: str | None,
) -> ModuleNotFoundError:
    missing_text = (
        f"Missing optional dependency `{missing_module}`."
        if missing_module
        else "Missing optional dependency."
    )
    return ModuleNotFoundError(
        f"{feature} is unavailable. {missing_text} "
        f"Install extras with `pip install \"xlsxpack[{extra}]\"` "
        f"or sync in development with `pdm sync -G dev -G {extra}`."
    )


def import_optional_module(module_name: str, *, feature: str) -> ModuleType:
    """
    Import a third-party module that is only needed by ``feature``.

    Raises:
        ModuleNotFoundError: With an install hint naming the extra, if the
            module (or one of its own imports) is missing.
    """
    c_root = module_name.split(".")[0]
    c_extra = DICT_EXTRA_BY_MODULE.get(c_root, c_root)
    try:
        return import_module(module_name)
    except ModuleNotFoundError as exc:
        if exc.name is not None and exc.name.split(".")[0] != c_root:
            raise
        raise build_optional_dependency_error(
            feature=feature,
            extra=c_extra,
            missing_module=exc.name,
        ) from exc
