from dataclasses import dataclass, field

from loguru import logger

from ..errors import PackageIOError


@dataclass(frozen=True, slots=True)
class ReportWrite:
    """
    Summary of one write pass.

    Attributes:
        parts: Archive paths of the package parts, in relationship-id order.
        cnt_sheets: Number of worksheet parts written.
        cnt_styles: Distinct cell styles (``cellXfs`` entries).
        cnt_shared_texts: Distinct entries of the shared-text table.
        cnt_text_references: Cells referring to the shared-text table.
        plugins: Ids of plugins executed from the prepend/package/append queues.
    """

    parts: tuple[str, ...] = ()
    cnt_sheets: int = 0
    cnt_styles: int = 0
    cnt_shared_texts: int = 0
    cnt_text_references: int = 0
    plugins: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, int]:
        return {
            "cnt_parts": len(self.parts),
            "cnt_sheets": self.cnt_sheets,
            "cnt_styles": self.cnt_styles,
            "cnt_shared_texts": self.cnt_shared_texts,
            "cnt_text_references": self.cnt_text_references,
            "cnt_plugins": len(self.plugins),
        }

    def format(self, *, prefix: str = "[WRITE]") -> str:
        s = self.to_dict()
        return (
            f"{prefix} parts={s['cnt_parts']} sheets={s['cnt_sheets']} "
            f"styles={s['cnt_styles']} shared_texts={s['cnt_shared_texts']}"
            f"/{s['cnt_text_references']} plugins={s['cnt_plugins']}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class ReportRead:
    """
    Summary of one read pass.

    ``warnings`` lists every tolerated degrade (unknown enum value, dangling
    style reference, ...) in the order it happened.
    """

    cnt_sheets: int = 0
    cnt_cells: int = 0
    cnt_styles: int = 0
    cnt_shared_texts: int = 0
    warnings: tuple[str, ...] = ()

    @property
    def calculate_warning_count(self) -> int:
        return len(self.warnings)

    def to_dict(self) -> dict[str, int]:
        return {
            "cnt_sheets": self.cnt_sheets,
            "cnt_cells": self.cnt_cells,
            "cnt_styles": self.cnt_styles,
            "cnt_shared_texts": self.cnt_shared_texts,
            "cnt_warnings": self.calculate_warning_count,
        }

    def format(self, *, prefix: str = "[READ]") -> str:
        s = self.to_dict()
        return (
            f"{prefix} sheets={s['cnt_sheets']} cells={s['cnt_cells']} "
            f"styles={s['cnt_styles']} shared_texts={s['cnt_shared_texts']} "
            f"warnings={s['cnt_warnings']}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass(slots=True)
class ReportWriteBuilder:
    parts: list[str] = field(default_factory=list)
    cnt_sheets: int = 0
    cnt_styles: int = 0
    cnt_shared_texts: int = 0
    cnt_text_references: int = 0
    plugins: list[str] = field(default_factory=list)

    def add_plugin(self, plugin_id: str) -> None:
        self.plugins.append(plugin_id)

    def build(self) -> ReportWrite:
        return ReportWrite(
            parts=tuple(self.parts),
            cnt_sheets=self.cnt_sheets,
            cnt_styles=self.cnt_styles,
            cnt_shared_texts=self.cnt_shared_texts,
            cnt_text_references=self.cnt_text_references,
            plugins=tuple(self.plugins),
        )


@dataclass(slots=True)
class ReportReadBuilder:
    if_strict: bool = False
    cnt_sheets: int = 0
    cnt_cells: int = 0
    cnt_styles: int = 0
    cnt_shared_texts: int = 0
    warnings: list[str] = field(default_factory=list)

    def tolerate(self, msg: str) -> None:
        """
        Record a degraded decode.

        Raises:
            PackageIOError: In strict mode, instead of recording.
        """
        if self.if_strict:
            raise PackageIOError(f"Strict validation failed: {msg}")
        logger.warning(msg)
        self.warnings.append(str(msg))

    def build(self) -> ReportRead:
        return ReportRead(
            cnt_sheets=self.cnt_sheets,
            cnt_cells=self.cnt_cells,
            cnt_styles=self.cnt_styles,
            cnt_shared_texts=self.cnt_shared_texts,
            warnings=tuple(self.warnings),
        )
