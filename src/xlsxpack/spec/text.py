from dataclasses import dataclass
from typing import TypeAlias

from .style import SpecFont


@dataclass(frozen=True, slots=True)
class SpecTextRun:
    text: str
    font: SpecFont | None = None


@dataclass(frozen=True, slots=True)
class SpecRichText:
    runs: tuple[SpecTextRun, ...]

    @classmethod
    def from_runs(cls, *runs: SpecTextRun | str) -> "SpecRichText":
        return cls(
            runs=tuple(r if isinstance(r, SpecTextRun) else SpecTextRun(r) for r in runs)
        )

    @property
    def plain(self) -> str:
        return "".join(r.text for r in self.runs)

    @property
    def is_formatted(self) -> bool:
        return any(r.font is not None for r in self.runs)


FormattableText: TypeAlias = str | SpecRichText


def normalize_text(value: FormattableText) -> FormattableText:
    """Collapse a rich text without any run formatting to its plain string."""
    if isinstance(value, SpecRichText) and not value.is_formatted:
        return value.plain
    return value
