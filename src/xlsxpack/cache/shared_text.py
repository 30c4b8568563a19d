from dataclasses import dataclass

from ..spec.text import FormattableText, normalize_text


@dataclass(slots=True)
class SharedTextTable:
    """
    Insertion-ordered table of distinct cell texts.

    ``add`` returns the zero-based index a text was first assigned. Equality
    is exact (case and whitespace significant, ``" "`` differs from ``""``);
    a rich text without any run formatting counts as its plain string. The
    table order is the emission order of ``xl/sharedStrings.xml``, which cells
    refer to by index.
    """

    _index: dict[FormattableText, int]
    _entries: list[FormattableText]
    n_references: int = 0

    @classmethod
    def new(cls) -> "SharedTextTable":
        return cls(_index={}, _entries=[])

    def add(self, text: FormattableText) -> int:
        key = normalize_text(text)
        self.n_references += 1
        n_index = self._index.get(key)
        if n_index is None:
            n_index = len(self._entries)
            self._index[key] = n_index
            self._entries.append(key)
        return n_index

    def get(self, index: int) -> FormattableText:
        return self._entries[index]

    def list_entries(self) -> list[FormattableText]:
        return list(self._entries)

    @property
    def size(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        self._index.clear()
        self._entries.clear()
        self.n_references = 0
