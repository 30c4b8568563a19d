from collections.abc import Iterator
from dataclasses import dataclass

from ..conf import N_CUSTOM_NUMBER_FORMAT_START
from ..spec.style import (
    EnumStyleComponent,
    SpecNumberFormat,
    SpecStyle,
    StyleComponent,
)

_TUP_COMPONENT_KINDS = (
    EnumStyleComponent.BORDER,
    EnumStyleComponent.FILL,
    EnumStyleComponent.FONT,
    EnumStyleComponent.NUMBER_FORMAT,
    EnumStyleComponent.CELL_XF,
    EnumStyleComponent.STYLE,
)


@dataclass(slots=True)
class StyleCache:
    """
    Structural-equality cache of style descriptors.

    Every component kind (border, fill, font, number format, cell xf) and the
    aggregate style has its own ordered table; an entry is keyed by the
    component itself, so lookup is a dict lookup on the dataclass hash and
    collisions are settled by dataclass equality. Indices are zero-based and
    stable for the lifetime of the cache.

    A cache belongs to one write pass and is not thread-safe.

    Examples:
        >>> cache = StyleCache.new()
        >>> cache.intern(SpecStyle()) == cache.intern(SpecStyle())
        True
    """

    _tables: dict[EnumStyleComponent, dict[object, int]]
    _custom_format_ids: dict[SpecNumberFormat, int]

    @classmethod
    def new(cls) -> "StyleCache":
        return cls(
            _tables={kind: {} for kind in _TUP_COMPONENT_KINDS},
            _custom_format_ids={},
        )

    def intern_component(self, component: StyleComponent) -> int:
        """
        Return the index of ``component`` within its kind, adding it if new.

        Custom number formats also receive their format id (164, 165, ...)
        on first sight.
        """
        dict_table = self._tables[component.kind]
        n_index = dict_table.get(component)
        if n_index is not None:
            return n_index
        n_index = len(dict_table)
        dict_table[component] = n_index
        if isinstance(component, SpecNumberFormat) and component.is_custom:
            self._custom_format_ids[component] = N_CUSTOM_NUMBER_FORMAT_START + len(
                self._custom_format_ids
            )
        return n_index

    def intern(self, style: SpecStyle) -> int:
        """
        Return the canonical index of ``style``, interning it on first sight.

        Components are interned first so the component tables always cover
        every registered style.
        """
        for _component in style.iter_components():
            self.intern_component(_component)
        dict_styles = self._tables[EnumStyleComponent.STYLE]
        n_index = dict_styles.get(style)
        if n_index is None:
            n_index = len(dict_styles)
            dict_styles[style] = n_index
        return n_index

    def get_index(self, component: StyleComponent | SpecStyle) -> int | None:
        return self._tables[component.kind].get(component)

    def get_number_format_id(self, number_format: SpecNumberFormat) -> int:
        """
        Return the ``numFmtId`` written for ``number_format``.

        Raises:
            KeyError: If a custom format was never interned.
        """
        if not number_format.is_custom:
            return number_format.number
        return self._custom_format_ids[number_format]

    def list_styles(self) -> list[SpecStyle]:
        return list(self._tables[EnumStyleComponent.STYLE])  # type: ignore[arg-type]

    def list_components(self, kind: EnumStyleComponent) -> list[StyleComponent]:
        return list(self._tables[kind])  # type: ignore[arg-type]

    def iter_custom_number_formats(self) -> Iterator[tuple[int, SpecNumberFormat]]:
        for _fmt, _id in self._custom_format_ids.items():
            yield _id, _fmt

    def count(self, kind: EnumStyleComponent) -> int:
        return len(self._tables[kind])

    @property
    def size(self) -> int:
        return self.count(EnumStyleComponent.STYLE)

    def reset(self) -> None:
        for _table in self._tables.values():
            _table.clear()
        self._custom_format_ids.clear()
