"""Package part registry: banded order numbers to relationship ids.

Order-number bands keep the fixed parts (workbook, metadata, theme, styles,
shared strings) at the same relative position whatever the number of sheets
or plugin parts:

- workbook: 0
- root/metadata parts: from 1000
- sheets: 10000 + zero-based sheet index
- post-sheet and plugin parts: from 2,000,000
"""

from dataclasses import dataclass

from loguru import logger

from ..conf import N_ORDER_SHEET_START
from ..spec.package import EnumPartKind, SpecPackagePart, SpecRelatedPart


@dataclass(slots=True)
class PackagePartRegistry:
    _parts: dict[int, SpecPackagePart]
    _paths: set[str]

    @classmethod
    def new(cls) -> "PackagePartRegistry":
        return cls(_parts={}, _paths=set())

    def register(self, part: SpecPackagePart) -> SpecPackagePart:
        """
        Register a package part for the current assembly pass.

        Args:
            part (SpecPackagePart): Part descriptor.

        Raises:
            ValueError: If another part already holds the same order number or
                the same path.

        Returns:
            SpecPackagePart: The registered descriptor.
        """
        existing = self._parts.get(part.order_number)
        if existing is not None:
            raise ValueError(
                f"Order number {part.order_number} already taken by {existing.path!r} "
                f"(while registering {part.path!r})."
            )
        if part.path in self._paths:
            raise ValueError(f"Package part already registered: {part.path!r}")
        self._parts[part.order_number] = part
        self._paths.add(part.path)
        logger.debug(
            f"Registered part {part.path} ({part.kind.value}, order={part.order_number})"
        )
        return part

    def finalize(self) -> list[SpecRelatedPart]:
        """
        Sort registered parts by order number and assign relationship ids.

        The id of a part is its 1-based position in the sorted sequence, so ids
        are contiguous, gap-free and strictly increasing from 1.
        """
        l_sorted = sorted(self._parts.values(), key=lambda p: p.order_number)
        return [
            SpecRelatedPart(part=_part, relationship_id=_i)
            for _i, _part in enumerate(l_sorted, start=1)
        ]

    @staticmethod
    def get_sheet_index(part: SpecPackagePart) -> int:
        # Only defined for sheet parts; anything else is a caller bug.
        assert part.kind is EnumPartKind.SHEET, f"not a sheet part: {part.path!r}"
        return part.order_number - N_ORDER_SHEET_START

    def get_by_path(self, path: str) -> SpecPackagePart | None:
        if path not in self._paths:
            return None
        return next(p for p in self._parts.values() if p.path == path)

    def list_parts(self) -> list[SpecPackagePart]:
        return sorted(self._parts.values(), key=lambda p: p.order_number)

    def __len__(self) -> int:
        return len(self._parts)

    def reset(self) -> None:
        self._parts.clear()
        self._paths.clear()
