from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpecWriteOptions:
    compression_level: int = 6
    # Emit an empty `sheet1` when the workbook has no worksheet; a package
    # without any sheet is rejected by spreadsheet applications.
    if_emit_default_sheet: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.compression_level <= 9:
            raise ValueError(
                f"Arg `compression_level` must be within [0, 9], got {self.compression_level}."
            )
