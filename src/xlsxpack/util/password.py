from typing import Protocol


class PasswordHasher(Protocol):
    """Narrow interface to a protection password hash algorithm."""

    def hash(self, password: str | None) -> str: ...


class LegacyPasswordHasher:
    """
    16-bit legacy hash used by ``sheetProtection@password`` and
    ``workbookProtection@workbookPassword``.

    This is an obfuscation scheme, not cryptography.

    Examples:
        >>> LegacyPasswordHasher().hash("x")
        'CEBA'
    """

    def hash(self, password: str | None) -> str:
        if not password:
            return ""
        n_hash = 0
        for _char in reversed(password):
            n_hash = ((n_hash >> 14) & 0x01) | ((n_hash << 1) & 0x7FFF)
            n_hash ^= ord(_char)
        n_hash = ((n_hash >> 14) & 0x01) | ((n_hash << 1) & 0x7FFF)
        n_hash ^= 0x8000 | (ord("N") << 8) | ord("K")
        n_hash ^= len(password)
        return f"{n_hash:X}"


LEGACY_PASSWORD_HASHER = LegacyPasswordHasher()
