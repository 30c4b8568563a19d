import re

# A high surrogate followed by a low one is a valid pair (only present in a
# ``str`` decoded with ``surrogatepass``); it must be matched before the
# single-surrogate branch of the illegal class.
_C_PAIR = "[\ud800-\udbff][\udc00-\udfff]"
_C_ILLEGAL = "\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff"
_C_ASTRAL = "\U00010000-\U0010ffff"

_RE_TEXT = re.compile(f"{_C_PAIR}|[<>&{_C_ILLEGAL}{_C_ASTRAL}]")
_RE_ATTRIBUTE = re.compile(f"{_C_PAIR}|[<>&\"{_C_ILLEGAL}{_C_ASTRAL}]")

_DICT_ENTITIES: dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
}


def _replace_match(match: re.Match[str]) -> str:
    c_token = match.group(0)
    if len(c_token) == 2:
        n_high, n_low = ord(c_token[0]), ord(c_token[1])
        n_code = 0x10000 + ((n_high - 0xD800) << 10) + (n_low - 0xDC00)
        return f"&#x{n_code:X};"

    c_entity = _DICT_ENTITIES.get(c_token)
    if c_entity is not None:
        return c_entity

    n_code = ord(c_token)
    if n_code > 0xFFFF:
        return f"&#x{n_code:X};"
    # Illegal control char, lone surrogate or 0xFFFE/0xFFFF.
    return " "


def escape_text(value: str | None) -> str:
    """
    Convert arbitrary text into XML element content.

    ``<``, ``>`` and ``&`` become named entities; characters XML 1.0 cannot
    carry become a single space; supplementary-plane characters (and valid
    surrogate pairs) become ``&#x...;`` references. ``None`` yields ``""``.

    Examples:
        >>> escape_text("a<b>c&d")
        'a&lt;b&gt;c&amp;d'
        >>> escape_text("\\x01")
        ' '
    """
    if value is None:
        return ""
    return _RE_TEXT.sub(_replace_match, value)


def escape_attribute(value: str | None) -> str:
    """Same as :func:`escape_text`, additionally escaping ``"``."""
    if value is None:
        return ""
    return _RE_ATTRIBUTE.sub(_replace_match, value)
