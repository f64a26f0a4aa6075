"""Codec names, normalization and availability.

All encodings are identified by the name of their Python codec so that
``"UTF-16LE"``, ``"utf_16_le"`` and ``"utf-16-le"`` compare equal.
"""

from __future__ import annotations

import codecs

UTF8 = "utf-8"
UTF16_LE = "utf-16-le"
UTF16_BE = "utf-16-be"

# Legacy multi-byte encodings tried after the Unicode ones, in priority order.
LEGACY_CANDIDATES: tuple[str, ...] = ("gb18030", "gbk", "big5", "shift_jis", "euc-kr")

_SIXTEEN_BIT: frozenset[str] = frozenset({"utf-16-le", "utf-16-be"})


def normalize_encoding_name(name: str) -> str:
    """Normalize encoding name for comparison."""
    try:
        return codecs.lookup(name).name
    except LookupError:
        return name.lower().replace("_", "-")


def is_available(name: str) -> bool:
    """Return True if this interpreter ships a codec for *name*."""
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


def is_sixteen_bit(name: str | None) -> bool:
    """Return True for the byte-order-specific UTF-16 codecs."""
    if not name:
        return False
    return normalize_encoding_name(name) in _SIXTEEN_BIT


def newline_unit(name: str) -> bytes:
    """Return the byte sequence of a line feed in encoding *name*.

    :raises ValueError: If *name* is a 16-bit encoding without a byte order.
    """
    normalized = normalize_encoding_name(name)
    if normalized == "utf-16-le":
        return b"\n\x00"
    if normalized == "utf-16-be":
        return b"\x00\n"
    if normalized == "utf-16":
        msg = "utf-16 needs an explicit byte order to locate newlines"
        raise ValueError(msg)
    return b"\n"
