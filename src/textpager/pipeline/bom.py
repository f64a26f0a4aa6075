"""Byte-order mark detection and removal."""

from __future__ import annotations

from textpager.charsets import UTF8, UTF16_BE, UTF16_LE, normalize_encoding_name

# UTF-32 marks are deliberately absent: FF FE 00 00 is read as a UTF-16-LE
# mark followed by a NUL code unit.
_BOMS: tuple[tuple[bytes, str], ...] = (
    (b"\xef\xbb\xbf", UTF8),
    (b"\xff\xfe", UTF16_LE),
    (b"\xfe\xff", UTF16_BE),
)


def detect_bom(data: bytes) -> str | None:
    """Return the codec announced by a BOM at the start of *data*, or None."""
    for bom_bytes, encoding in _BOMS:
        if data.startswith(bom_bytes):
            return encoding
    return None


def strip_bom(data: bytes, encoding: str | None = None) -> bytes:
    """Remove a leading BOM from *data*.

    :param data: The raw bytes.
    :param encoding: When given, only a BOM announcing this encoding is
        removed; a foreign BOM is left in place.
    :returns: *data* without its BOM.
    """
    for bom_bytes, bom_encoding in _BOMS:
        if not data.startswith(bom_bytes):
            continue
        if encoding is not None and normalize_encoding_name(encoding) != bom_encoding:
            return data
        return data[len(bom_bytes) :]
    return data
