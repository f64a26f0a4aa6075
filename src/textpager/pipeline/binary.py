"""Binary content detection."""

from __future__ import annotations

from typing import Literal

from textpager.charsets import is_sixteen_bit

# Only the head of the sample is inspected byte-by-byte.
_WINDOW_SIZE = 8 * 1024

# More than this fraction of control bytes in the window means binary.
_CONTROL_THRESHOLD = 0.02

# NUL bytes must exceed this fraction of the window to look like UTF-16 ...
_UTF16_MIN_NULL_FRACTION = 0.10
# ... and this fraction of them must sit on the same parity.
_UTF16_MIN_PARITY_FRACTION = 0.90

# Control bytes other than \t \n \r, plus DEL.  bytes.translate deletes them;
# len(data) - len(translated) gives the count in one C-level pass.
_CONTROL_BYTES = bytes([*range(0x09), 0x0B, 0x0C, *range(0x0E, 0x20), 0x7F])
# In UTF-16 text NUL is half of every ASCII code unit, not a control byte.
_CONTROL_BYTES_NO_NUL = _CONTROL_BYTES[1:]


def _null_counts(window: bytes) -> tuple[int, int]:
    """Return the number of NUL bytes at even and at odd positions."""
    return window[0::2].count(0), window[1::2].count(0)


def _looks_utf16(window: bytes) -> bool:
    even, odd = _null_counts(window)
    total = even + odd
    if total == 0:
        return False
    if total / len(window) <= _UTF16_MIN_NULL_FRACTION:
        return False
    return max(even, odd) / total > _UTF16_MIN_PARITY_FRACTION


def null_parity(data: bytes) -> Literal["even", "odd"] | None:
    """Return which byte positions hold most NULs in the head of *data*.

    UTF-16-BE text keeps the zero high byte of ASCII code units at even
    positions, UTF-16-LE at odd ones.

    :param data: The raw byte data to examine.
    :returns: ``"even"``, ``"odd"``, or ``None`` when there are no NULs or
        both parities hold the same number.
    """
    even, odd = _null_counts(data[:_WINDOW_SIZE])
    if even > odd:
        return "even"
    if odd > even:
        return "odd"
    return None


def is_binary(data: bytes, bom_hint: str | None = None) -> bool:
    """Return True if *data* does not look like text.

    :param data: The sampled bytes.
    :param bom_hint: Codec announced by a byte-order mark, if any.  A 16-bit
        hint means NUL bytes are expected, so a sample holding any is
        accepted as-is.  Without NULs the control-byte count still applies.
    """
    if not data:
        return False
    if b"\x00" in data and is_sixteen_bit(bom_hint):
        return False

    window = data[:_WINDOW_SIZE]
    utf16_like = False
    if b"\x00" in data:
        if not _looks_utf16(window):
            return True
        utf16_like = True

    delete = _CONTROL_BYTES_NO_NUL if utf16_like else _CONTROL_BYTES
    control_count = len(window) - len(window.translate(None, delete))
    return control_count / len(window) > _CONTROL_THRESHOLD
