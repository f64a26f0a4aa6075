"""Internal shared utilities for textpager."""

from __future__ import annotations

#: Documents at or above this many bytes are opened in paged mode.
DEFAULT_WHOLE_FILE_THRESHOLD: int = 5_000_000

#: Number of leading bytes sampled to sniff the encoding of a paged document.
DEFAULT_SAMPLE_SIZE: int = 256 * 1024

#: Approximate page size; pages end on the first newline after this many bytes.
DEFAULT_PAGE_BYTES: int = 128 * 1024

#: Minimum quality score for the winning decode.
DEFAULT_QUALITY_THRESHOLD: float = 0.90

#: Decoded pages kept in memory (visible page plus prefetch window).
DEFAULT_CACHE_CAPACITY: int = 10

#: Pages requested on each side of the visible page.
DEFAULT_PREFETCH_RADIUS: int = 2

#: Read buffer used by streaming passes.
READ_CHUNK_SIZE: int = 64 * 1024


def _validate_positive_int(name: str, value: int) -> None:
    """Raise ValueError if *value* is not a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{name} must be a positive integer"
        raise ValueError(msg)


def _validate_non_negative_int(name: str, value: int) -> None:
    """Raise ValueError if *value* is not a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"{name} must be a non-negative integer"
        raise ValueError(msg)


def _validate_fraction(name: str, value: float) -> None:
    """Raise ValueError if *value* is not a number in [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{name} must be a number between 0 and 1"
        raise ValueError(msg)
    if not 0.0 <= value <= 1.0:
        msg = f"{name} must be a number between 0 and 1"
        raise ValueError(msg)
