"""Tunable configuration for opening and paging documents."""

from __future__ import annotations

import dataclasses

from textpager._utils import (
    DEFAULT_CACHE_CAPACITY,
    DEFAULT_PAGE_BYTES,
    DEFAULT_PREFETCH_RADIUS,
    DEFAULT_QUALITY_THRESHOLD,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_WHOLE_FILE_THRESHOLD,
    _validate_fraction,
    _validate_non_negative_int,
    _validate_positive_int,
)


@dataclasses.dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Heuristic constants used by the open pipeline and the reader session.

    None of the defaults are load-bearing; they were picked for a
    phone-sized viewport and a few hundred KiB of decoded text in memory.

    :param whole_file_threshold: Documents with a known length below this
        many bytes are decoded in one piece.
    :param sample_size: Bytes sampled to sniff a paged document's encoding.
    :param target_page_bytes: Bytes after which the next newline ends a page.
    :param quality_threshold: Minimum quality score of the winning decode.
    :param cache_capacity: Decoded pages kept by the session.
    :param prefetch_radius: Pages loaded on each side of the visible page.
    """

    whole_file_threshold: int = DEFAULT_WHOLE_FILE_THRESHOLD
    sample_size: int = DEFAULT_SAMPLE_SIZE
    target_page_bytes: int = DEFAULT_PAGE_BYTES
    quality_threshold: float = DEFAULT_QUALITY_THRESHOLD
    cache_capacity: int = DEFAULT_CACHE_CAPACITY
    prefetch_radius: int = DEFAULT_PREFETCH_RADIUS

    def __post_init__(self) -> None:
        _validate_positive_int("whole_file_threshold", self.whole_file_threshold)
        _validate_positive_int("sample_size", self.sample_size)
        _validate_positive_int("target_page_bytes", self.target_page_bytes)
        _validate_fraction("quality_threshold", self.quality_threshold)
        _validate_positive_int("cache_capacity", self.cache_capacity)
        _validate_non_negative_int("prefetch_radius", self.prefetch_radius)
