"""Opening documents: whole-file decode or sampled detection plus paging."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from textpager._utils import (
    DEFAULT_QUALITY_THRESHOLD,
    READ_CHUNK_SIZE,
    _validate_non_negative_int,
)
from textpager.config import ReaderConfig
from textpager.enums import ErrorKind, OpenMode
from textpager.paging.index import PageIndex, build_page_index
from textpager.pipeline.sniffer import detect, detect_sample
from textpager.source import DocumentSource

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class WholeFileResult:
    """A document decoded in one piece.

    ``text`` is ``None`` whenever ``error`` is set.  ``charset_name`` is
    ``""`` for an empty document and may be set alongside an error when the
    best decode was rejected for low quality.
    """

    text: str | None
    charset_name: str | None
    error: ErrorKind | None = None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error is not None else None

    @property
    def is_success(self) -> bool:
        return self.text is not None and self.error is None


@dataclasses.dataclass(frozen=True, slots=True)
class PagedResult:
    """A document opened for page-by-page reading."""

    page_count: int
    charset_name: str | None
    error: ErrorKind | None = None
    index: PageIndex | None = None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error is not None else None

    @property
    def is_success(self) -> bool:
        return self.index is not None and self.error is None


OpenResult = WholeFileResult | PagedResult

_WHOLE_READ_FAILED = WholeFileResult(
    text=None, charset_name=None, error=ErrorKind.READ_FAILURE
)
_WHOLE_TOO_LARGE = WholeFileResult(
    text=None, charset_name=None, error=ErrorKind.TOO_LARGE
)
_PAGED_READ_FAILED = PagedResult(
    page_count=0, charset_name=None, error=ErrorKind.READ_FAILURE
)


def choose_mode(length: int | None, whole_file_threshold: int) -> OpenMode:
    """Pick whole-file mode for known lengths below the threshold."""
    if length is None or length < 0 or length >= whole_file_threshold:
        return OpenMode.PAGED
    return OpenMode.WHOLE


def read_capped(source: DocumentSource, max_bytes: int) -> tuple[bytes, bool]:
    """Read at most *max_bytes* bytes of *source*.

    :returns: ``(data, truncated)`` where *truncated* is True when the
        source holds more than *max_bytes* bytes.
    :raises OSError: If the source cannot be opened or read.
    """
    _validate_non_negative_int("max_bytes", max_bytes)
    parts: list[bytes] = []
    total = 0
    with source.open() as handle:
        # One byte past the cap tells a full-size document from a larger one.
        while total <= max_bytes:
            chunk = handle.read(min(READ_CHUNK_SIZE, max_bytes + 1 - total))
            if not chunk:
                break
            parts.append(chunk)
            total += len(chunk)
    data = b"".join(parts)
    return data[:max_bytes], total > max_bytes


def load_whole(
    source: DocumentSource,
    max_bytes: int,
    quality_threshold: float = DEFAULT_QUALITY_THRESHOLD,
) -> WholeFileResult:
    """Read and decode a whole document of at most *max_bytes* bytes.

    A larger document yields :attr:`ErrorKind.TOO_LARGE` without decoding
    anything, so the caller can fall back to paged mode.
    """
    try:
        data, truncated = read_capped(source, max_bytes)
    except OSError as e:
        logger.warning("%s: read failed: %s", source.display_name(), e)
        return _WHOLE_READ_FAILED

    if truncated:
        return _WHOLE_TOO_LARGE

    result = detect(data, quality_threshold=quality_threshold)
    if not result.is_success:
        return WholeFileResult(
            text=None, charset_name=result.charset, error=result.error
        )
    return WholeFileResult(text=result.text, charset_name=result.charset)


def open_paged(
    source: DocumentSource,
    config: ReaderConfig | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> PagedResult:
    """Sniff the head of a document and build its page index.

    :param source: The document.
    :param config: Sample size, page size and quality threshold.
    :param should_stop: Polled while indexing; see
        :func:`~textpager.paging.index.build_page_index`.
    :raises IndexingCancelled: If *should_stop* asked to stop.
    """
    config = config or ReaderConfig()
    name = source.display_name()
    try:
        sample, _ = read_capped(source, config.sample_size)
    except OSError as e:
        logger.warning("%s: read failed: %s", name, e)
        return _PAGED_READ_FAILED

    sniff = detect_sample(
        sample,
        sample_size=config.sample_size,
        quality_threshold=config.quality_threshold,
    )
    if not sniff.is_success or sniff.charset is None:
        return PagedResult(
            page_count=0, charset_name=sniff.charset, error=sniff.error
        )

    charset = sniff.charset
    try:
        with source.open() as handle:
            index = build_page_index(
                handle,
                charset,
                target_page_bytes=config.target_page_bytes,
                should_stop=should_stop,
            )
    except OSError as e:
        logger.warning("%s: read failed while indexing: %s", name, e)
        return PagedResult(
            page_count=0, charset_name=charset, error=ErrorKind.READ_FAILURE
        )

    logger.debug("%s: %s, %d pages", name, charset, index.page_count)
    return PagedResult(page_count=index.page_count, charset_name=charset, index=index)


def open_document(
    source: DocumentSource,
    config: ReaderConfig | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> OpenResult:
    """Open *source* in whole-file or paged mode.

    Documents with a known length below ``config.whole_file_threshold`` are
    decoded whole; larger documents, documents of unknown length, and
    documents that turn out larger than reported are paged.

    :param source: The document.
    :param config: Thresholds and sizes; defaults to :class:`ReaderConfig`.
    :param should_stop: Polled while indexing a paged document.
    :returns: A :class:`WholeFileResult` or a :class:`PagedResult`.
    """
    config = config or ReaderConfig()
    length = source.length()
    mode = choose_mode(length, config.whole_file_threshold)
    logger.debug("%s: length %s, %s mode", source.display_name(), length, mode.value)

    if mode is OpenMode.WHOLE:
        result = load_whole(
            source,
            max_bytes=config.whole_file_threshold - 1,
            quality_threshold=config.quality_threshold,
        )
        if result.error is not ErrorKind.TOO_LARGE:
            return result
        logger.info(
            "%s: larger than reported, switching to paged mode",
            source.display_name(),
        )

    return open_paged(source, config, should_stop=should_stop)
