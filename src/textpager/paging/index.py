"""Page index construction in one streaming pass.

Pages end immediately after the first newline found once at least
``target_page_bytes`` bytes have accumulated, so no page splits a line and,
because a newline is always a whole code unit, no page splits a character.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from typing import BinaryIO

from textpager._utils import (
    DEFAULT_PAGE_BYTES,
    READ_CHUNK_SIZE,
    _validate_positive_int,
)
from textpager.charsets import newline_unit

logger = logging.getLogger(__name__)


class IndexingCancelled(Exception):
    """Raised when a page index build is abandoned midway."""


@dataclasses.dataclass(frozen=True, slots=True)
class PageRange:
    """Half-open byte interval ``[start, end)`` of one page."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


@dataclasses.dataclass(frozen=True, slots=True)
class PageIndex:
    """Start offsets of every page of a document, plus its total size.

    ``offsets[0]`` is always 0 and offsets strictly increase; every offset
    is below ``file_size`` except the lone 0 of an empty document.  The last
    page runs to ``file_size``.
    """

    offsets: tuple[int, ...]
    file_size: int

    def __post_init__(self) -> None:
        if not self.offsets or self.offsets[0] != 0:
            msg = "page offsets must start at 0"
            raise ValueError(msg)
        if any(b <= a for a, b in zip(self.offsets, self.offsets[1:])):
            msg = "page offsets must be strictly increasing"
            raise ValueError(msg)
        if self.file_size < 0 or (
            len(self.offsets) > 1 and self.offsets[-1] >= self.file_size
        ):
            msg = "page offsets must lie inside the file"
            raise ValueError(msg)

    @property
    def page_count(self) -> int:
        return len(self.offsets)

    def page_range(self, page_index: int) -> PageRange:
        """Return the byte range of page *page_index*.

        :raises IndexError: If the page does not exist.
        """
        if not 0 <= page_index < len(self.offsets):
            msg = f"page {page_index} out of range (0..{len(self.offsets) - 1})"
            raise IndexError(msg)
        start = self.offsets[page_index]
        if page_index + 1 < len(self.offsets):
            end = self.offsets[page_index + 1]
        else:
            end = self.file_size
        return PageRange(start, end)


class PageIndexBuilder:
    """Streaming page splitter.

    Implements a feed/close pattern so a document of any size can be indexed
    with constant memory besides the offset list.

    :param charset: Encoding of the document.  UTF-16 variants are scanned
        in 2-byte code units aligned to the start of the document; every
        other encoding is scanned byte by byte for 0x0A.
    :param target_page_bytes: Bytes after which the next newline ends a page.
    """

    def __init__(
        self, charset: str, target_page_bytes: int = DEFAULT_PAGE_BYTES
    ) -> None:
        _validate_positive_int("target_page_bytes", target_page_bytes)
        self.charset = charset
        self._newline = newline_unit(charset)
        self._unit = len(self._newline)
        self._target = target_page_bytes
        self.reset()

    def reset(self) -> None:
        """Reset the builder to its initial state for reuse."""
        self._offsets: list[int] = [0]
        self._consumed = 0
        # Odd byte of a 16-bit code unit split across two chunks.
        self._carry = b""
        # First absolute position at which a newline ends the current page.
        self._split_from = self._target - self._unit
        self._closed = False

    def feed(self, chunk: bytes | bytearray) -> None:
        """Scan the next chunk of the document.

        :raises ValueError: If called after :meth:`close` without a
            :meth:`reset`.
        """
        if self._closed:
            msg = "feed() called after close() without reset()"
            raise ValueError(msg)
        if not chunk:
            return

        data = self._carry + bytes(chunk) if self._carry else bytes(chunk)
        usable = len(data) - len(data) % self._unit
        self._carry = data[usable:]

        base = self._consumed
        newline = self._newline
        unit = self._unit
        pos = max(self._split_from - base, 0)
        while pos < usable:
            hit = data.find(newline, pos, usable)
            if hit < 0:
                break
            if hit % unit:
                # 0x0A straddling two UTF-16 code units.
                pos = hit + 1
                continue
            boundary = base + hit + unit
            self._offsets.append(boundary)
            self._split_from = boundary + self._target - unit
            pos = self._split_from - base

        self._consumed += usable

    def close(self) -> PageIndex:
        """Finish scanning and return the :class:`PageIndex`."""
        file_size = self._consumed + len(self._carry)
        self._closed = True
        offsets = sorted({o for o in self._offsets if o < file_size}) or [0]
        logger.debug(
            "indexed %d bytes of %s into %d pages",
            file_size,
            self.charset,
            len(offsets),
        )
        return PageIndex(offsets=tuple(offsets), file_size=file_size)


def build_page_index(
    stream: BinaryIO,
    charset: str,
    target_page_bytes: int = DEFAULT_PAGE_BYTES,
    chunk_size: int = READ_CHUNK_SIZE,
    should_stop: Callable[[], bool] | None = None,
) -> PageIndex:
    """Index *stream* from its current position to end of stream.

    :param stream: A readable binary stream positioned at the document start.
    :param charset: Encoding of the document.
    :param target_page_bytes: Bytes after which the next newline ends a page.
    :param chunk_size: Read buffer size.
    :param should_stop: Polled before every read; returning True abandons
        the scan.
    :returns: The :class:`PageIndex` of the document.
    :raises IndexingCancelled: If *should_stop* asked to stop.
    """
    _validate_positive_int("chunk_size", chunk_size)
    builder = PageIndexBuilder(charset, target_page_bytes)
    while True:
        if should_stop is not None and should_stop():
            raise IndexingCancelled
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        builder.feed(chunk)
    return builder.close()
