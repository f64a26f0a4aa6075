"""Seek-and-decode of single pages."""

from __future__ import annotations

import logging
from typing import BinaryIO

from textpager.paging.index import PageRange
from textpager.pipeline.bom import strip_bom
from textpager.source import DocumentSource

logger = logging.getLogger(__name__)


def read_exactly(handle: BinaryIO, start: int, size: int) -> bytes:
    """Read *size* bytes at *start*, fewer only if the stream ends first."""
    handle.seek(start)
    parts: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = handle.read(remaining)
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def decode_page(data: bytes, charset: str, *, at_start: bool) -> str:
    """Decode page bytes, replacing malformed sequences with U+FFFD.

    :param data: Raw bytes of the page.
    :param charset: Encoding of the document.
    :param at_start: True for the page at byte 0, the only one that can
        begin with a byte-order mark.
    """
    if at_start:
        data = strip_bom(data, charset)
    return data.decode(charset, errors="replace")


def read_page(
    source: DocumentSource, charset: str, page_range: PageRange
) -> str | None:
    """Return the decoded text of one page.

    A page is decoded on its own; a malformed byte only affects the
    characters around it.  An unreadable page yields ``None`` and a warning
    instead of an exception, so one bad range never ends a reading session.

    :param source: The document to read from.
    :param charset: Encoding of the document.
    :param page_range: Byte range of the page, from
        :meth:`~textpager.paging.index.PageIndex.page_range`.
    :returns: The decoded page (``""`` for an empty range or one holding
        only a byte-order mark), or ``None`` when it cannot be read.
    """
    if page_range.is_empty:
        return ""
    try:
        with source.open() as handle:
            data = read_exactly(handle, page_range.start, page_range.size)
    except OSError as e:
        logger.warning(
            "%s: cannot read bytes %d-%d: %s",
            source.display_name(),
            page_range.start,
            page_range.end,
            e,
        )
        return None
    if len(data) < page_range.size:
        logger.debug(
            "%s: short read at %d (%d of %d bytes)",
            source.display_name(),
            page_range.start,
            len(data),
            page_range.size,
        )
    return decode_page(data, charset, at_start=page_range.start == 0)
