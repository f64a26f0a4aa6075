"""Reading-position markers and their mapping to lines.

A marker is what gets persisted between sessions: a character offset into
the whole document, or a page index plus a character offset into that page.
Markers are always captured at the start of a line, and are clamped to the
current content before use so that a marker saved against an older version
of the file (or a different detected encoding) still lands somewhere valid.
"""

from __future__ import annotations

import dataclasses
from bisect import bisect_right


class LineMap:
    """Start offsets of every line of a text, for offset-to-line lookups.

    Lines are separated by ``"\\n"``; a trailing newline starts an empty last
    line.
    """

    def __init__(self, text: str) -> None:
        self.text_length = len(text)
        starts = [0]
        i = text.find("\n")
        while i >= 0:
            starts.append(i + 1)
            i = text.find("\n", i + 1)
        self._starts = starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def clamp(self, offset: int) -> int:
        """Clamp *offset* into ``[0, text_length]``."""
        return min(max(offset, 0), self.text_length)

    def line_of(self, offset: int) -> int:
        """Return the 0-based line containing *offset* (clamped first)."""
        return bisect_right(self._starts, self.clamp(offset)) - 1

    def line_start(self, line: int) -> int:
        return self._starts[line]

    def line_range(self, line: int) -> tuple[int, int]:
        """Return ``(start, end)`` of *line*, excluding its newline."""
        start = self._starts[line]
        if line + 1 < len(self._starts):
            return start, self._starts[line + 1] - 1
        return start, self.text_length


def _as_line_map(text: str | LineMap) -> LineMap:
    return text if isinstance(text, LineMap) else LineMap(text)


def find_line_range(
    text: str | LineMap, line_number: int
) -> tuple[int, int] | None:
    """Return the character range of a 1-based line number, or None."""
    lines = _as_line_map(text)
    if not 1 <= line_number <= lines.line_count:
        return None
    return lines.line_range(line_number - 1)


@dataclasses.dataclass(frozen=True, slots=True)
class GlobalMarker:
    """Progress in a document decoded as a whole."""

    offset: int

    def to_ints(self) -> tuple[int]:
        return (self.offset,)

    @classmethod
    def from_ints(cls, offset: int | None) -> GlobalMarker:
        """Rebuild a marker from a stored value; missing values mean 0."""
        return cls(offset=int(offset or 0))


@dataclasses.dataclass(frozen=True, slots=True)
class PagedMarker:
    """Progress in a paged document: a page and an offset inside it."""

    page_index: int
    offset_in_page: int

    def to_ints(self) -> tuple[int, int]:
        return (self.page_index, self.offset_in_page)

    @classmethod
    def from_ints(
        cls, page_index: int | None, offset_in_page: int | None
    ) -> PagedMarker:
        """Rebuild a marker from stored values; missing values mean 0."""
        return cls(
            page_index=int(page_index or 0), offset_in_page=int(offset_in_page or 0)
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ScrollTarget:
    """Where to scroll to restore a marker.

    ``page_index`` is ``None`` in whole-file mode.  ``line`` is 0-based and
    counted within the page in paged mode; ``offset`` is the clamped marker
    offset and ``line_start`` the start of its line.
    """

    page_index: int | None
    line: int
    line_start: int
    offset: int


def capture_global(text: str | LineMap, visible_offset: int) -> GlobalMarker:
    """Marker for a whole-file view whose top shows *visible_offset*."""
    lines = _as_line_map(text)
    line = lines.line_of(visible_offset)
    return GlobalMarker(offset=lines.line_start(line))


def restore_global(text: str | LineMap, marker: GlobalMarker) -> ScrollTarget:
    """Locate the line a stored whole-file marker points into."""
    lines = _as_line_map(text)
    offset = lines.clamp(marker.offset)
    line = lines.line_of(offset)
    return ScrollTarget(
        page_index=None, line=line, line_start=lines.line_start(line), offset=offset
    )


def capture_paged(
    page_index: int, page_text: str | LineMap, visible_offset: int
) -> PagedMarker:
    """Marker for a paged view whose top shows *visible_offset* of a page."""
    lines = _as_line_map(page_text)
    line = lines.line_of(visible_offset)
    return PagedMarker(page_index=page_index, offset_in_page=lines.line_start(line))


def clamp_page(marker: PagedMarker, page_count: int) -> PagedMarker:
    """Clamp the page of *marker* to an existing page.

    Use this to pick which page to load before calling
    :func:`restore_paged`.
    """
    last = max(page_count - 1, 0)
    page_index = min(max(marker.page_index, 0), last)
    if page_index == marker.page_index:
        return marker
    return PagedMarker(page_index=page_index, offset_in_page=marker.offset_in_page)


def restore_paged(
    marker: PagedMarker, page_text: str | LineMap, page_count: int
) -> ScrollTarget:
    """Locate the line a stored paged marker points into.

    :param marker: The stored marker.
    :param page_text: Decoded text of page ``clamp_page(marker,
        page_count).page_index``.
    :param page_count: Number of pages of the current document.
    """
    page_index = clamp_page(marker, page_count).page_index
    lines = _as_line_map(page_text)
    offset = lines.clamp(marker.offset_in_page)
    line = lines.line_of(offset)
    return ScrollTarget(
        page_index=page_index,
        line=line,
        line_start=lines.line_start(line),
        offset=offset,
    )
