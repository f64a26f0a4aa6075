"""Bounded LRU cache of decoded pages."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from textpager._utils import DEFAULT_CACHE_CAPACITY, _validate_positive_int

logger = logging.getLogger(__name__)


class PageCache:
    """Decoded pages keyed by page index, evicting the least recently used.

    Both :meth:`get` hits and :meth:`put` count as a use.  Safe to share
    between the thread that renders pages and the threads that load them.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY) -> None:
        _validate_positive_int("capacity", capacity)
        self.capacity = capacity
        self._pages: OrderedDict[int, str] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, page_index: int) -> str | None:
        """Return the cached text of *page_index*, or None on a miss."""
        with self._lock:
            text = self._pages.get(page_index)
            if text is not None:
                self._pages.move_to_end(page_index)
            return text

    def put(self, page_index: int, text: str) -> None:
        """Store *text* for *page_index*, replacing any previous entry."""
        with self._lock:
            self._pages[page_index] = text
            self._pages.move_to_end(page_index)
            while len(self._pages) > self.capacity:
                evicted, _ = self._pages.popitem(last=False)
                logger.debug("evicted page %d", evicted)

    def clear(self) -> None:
        """Drop every page, e.g. when another document is opened."""
        with self._lock:
            self._pages.clear()

    def indices(self) -> list[int]:
        """Cached page indices, least recently used first."""
        with self._lock:
            return list(self._pages)

    def snapshot(self) -> dict[int, str]:
        """Copy of the cached pages without touching their recency."""
        with self._lock:
            return dict(self._pages)

    def __contains__(self, page_index: object) -> bool:
        with self._lock:
            return page_index in self._pages

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
