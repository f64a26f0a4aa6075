"""Asynchronous opening and paging of one document at a time."""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from textpager.config import ReaderConfig
from textpager.enums import ErrorKind, OpenMode
from textpager.loader import WholeFileResult, open_document
from textpager.paging import DecodedPage
from textpager.paging.cache import PageCache
from textpager.paging.index import IndexingCancelled, PageIndex
from textpager.paging.reader import read_page
from textpager.progress import (
    GlobalMarker,
    PagedMarker,
    ScrollTarget,
    capture_global,
    capture_paged,
    clamp_page,
    restore_global,
    restore_paged,
)
from textpager.source import DocumentSource
from textpager.state import (
    Action,
    Closed,
    FavoritesChanged,
    OpenFailed,
    OpenStarted,
    PagedReady,
    PagesChanged,
    ReaderState,
    WholeLoaded,
    reduce,
)

logger = logging.getLogger(__name__)

Listener = Callable[[ReaderState], None]


@dataclasses.dataclass(frozen=True, slots=True)
class _PagedDocument:
    """What a page load needs, captured once per successful paged open."""

    generation: int
    source: DocumentSource
    charset: str
    index: PageIndex


class ReaderSession:
    """Reading session that opens documents and loads their pages off-thread.

    Each :meth:`open` bumps a generation counter; work started for an older
    generation finishes quietly without touching the state, so switching
    documents never shows content from the previous one.  State changes are
    published to listeners registered with :meth:`subscribe`.

    :param config: Thresholds and sizes; defaults to :class:`ReaderConfig`.
    :param executor: Executor for open and page-load tasks.  When omitted the
        session owns a thread pool and shuts it down in :meth:`close`.
    :param favorites: Document ids the preference store marks as favorite.
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        executor: Executor | None = None,
        favorites: frozenset[str] = frozenset(),
    ) -> None:
        self.config = config or ReaderConfig()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="textpager"
        )
        self._lock = threading.Lock()
        self._generation = 0
        self._state = ReaderState(favorites=frozenset(favorites))
        self._document: _PagedDocument | None = None
        self._cache = PageCache(self.config.cache_capacity)
        self._in_flight: set[int] = set()
        self._open_future: Future[ReaderState] | None = None
        self._listeners: list[Listener] = []
        self._closed = False

    # -- state -------------------------------------------------------------

    @property
    def state(self) -> ReaderState:
        """The current immutable state."""
        with self._lock:
            return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new state; returns an unsubscribe."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def set_favorites(self, favorites: frozenset[str]) -> None:
        self._dispatch(FavoritesChanged(frozenset(favorites)))

    def _reduce_locked(self, action: Action) -> tuple[ReaderState, list[Listener]]:
        previous = self._state
        self._state = reduce(previous, action)
        if self._state is previous:
            return previous, []
        return self._state, list(self._listeners)

    def _dispatch(self, action: Action) -> ReaderState:
        with self._lock:
            state, listeners = self._reduce_locked(action)
        # Listeners may call back into the session.
        for listener in listeners:
            listener(state)
        return state

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    # -- opening -----------------------------------------------------------

    def open(
        self,
        source: DocumentSource,
        document_id: str | None = None,
        restore: PagedMarker | None = None,
    ) -> Future[ReaderState]:
        """Start opening *source*, superseding any document being opened.

        :param source: The document.
        :param document_id: Stable id used by the caller to key persisted
            progress; defaults to the display name.
        :param restore: Stored paged progress.  In paged mode its page and the
            pages on either side are loaded before the open completes.
        :returns: A future resolving to the state after the open.
        :raises RuntimeError: If the session is closed.
        """
        name = source.display_name()
        with self._lock:
            if self._closed:
                msg = "open() called on a closed session"
                raise RuntimeError(msg)
            self._generation += 1
            generation = self._generation
            self._document = None
            self._in_flight.clear()
            self._cache.clear()
            previous = self._open_future
        if previous is not None:
            previous.cancel()

        self._dispatch(OpenStarted(generation, document_id or name, name))
        future = self._executor.submit(self._run_open, generation, source, restore)
        with self._lock:
            if generation == self._generation:
                self._open_future = future
        return future

    def _run_open(
        self, generation: int, source: DocumentSource, restore: PagedMarker | None
    ) -> ReaderState:
        try:
            result = open_document(
                source,
                self.config,
                should_stop=lambda: not self._is_current(generation),
            )
        except IndexingCancelled:
            logger.debug("%s: open superseded while indexing", source.display_name())
            return self.state

        if not self._is_current(generation):
            logger.debug("%s: discarding superseded open", source.display_name())
            return self.state

        if isinstance(result, WholeFileResult):
            if result.is_success and result.text is not None:
                return self._dispatch(
                    WholeLoaded(generation, result.text, result.charset_name)
                )
            return self._dispatch(
                OpenFailed(generation, result.charset_name, result.error_message or "")
            )

        if not result.is_success or result.index is None:
            return self._dispatch(
                OpenFailed(generation, result.charset_name, result.error_message or "")
            )

        charset = result.charset_name or ""
        with self._lock:
            if generation != self._generation:
                return self._state
            self._document = _PagedDocument(generation, source, charset, result.index)
        self._dispatch(PagedReady(generation, charset, result.index.page_count))

        target = clamp_page(restore or PagedMarker(0, 0), result.index.page_count)
        first = target.page_index
        for page_index in (first, first - 1, first + 1):
            document = self._claim(page_index)
            if document is not None:
                self._load(document, page_index)
        return self.state

    # -- paging ------------------------------------------------------------

    def _claim(self, page_index: int) -> _PagedDocument | None:
        """Reserve *page_index* for loading, or None if there is nothing to do."""
        with self._lock:
            document = self._document
            if document is None:
                return None
            if not 0 <= page_index < document.index.page_count:
                return None
            if page_index in self._in_flight or page_index in self._cache:
                return None
            self._in_flight.add(page_index)
            return document

    def _load(
        self, document: _PagedDocument, page_index: int
    ) -> DecodedPage | None:
        page_range = document.index.page_range(page_index)
        text = read_page(document.source, document.charset, page_range)
        with self._lock:
            if document.generation != self._generation:
                return None
            self._in_flight.discard(page_index)
            if text is None:
                # Leave it unloaded so a later request retries.
                logger.warning(
                    "%s: page %d: %s",
                    document.source.display_name(),
                    page_index,
                    ErrorKind.PAGE_READ_ERROR.message,
                )
                return None
            self._cache.put(page_index, text)
            # Snapshot and reduce in one critical section.
            state, listeners = self._reduce_locked(
                PagesChanged(document.generation, self._cache.snapshot())
            )
        for listener in listeners:
            listener(state)
        return DecodedPage(page_index, text)

    def load_page(self, page_index: int) -> Future[DecodedPage | None] | None:
        """Load one page in the background.

        Out-of-range, already cached and already loading pages are ignored.

        :returns: A future resolving to the :class:`DecodedPage` (``None``
            if the load was superseded or failed), or ``None`` when nothing
            was started.
        """
        document = self._claim(page_index)
        if document is None:
            return None
        return self._executor.submit(self._load, document, page_index)

    def prefetch(
        self, center: int, radius: int | None = None
    ) -> list[Future[DecodedPage | None]]:
        """Load the pages within *radius* of *center* (config default)."""
        if radius is None:
            radius = self.config.prefetch_radius
        futures = []
        for page_index in range(center - radius, center + radius + 1):
            future = self.load_page(page_index)
            if future is not None:
                futures.append(future)
        return futures

    def page(self, page_index: int) -> str | None:
        """Return a loaded page, or None if it is not in memory."""
        return self._cache.get(page_index)

    # -- progress ----------------------------------------------------------

    def capture_progress(
        self, visible_offset: int, page_index: int | None = None
    ) -> GlobalMarker | PagedMarker | None:
        """Marker for the line at the top of the viewport.

        :param visible_offset: Character offset shown at the top of the
            viewport, in the document (whole-file mode) or in *page_index*.
        :param page_index: The page at the top of the viewport (paged mode).
        :returns: The marker, or None when the page is not loaded or no
            document is open.
        """
        state = self.state
        if state.is_paged:
            if page_index is None:
                return None
            text = self._cache.get(page_index)
            if text is None:
                return None
            return capture_paged(page_index, text, visible_offset)
        if state.mode is not OpenMode.WHOLE:
            return None
        return capture_global(state.content, visible_offset)

    def restore_progress(
        self, marker: GlobalMarker | PagedMarker
    ) -> ScrollTarget | None:
        """Scroll target for a stored marker.

        In paged mode the target page must be loaded; if it is not, a load
        is started and None is returned so the caller can retry.
        """
        state = self.state
        if isinstance(marker, PagedMarker):
            if not state.is_paged:
                return None
            page_index = clamp_page(marker, state.page_count).page_index
            text = self._cache.get(page_index)
            if text is None:
                self.load_page(page_index)
                return None
            return restore_paged(marker, text, state.page_count)
        if state.mode is not OpenMode.WHOLE:
            return None
        return restore_global(state.content, marker)

    # -- lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Forget the current document and stop the owned executor."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._generation += 1
            generation = self._generation
            self._document = None
            self._in_flight.clear()
            self._cache.clear()
        self._dispatch(Closed(generation))
        if self._owns_executor:
            self._executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self) -> ReaderSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
