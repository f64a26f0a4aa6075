# tests/test_state.py
from __future__ import annotations

import pytest

from textpager.enums import OpenMode
from textpager.state import (
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


def _opened(
    generation: int = 1, favorites: frozenset[str] = frozenset()
) -> ReaderState:
    state = ReaderState(favorites=favorites)
    return reduce(state, OpenStarted(generation, "doc", "doc.txt"))


def test_initial_state():
    state = ReaderState()
    assert state.mode is OpenMode.NONE
    assert not state.loading
    assert state.content == ""
    assert not state.pages
    assert not state.is_favorite


def test_open_started():
    state = _opened(favorites=frozenset({"doc"}))
    assert state.generation == 1
    assert state.loading
    assert state.document_id == "doc"
    assert state.display_name == "doc.txt"
    assert state.is_favorite


def test_stale_open_started_is_ignored():
    state = _opened(generation=2)
    assert reduce(state, OpenStarted(2, "other", "other.txt")) is state
    assert reduce(state, OpenStarted(1, "other", "other.txt")) is state


def test_whole_loaded():
    state = reduce(_opened(), WholeLoaded(1, "text", "utf-8"))
    assert state.mode is OpenMode.WHOLE
    assert not state.loading
    assert state.content == "text"
    assert state.charset_name == "utf-8"
    assert not state.is_paged


def test_result_for_older_generation_is_ignored():
    state = _opened(generation=2)
    assert reduce(state, WholeLoaded(1, "stale", "utf-8")) is state
    assert reduce(state, PagedReady(1, "utf-8", 3)) is state
    assert reduce(state, OpenFailed(1, None, "read failed")) is state
    assert reduce(state, PagesChanged(1, {0: "stale"})) is state


def test_paged_ready_and_pages():
    state = reduce(_opened(), PagedReady(1, "gb18030", 5))
    assert state.is_paged
    assert state.page_count == 5
    assert state.loaded_pages == ()
    state = reduce(state, PagesChanged(1, {3: "c", 1: "a"}))
    assert state.loaded_pages == (1, 3)
    assert state.pages[3] == "c"


def test_pages_are_read_only():
    state = reduce(_opened(), PagedReady(1, "utf-8", 2))
    pages = {0: "a"}
    state = reduce(state, PagesChanged(1, pages))
    pages[1] = "b"
    assert 1 not in state.pages
    with pytest.raises(TypeError):
        state.pages[1] = "b"  # type: ignore[index]


def test_pages_ignored_in_whole_mode():
    state = reduce(_opened(), WholeLoaded(1, "text", "utf-8"))
    assert reduce(state, PagesChanged(1, {0: "x"})) is state


def test_open_failed():
    state = reduce(_opened(), OpenFailed(1, None, "not plain text"))
    assert state.mode is OpenMode.NONE
    assert not state.loading
    assert state.error_message == "not plain text"
    assert state.content == ""


def test_new_open_clears_previous_document():
    state = reduce(_opened(), PagedReady(1, "utf-8", 4))
    state = reduce(state, PagesChanged(1, {0: "a"}))
    state = reduce(state, OpenStarted(2, "next", "next.txt"))
    assert state.mode is OpenMode.NONE
    assert not state.pages
    assert state.page_count == 0
    assert state.charset_name is None


def test_closed_keeps_favorites():
    state = reduce(_opened(favorites=frozenset({"a"})), WholeLoaded(1, "x", "utf-8"))
    state = reduce(state, Closed(2))
    assert state.generation == 2
    assert state.document_id is None
    assert state.content == ""
    assert state.favorites == frozenset({"a"})


def test_favorites_changed():
    state = _opened()
    updated = reduce(state, FavoritesChanged(frozenset({"doc"})))
    assert updated.is_favorite
    assert reduce(updated, FavoritesChanged(frozenset({"doc"}))) is updated


def test_unknown_action():
    with pytest.raises(TypeError, match="unknown action"):
        reduce(ReaderState(), object())  # type: ignore[arg-type]
