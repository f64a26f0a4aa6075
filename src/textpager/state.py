"""Immutable reader state and the reducer that updates it.

Every change to what the presentation layer sees goes through
:func:`reduce`.  Actions stamped with a generation older than the state's
belong to a document that has since been replaced and are ignored.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType

from textpager.enums import OpenMode

_NO_PAGES: Mapping[int, str] = MappingProxyType({})


@dataclasses.dataclass(frozen=True, slots=True)
class ReaderState:
    """Everything known about the current document.

    Derived values (``is_paged``, ``is_favorite``, ``loaded_pages``) are
    computed on access rather than stored.
    """

    generation: int = 0
    document_id: str | None = None
    display_name: str | None = None
    mode: OpenMode = OpenMode.NONE
    loading: bool = False
    content: str = ""
    charset_name: str | None = None
    error_message: str | None = None
    page_count: int = 0
    pages: Mapping[int, str] = dataclasses.field(default_factory=lambda: _NO_PAGES)
    favorites: frozenset[str] = frozenset()

    @property
    def is_paged(self) -> bool:
        return self.mode is OpenMode.PAGED

    @property
    def is_favorite(self) -> bool:
        return self.document_id is not None and self.document_id in self.favorites

    @property
    def loaded_pages(self) -> tuple[int, ...]:
        return tuple(sorted(self.pages))


@dataclasses.dataclass(frozen=True, slots=True)
class OpenStarted:
    generation: int
    document_id: str
    display_name: str


@dataclasses.dataclass(frozen=True, slots=True)
class WholeLoaded:
    generation: int
    text: str
    charset_name: str | None


@dataclasses.dataclass(frozen=True, slots=True)
class PagedReady:
    generation: int
    charset_name: str
    page_count: int


@dataclasses.dataclass(frozen=True, slots=True)
class OpenFailed:
    generation: int
    charset_name: str | None
    error_message: str


@dataclasses.dataclass(frozen=True, slots=True)
class PagesChanged:
    generation: int
    pages: Mapping[int, str]


@dataclasses.dataclass(frozen=True, slots=True)
class FavoritesChanged:
    favorites: frozenset[str]


@dataclasses.dataclass(frozen=True, slots=True)
class Closed:
    generation: int


Action = (
    OpenStarted
    | WholeLoaded
    | PagedReady
    | OpenFailed
    | PagesChanged
    | FavoritesChanged
    | Closed
)


def reduce(state: ReaderState, action: Action) -> ReaderState:
    """Return the state that results from applying *action* to *state*.

    Returns *state* itself when the action changes nothing, so callers can
    detect no-ops with ``is``.
    """
    if isinstance(action, FavoritesChanged):
        if action.favorites == state.favorites:
            return state
        return dataclasses.replace(state, favorites=frozenset(action.favorites))

    if isinstance(action, (OpenStarted, Closed)):
        if action.generation <= state.generation:
            return state
        fresh = ReaderState(generation=action.generation, favorites=state.favorites)
        if isinstance(action, Closed):
            return fresh
        return dataclasses.replace(
            fresh,
            document_id=action.document_id,
            display_name=action.display_name,
            loading=True,
        )

    if not isinstance(action, (WholeLoaded, PagedReady, OpenFailed, PagesChanged)):
        msg = f"unknown action {action!r}"
        raise TypeError(msg)

    if action.generation != state.generation:
        return state

    if isinstance(action, WholeLoaded):
        return dataclasses.replace(
            state,
            mode=OpenMode.WHOLE,
            loading=False,
            content=action.text,
            charset_name=action.charset_name,
            error_message=None,
        )
    if isinstance(action, PagedReady):
        return dataclasses.replace(
            state,
            mode=OpenMode.PAGED,
            loading=False,
            content="",
            charset_name=action.charset_name,
            error_message=None,
            page_count=action.page_count,
            pages=_NO_PAGES,
        )
    if isinstance(action, OpenFailed):
        return dataclasses.replace(
            state,
            mode=OpenMode.NONE,
            loading=False,
            content="",
            charset_name=action.charset_name,
            error_message=action.error_message,
            page_count=0,
            pages=_NO_PAGES,
        )
    if not state.is_paged:
        return state
    return dataclasses.replace(state, pages=MappingProxyType(dict(action.pages)))
