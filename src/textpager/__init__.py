"""Read large plain-text documents of unknown encoding, a page at a time."""

from __future__ import annotations

from textpager.config import ReaderConfig
from textpager.enums import ErrorKind, OpenMode
from textpager.loader import PagedResult, WholeFileResult, open_document
from textpager.paging import DecodedPage
from textpager.paging.index import PageIndex, build_page_index
from textpager.paging.reader import read_page
from textpager.pipeline import SniffResult
from textpager.pipeline.sniffer import detect, detect_sample
from textpager.progress import GlobalMarker, PagedMarker, ScrollTarget
from textpager.session import ReaderSession
from textpager.source import BytesSource, DocumentSource, FileSource
from textpager.state import ReaderState

__version__ = "1.0.0"
__all__ = [
    "BytesSource",
    "DecodedPage",
    "DocumentSource",
    "ErrorKind",
    "FileSource",
    "GlobalMarker",
    "OpenMode",
    "PageIndex",
    "PagedMarker",
    "PagedResult",
    "ReaderConfig",
    "ReaderSession",
    "ReaderState",
    "ScrollTarget",
    "SniffResult",
    "WholeFileResult",
    "build_page_index",
    "detect",
    "detect_sample",
    "open_document",
    "read_page",
]
