# tests/test_loader.py
from __future__ import annotations

import logging

import pytest

from conftest import FailingSource, UnderreportingSource
from textpager.config import ReaderConfig
from textpager.enums import ErrorKind, OpenMode
from textpager.loader import (
    PagedResult,
    WholeFileResult,
    choose_mode,
    load_whole,
    open_document,
    open_paged,
    read_capped,
)
from textpager.source import BytesSource

_SMALL_PAGES = ReaderConfig(whole_file_threshold=10, target_page_bytes=4)


def test_choose_mode():
    assert choose_mode(None, 10) is OpenMode.PAGED
    assert choose_mode(-1, 10) is OpenMode.PAGED
    assert choose_mode(10, 10) is OpenMode.PAGED
    assert choose_mode(9, 10) is OpenMode.WHOLE
    assert choose_mode(0, 10) is OpenMode.WHOLE


def test_read_capped():
    source = BytesSource(b"abcdef")
    assert read_capped(source, 4) == (b"abcd", True)
    assert read_capped(source, 6) == (b"abcdef", False)
    assert read_capped(source, 10) == (b"abcdef", False)
    assert read_capped(source, 0) == (b"", True)


def test_read_capped_propagates_os_errors():
    with pytest.raises(OSError):
        read_capped(FailingSource(), 4)


def test_small_document_is_whole():
    text = "Grüße\nworld\n"
    result = open_document(BytesSource(text.encode()))
    assert isinstance(result, WholeFileResult)
    assert result.is_success
    assert result.text == text
    assert result.charset_name == "utf-8"
    assert result.error_message is None


def test_empty_document_whole():
    result = open_document(BytesSource(b""))
    assert isinstance(result, WholeFileResult)
    assert result.text == ""
    assert result.charset_name == ""
    assert result.is_success


def test_empty_document_paged():
    result = open_document(BytesSource(b"", report_length=False))
    assert isinstance(result, PagedResult)
    assert result.is_success
    assert result.charset_name == "utf-8"
    assert result.page_count == 1
    assert result.index is not None
    assert result.index.page_range(0).is_empty


def test_unknown_length_is_paged():
    result = open_document(BytesSource(b"hello\nworld", report_length=False))
    assert isinstance(result, PagedResult)
    assert result.page_count == 1


def test_large_document_is_paged():
    data = b"ab\ncd\nef\ngh\nij\n"
    result = open_document(BytesSource(data), _SMALL_PAGES)
    assert isinstance(result, PagedResult)
    assert result.charset_name == "utf-8"
    assert result.index is not None
    assert result.index.offsets == (0, 6, 12)


def test_threshold_boundary():
    config = ReaderConfig(whole_file_threshold=6)
    assert isinstance(open_document(BytesSource(b"12345"), config), WholeFileResult)
    assert isinstance(open_document(BytesSource(b"123456"), config), PagedResult)


def test_underreported_length_falls_back_to_paged(caplog: pytest.LogCaptureFixture):
    source = UnderreportingSource(b"line\n" * 10, name="liar.txt")
    with caplog.at_level(logging.INFO, logger="textpager"):
        result = open_document(source, _SMALL_PAGES)
    assert isinstance(result, PagedResult)
    assert result.is_success
    assert result.index is not None
    assert result.index.file_size == 50
    assert "switching to paged mode" in caplog.text


def test_load_whole_too_large():
    result = load_whole(BytesSource(b"abcdef"), max_bytes=3)
    assert result.error is ErrorKind.TOO_LARGE
    assert result.text is None
    assert not result.error.is_fatal


def test_binary_document():
    result = open_document(BytesSource(b"\x00\x01\x02\x03" * 50))
    assert isinstance(result, WholeFileResult)
    assert result.text is None
    assert result.error is ErrorKind.BINARY_CONTENT
    assert result.error_message == "not plain text"


def test_binary_document_paged():
    result = open_document(BytesSource(b"\x00\x01\x02\x03" * 50), _SMALL_PAGES)
    assert isinstance(result, PagedResult)
    assert result.error is ErrorKind.BINARY_CONTENT
    assert result.page_count == 0
    assert result.index is None


def test_read_failure_whole(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="textpager"):
        result = open_document(FailingSource(length=10))
    assert isinstance(result, WholeFileResult)
    assert result.error is ErrorKind.READ_FAILURE
    assert result.error_message == "read failed"
    assert "failing.txt" in caplog.text


def test_read_failure_paged():
    result = open_document(FailingSource(length=None))
    assert isinstance(result, PagedResult)
    assert result.error is ErrorKind.READ_FAILURE
    assert result.charset_name is None


def test_open_paged_sniffs_only_the_sample():
    # Invalid UTF-8 after the sample does not affect detection.
    data = b"abc\n" * 4 + b"\xff\xfe\xfd"
    config = ReaderConfig(sample_size=16, target_page_bytes=8)
    result = open_paged(BytesSource(data), config)
    assert result.charset_name == "utf-8"
    assert result.index is not None
    assert result.index.offsets == (0, 8, 16)


def test_open_paged_utf16():
    data = b"\xff\xfe" + "one\ntwo\nthree\n".encode("utf-16-le")
    result = open_paged(BytesSource(data), ReaderConfig(target_page_bytes=8))
    assert result.charset_name == "utf-16-le"
    assert result.index is not None
    assert result.index.offsets == (0, 10, 18)
