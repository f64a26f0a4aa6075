# tests/test_source.py
from __future__ import annotations

from pathlib import Path

import pytest

from textpager.source import BytesSource, DocumentSource, FileSource


def test_file_source(tmp_path: Path):
    path = tmp_path / "book.txt"
    path.write_bytes(b"hello\n")
    source = FileSource(path)
    assert source.length() == 6
    assert source.display_name() == "book.txt"
    with source.open() as f:
        assert f.read() == b"hello\n"


def test_missing_file_source(tmp_path: Path):
    source = FileSource(tmp_path / "missing.txt")
    assert source.length() is None
    with pytest.raises(FileNotFoundError):
        source.open()


def test_bytes_source():
    source = BytesSource(b"abc", name="memo")
    assert source.length() == 3
    assert source.display_name() == "memo"
    with source.open() as f:
        f.seek(1)
        assert f.read() == b"bc"


def test_bytes_source_without_length():
    assert BytesSource(b"abc", report_length=False).length() is None


def test_sources_satisfy_protocol(tmp_path: Path):
    assert isinstance(FileSource(tmp_path / "x"), DocumentSource)
    assert isinstance(BytesSource(b""), DocumentSource)


def test_repr():
    assert repr(BytesSource(b"abc", name="memo")) == "BytesSource('memo', 3 bytes)"
