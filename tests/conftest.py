# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import pytest

from textpager.source import BytesSource


class FailingSource:
    """A source whose every open fails, like a revoked file permission."""

    def __init__(self, length: int | None = 10) -> None:
        self._length = length

    def open(self) -> BinaryIO:
        msg = "permission denied"
        raise PermissionError(msg)

    def length(self) -> int | None:
        return self._length

    def display_name(self) -> str:
        return "failing.txt"


class UnderreportingSource(BytesSource):
    """A source that claims to be smaller than it is."""

    def length(self) -> int | None:
        return 1


@pytest.fixture
def failing_source() -> FailingSource:
    return FailingSource()


@pytest.fixture
def numbered_lines() -> bytes:
    """Two hundred short UTF-8 lines, about 2 KiB in total."""
    return "".join(f"line {i} – ok\n" for i in range(200)).encode("utf-8")


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper that writes bytes to a file under ``tmp_path``."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
