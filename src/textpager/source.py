"""Document sources: anything that can be opened as seekable bytes.

Platform specifics (content providers, permission grants, remote files) live
in adapters outside this package; they only need to satisfy
:class:`DocumentSource`.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class DocumentSource(Protocol):
    """A user-selected document.

    ``open()`` must return a fresh binary handle supporting ``read`` and
    ``seek``; callers close it.  ``length()`` may return ``None`` (or a
    negative number) when the size is unknown, which forces paged mode.
    Failures are reported by raising :class:`OSError`.
    """

    def open(self) -> BinaryIO: ...

    def length(self) -> int | None: ...

    def display_name(self) -> str: ...


class FileSource:
    """A document on the local filesystem."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def open(self) -> BinaryIO:
        return self.path.open("rb")

    def length(self) -> int | None:
        try:
            return self.path.stat().st_size
        except OSError:
            return None

    def display_name(self) -> str:
        return self.path.name

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


class BytesSource:
    """A document held in memory, e.g. a downloaded attachment.

    :param data: The document bytes.
    :param name: Name reported by :meth:`display_name`.
    :param report_length: When False, :meth:`length` returns ``None`` like a
        stream whose size cannot be queried.
    """

    def __init__(
        self, data: bytes, name: str = "<bytes>", report_length: bool = True
    ) -> None:
        self._data = bytes(data)
        self._name = name
        self._report_length = report_length

    def open(self) -> BinaryIO:
        return io.BytesIO(self._data)

    def length(self) -> int | None:
        return len(self._data) if self._report_length else None

    def display_name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"BytesSource({self._name!r}, {len(self._data)} bytes)"
