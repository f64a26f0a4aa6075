"""Encoding sniffing stages and shared types."""

from __future__ import annotations

import dataclasses

from textpager.enums import ErrorKind


@dataclasses.dataclass(frozen=True, slots=True)
class CodecCandidate:
    """An encoding worth trying, and whether a leading BOM belongs to it."""

    name: str
    strip_bom: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class DecodeAttempt:
    """A candidate that strict-decoded, with the decoded text and its score."""

    candidate: CodecCandidate
    text: str
    score: float


@dataclasses.dataclass(frozen=True, slots=True)
class SniffResult:
    """Outcome of a single detection call.

    Frozen dataclass holding the winning codec name (``None`` when nothing
    decoded), the error that ended detection, and for whole-file detection
    the decoded text so the caller does not decode twice.
    """

    charset: str | None
    error: ErrorKind | None = None
    text: str | None = None
    score: float = 0.0

    @property
    def is_success(self) -> bool:
        """Whether an encoding was identified and accepted."""
        return self.charset is not None and self.error is None

    def to_dict(self) -> dict[str, str | float | None]:
        """Convert this result to a plain dict.

        :returns: A dict with ``'charset'``, ``'error'`` and ``'score'`` keys.
        """
        return {
            "charset": self.charset,
            "error": self.error.message if self.error is not None else None,
            "score": self.score,
        }
