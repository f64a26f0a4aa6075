"""Encoding sniffer: runs all detection stages in sequence."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from textpager._utils import (
    DEFAULT_QUALITY_THRESHOLD,
    DEFAULT_SAMPLE_SIZE,
    _validate_fraction,
    _validate_positive_int,
)
from textpager.charsets import (
    LEGACY_CANDIDATES,
    UTF8,
    UTF16_BE,
    UTF16_LE,
    is_available,
    normalize_encoding_name,
)
from textpager.enums import ErrorKind
from textpager.pipeline import CodecCandidate, DecodeAttempt, SniffResult
from textpager.pipeline.binary import is_binary, null_parity
from textpager.pipeline.bom import detect_bom
from textpager.pipeline.quality import quality_score
from textpager.pipeline.validity import strict_decode

logger = logging.getLogger(__name__)

_BINARY_RESULT = SniffResult(charset=None, error=ErrorKind.BINARY_CONTENT)
_UNIDENTIFIED_RESULT = SniffResult(
    charset=None, error=ErrorKind.UNIDENTIFIABLE_ENCODING
)


def build_candidates(
    bom_hint: str | None = None, parity: str | None = None
) -> tuple[CodecCandidate, ...]:
    """Return the encodings to try, most preferred first, without duplicates.

    :param bom_hint: Codec announced by a byte-order mark.  It goes first and
        is the only candidate allowed to strip that mark.
    :param parity: NUL parity of the data (see
        :func:`~textpager.pipeline.binary.null_parity`).  ``"even"`` moves
        UTF-16-BE ahead of UTF-16-LE.
    """
    ordered: list[CodecCandidate] = []
    if bom_hint is not None:
        ordered.append(CodecCandidate(bom_hint, strip_bom=True))

    utf16 = (UTF16_BE, UTF16_LE) if parity == "even" else (UTF16_LE, UTF16_BE)
    for name in (UTF8, *utf16, *LEGACY_CANDIDATES):
        if is_available(name):
            ordered.append(CodecCandidate(name))

    seen: set[str] = set()
    unique: list[CodecCandidate] = []
    for candidate in ordered:
        key = normalize_encoding_name(candidate.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return tuple(unique)


def iter_attempts(
    data: bytes, candidates: tuple[CodecCandidate, ...], *, final: bool = True
) -> Iterator[DecodeAttempt]:
    """Yield a scored :class:`DecodeAttempt` for each candidate that decodes."""
    for candidate in candidates:
        text = strict_decode(data, candidate, final=final)
        if text is None:
            logger.debug("%s: strict decode failed", candidate.name)
            continue
        score = quality_score(text)
        logger.debug("%s: decoded, quality %.4f", candidate.name, score)
        yield DecodeAttempt(candidate=candidate, text=text, score=score)


def _run_sniffer(
    data: bytes,
    *,
    final: bool,
    quality_threshold: float,
    keep_text: bool,
) -> SniffResult:
    bom_hint = detect_bom(data)

    if is_binary(data, bom_hint):
        logger.debug("rejected as binary (%d bytes sampled)", len(data))
        return _BINARY_RESULT

    parity = null_parity(data) if bom_hint is None else None
    candidates = build_candidates(bom_hint, parity)

    best: DecodeAttempt | None = None
    for attempt in iter_attempts(data, candidates, final=final):
        # Ties keep the earlier candidate; nothing can beat a perfect score.
        if best is None or attempt.score > best.score:
            best = attempt
        if best.score >= 1.0:
            break

    if best is None:
        return _UNIDENTIFIED_RESULT

    charset = best.candidate.name
    if best.score < quality_threshold:
        logger.debug(
            "best candidate %s scored %.4f, below %.2f",
            charset,
            best.score,
            quality_threshold,
        )
        return SniffResult(
            charset=charset, error=ErrorKind.LOW_QUALITY_DECODE, score=best.score
        )

    logger.debug("detected %s with quality %.4f", charset, best.score)
    return SniffResult(
        charset=charset,
        text=best.text if keep_text else None,
        score=best.score,
    )


def detect(
    data: bytes | bytearray,
    quality_threshold: float = DEFAULT_QUALITY_THRESHOLD,
) -> SniffResult:
    """Identify the encoding of a whole document and decode it.

    :param data: Every byte of the document.
    :param quality_threshold: Minimum quality score of the winning decode.
    :returns: A :class:`SniffResult` whose ``text`` holds the decoded
        document on success.  An empty document decodes to ``""`` with an
        empty charset name.
    """
    _validate_fraction("quality_threshold", quality_threshold)
    data = data if isinstance(data, bytes) else bytes(data)
    if not data:
        return SniffResult(charset="", text="", score=1.0)
    return _run_sniffer(
        data, final=True, quality_threshold=quality_threshold, keep_text=True
    )


def detect_sample(
    data: bytes | bytearray,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    quality_threshold: float = DEFAULT_QUALITY_THRESHOLD,
) -> SniffResult:
    """Identify the encoding of a document from its first *sample_size* bytes.

    A sample that fills *sample_size* is assumed to be cut from a longer
    document, so a multi-byte sequence split at its end does not disqualify
    an encoding.

    :param data: The head of the document (longer input is truncated).
    :param sample_size: Maximum number of bytes to examine.
    :param quality_threshold: Minimum quality score of the winning decode.
    :returns: A :class:`SniffResult` without decoded text.  An empty sample
        reports UTF-8.
    """
    _validate_positive_int("sample_size", sample_size)
    _validate_fraction("quality_threshold", quality_threshold)
    sample = bytes(data[:sample_size])
    if not sample:
        return SniffResult(charset=UTF8, score=1.0)
    return _run_sniffer(
        sample,
        final=len(sample) < sample_size,
        quality_threshold=quality_threshold,
        keep_text=False,
    )
