"""Strict decoding of candidate encodings."""

from __future__ import annotations

import codecs

from textpager.pipeline import CodecCandidate
from textpager.pipeline.bom import strip_bom


def strict_decode(
    data: bytes, candidate: CodecCandidate, *, final: bool = True
) -> str | None:
    """Decode *data* with *candidate*, or return None on any malformed input.

    :param data: The raw byte data to decode.
    :param candidate: The encoding to try.
    :param final: When False, an incomplete multi-byte sequence at the very
        end of *data* is left undecoded instead of failing the candidate.
        Used for samples cut off in the middle of a document.
    :returns: The decoded text, or ``None``.
    """
    if candidate.strip_bom:
        data = strip_bom(data, candidate.name)
    try:
        if final:
            return data.decode(candidate.name, errors="strict")
        decoder = codecs.getincrementaldecoder(candidate.name)(errors="strict")
        return decoder.decode(data, final=False)
    except (UnicodeDecodeError, LookupError):
        return None
