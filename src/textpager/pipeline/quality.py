"""Post-decode quality scoring.

Scores decoded Unicode text for signs that the wrong encoding was used:
replacement characters and C0 controls that real text does not contain.
"""

from __future__ import annotations

import re

# U+FFFD plus every C0 control except tab, newline and carriage return.
_BAD_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffd]")


def quality_score(text: str) -> float:
    """Return the fraction of characters in *text* that look like text.

    1.0 = clean, 0.0 = nothing but replacement or control characters.
    Empty text scores 1.0.
    """
    if not text:
        return 1.0
    bad = sum(1 for _ in _BAD_CHARS.finditer(text))
    return 1.0 - bad / len(text)
