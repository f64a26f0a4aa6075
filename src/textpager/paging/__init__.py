"""Random access to large documents through byte-offset pages."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class DecodedPage:
    """A page index paired with its decoded text.

    The text may contain U+FFFD where the page held malformed bytes.
    """

    index: int
    text: str
