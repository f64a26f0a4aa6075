"""Enumerations for textpager."""

import enum


class ErrorKind(enum.Enum):
    """Reasons an open or a page read can fail.

    Only :attr:`TOO_LARGE` and :attr:`PAGE_READ_ERROR` are recoverable: the
    first switches the open to paged mode, the second leaves a single page
    empty.
    """

    READ_FAILURE = "read_failure"
    TOO_LARGE = "too_large"
    BINARY_CONTENT = "binary_content"
    UNIDENTIFIABLE_ENCODING = "unidentifiable_encoding"
    LOW_QUALITY_DECODE = "low_quality_decode"
    PAGE_READ_ERROR = "page_read_error"

    @property
    def message(self) -> str:
        """User-facing message for this error."""
        return _MESSAGES[self]

    @property
    def is_fatal(self) -> bool:
        """Whether this error ends the open operation."""
        return self not in (ErrorKind.TOO_LARGE, ErrorKind.PAGE_READ_ERROR)


# A low-quality decode is indistinguishable from binary content to the user.
_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.READ_FAILURE: "read failed",
    ErrorKind.TOO_LARGE: "file too large",
    ErrorKind.BINARY_CONTENT: "not plain text",
    ErrorKind.UNIDENTIFIABLE_ENCODING: "cannot identify encoding",
    ErrorKind.LOW_QUALITY_DECODE: "not plain text",
    ErrorKind.PAGE_READ_ERROR: "page could not be read",
}


class OpenMode(enum.Enum):
    """How a document is held in memory."""

    NONE = "none"
    WHOLE = "whole"
    PAGED = "paged"
