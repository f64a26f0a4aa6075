"""Command-line interface for textpager."""

from __future__ import annotations

import argparse
import contextlib
import logging
import shutil
import sys
import tempfile
from pathlib import Path

import textpager
from textpager.config import ReaderConfig
from textpager.enums import ErrorKind
from textpager.loader import OpenResult, WholeFileResult, open_document
from textpager.paging.reader import read_page
from textpager.source import DocumentSource, FileSource


def _describe(name: str, result: OpenResult, minimal: bool) -> str:
    # An empty document has no charset to speak of.
    charset = result.charset_name or "none"
    if minimal:
        return charset
    if result.error_message is not None:
        return f"{name}: error: {result.error_message}"
    if isinstance(result, WholeFileResult):
        return f"{name}: {charset} (whole)"
    unit = "page" if result.page_count == 1 else "pages"
    return f"{name}: {charset} (paged, {result.page_count} {unit})"


def _has_page(result: OpenResult, page: int) -> bool:
    if isinstance(result, WholeFileResult):
        return page == 0
    return result.index is not None and 0 <= page < result.index.page_count


def _page_text(source: DocumentSource, result: OpenResult, page: int) -> str | None:
    if isinstance(result, WholeFileResult):
        return result.text
    assert result.index is not None
    return read_page(source, result.charset_name or "", result.index.page_range(page))


def _spool_stdin(directory: str) -> FileSource:
    """Copy standard input to a file so it can be paged like any other."""
    path = Path(directory) / "stdin"
    with path.open("wb") as spool:
        shutil.copyfileobj(sys.stdin.buffer, spool)
    return FileSource(path)


def main(argv: list[str] | None = None) -> None:
    """Run the ``textpager`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        description="Identify the encoding of text files and split them into pages."
    )
    parser.add_argument("files", nargs="*", help="Files to open")
    parser.add_argument(
        "--minimal", action="store_true", help="Output only the encoding name"
    )
    parser.add_argument(
        "--page",
        type=int,
        default=None,
        metavar="N",
        help="Print the decoded text of page N (0-based) of a single file",
    )
    parser.add_argument(
        "--page-bytes",
        type=int,
        default=None,
        help="Bytes after which the next newline ends a page",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Files of at least this many bytes are opened in paged mode",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=None,
        help="Bytes sampled to detect the encoding of a paged file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log detection details"
    )
    parser.add_argument(
        "--version", action="version", version=f"textpager {textpager.__version__}"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(levelname)s: %(message)s"
        )

    overrides = {
        "target_page_bytes": args.page_bytes,
        "whole_file_threshold": args.threshold,
        "sample_size": args.sample_size,
    }
    try:
        config = ReaderConfig(
            **{key: value for key, value in overrides.items() if value is not None}
        )
    except ValueError as e:
        parser.error(str(e))

    if args.page is not None and len(args.files) > 1:
        parser.error("--page takes a single file")

    with contextlib.ExitStack() as stack:
        sources: list[DocumentSource]
        if args.files:
            sources = [FileSource(path) for path in args.files]
            names = list(args.files)
        else:
            spool_dir = stack.enter_context(tempfile.TemporaryDirectory())
            sources = [_spool_stdin(spool_dir)]
            names = ["stdin"]

        for name, source in zip(names, sources):
            result = open_document(source, config)
            if args.page is None:
                print(_describe(name, result, args.minimal))
                continue
            if result.error_message is not None:
                print(f"textpager: {name}: {result.error_message}", file=sys.stderr)
                sys.exit(1)
            if not _has_page(result, args.page):
                print(f"textpager: {name}: no page {args.page}", file=sys.stderr)
                sys.exit(1)
            text = _page_text(source, result, args.page)
            if text is None:
                message = ErrorKind.PAGE_READ_ERROR.message
                print(f"textpager: {name}: {message}", file=sys.stderr)
                sys.exit(1)
            sys.stdout.write(text)


if __name__ == "__main__":
    main()
