"""Example: streaming read -> process -> write

This example pipes a file into another file line by line. Each line is
trimmed and upper-cased; lines that are blank after trimming are dropped.

The `transform_line` function is intentionally small and pure so it's easy to test.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from splurge_cat_pipe import LineCounts, LineTransform, pipe


def transform_line(line: str) -> str:
    """Simple transform: trim and uppercase the line for the example.

    Returns an empty string for blank lines so they are skipped.
    """
    return line.strip().upper()


def process_file(
    src: Path | str,
    dst: Path | str,
    transform: LineTransform | None = None,
    *,
    encoding: str = "utf-8",
) -> LineCounts:
    """Pipe `src` into `dst` through `transform`.

    Returns the LineCounts of the run. Raises the run's failure, if any.
    """
    transform = transform or transform_line
    with open(src, "rb") as source, open(dst, "wb") as sink:
        result = pipe(source, sink, transform, encoding=encoding)
    return result.raise_for_error()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Stream/process/write example")
    parser.add_argument("src", help="Source text file")
    parser.add_argument("dst", help="Destination file")
    parser.add_argument("--encoding", default="utf-8", help="Text encoding of both files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        counts = process_file(args.src, args.dst, encoding=args.encoding)
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(f"{counts} to {args.dst}")
