"""Reproducer for lines split across raw read boundaries.

This script writes a 10_000-line text file where each line is `Line {n}`
and then pipes it through pipe_bytes() with buffer size set to
MIN_BUFFER_SIZE, so nearly every line straddles two reads. It compares each
emitted line to the expected content and reports any mismatches, empty
rows, or missing lines.

Run from the project root: python scripts/reproduce_split_boundary.py
"""

import io
from pathlib import Path

from splurge_cat_pipe.cat_pipe import pipe_bytes
from splurge_cat_pipe.constants import MIN_BUFFER_SIZE

TMP_DIR = Path("tmp")
TMP_DIR.mkdir(exist_ok=True)
TEST_FILE = TMP_DIR / "reproduce_10000.txt"
NUM_LINES = 10_000


def write_test_file(path: Path, lines: int) -> None:
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        for i in range(1, lines + 1):
            fh.write(f"Line {i}\n")


def run_reproducer() -> None:
    print(f"Writing {NUM_LINES} lines to {TEST_FILE}")
    write_test_file(TEST_FILE, NUM_LINES)

    seen: list[bytes] = []

    def record(line: bytes) -> bytes:
        seen.append(line)
        return line

    sink = io.BytesIO()
    with TEST_FILE.open("rb") as source:
        result = pipe_bytes(source, sink, record, buffer_size=MIN_BUFFER_SIZE)

    mismatches = 0
    empty_rows = 0
    for n, line in enumerate(seen, start=1):
        expected = f"Line {n}".encode()
        if line == b"":
            empty_rows += 1
            print(f"Row {n}: EMPTY (expected: {expected!r})")
        if line != expected:
            mismatches += 1
            if mismatches <= 10:
                print(f"Mismatch at #{n}: got: {line!r} expected: {expected!r}")

    print(f"Done. {result.line_counts}, mismatches={mismatches}, empty_rows={empty_rows}")
    if result.error is not None:
        print(f"Run failed: {result.error}")
    if sink.getvalue() != TEST_FILE.read_bytes():
        print("Output differs from input")


if __name__ == "__main__":
    run_reproducer()
