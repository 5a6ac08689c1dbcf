"""Comprehensive usage examples for splurge-cat-pipe.

This script demonstrates common workflows and error handling patterns:

- Piping text lines with pipe() and raw bytes lines with pipe_bytes()
- Skipping lines by returning an empty value
- Inspecting a failed run through PipeResult and the attached LineCounts
- Opting into exceptions with PipeResult.raise_for_error()

Run this script as a developer reference. It is intended for interactive
exploration and documentation; it does not require installation.
"""

from __future__ import annotations

import io

from splurge_cat_pipe import (
    FailureKind,
    SplurgeCatPipeRunError,
    SplurgeCatPipeTransformError,
    pipe,
    pipe_bytes,
)

BANDS = b"foo fighters\narctic monkeys\nlime cordiale"


def demo_text_pipe() -> None:
    print("\n== Text pipe demo ==")
    sink = io.BytesIO()
    result = pipe(io.BytesIO(BANDS), sink, str.title)
    print("counts:", result.line_counts)
    print("output:", sink.getvalue())


def demo_skip() -> None:
    print("\n== Skip demo ==")
    sink = io.BytesIO()
    # Returning an empty value (or None) writes nothing for that line
    result = pipe_bytes(io.BytesIO(BANDS), sink, lambda line: line if b"monkeys" not in line else None)
    print("counts:", result.line_counts)
    print("output:", sink.getvalue())


def demo_error_inspection() -> None:
    print("\n== Error inspection demo ==")

    def reject_lime(line: str) -> str:
        if line.startswith("lime"):
            raise ValueError("no citrus allowed")
        return line

    sink = io.BytesIO()
    result = pipe(io.BytesIO(BANDS), sink, reject_lime)
    err = result.error
    if err is not None:
        print("kind:", err.kind.value)
        print("stopped in transform:", err.kind is FailureKind.TRANSFORM)
        print("error_code:", err.error_code)
        print("message:", err.message)
        print("counts at failure:", err.line_counts)
        print("__cause__:", repr(err.__cause__))
    print("partial output:", sink.getvalue())

    try:
        result.raise_for_error()
    except SplurgeCatPipeTransformError as exc:
        print("raised:", exc)
    except SplurgeCatPipeRunError as exc:
        print("other run failure:", exc)


def main() -> None:
    demo_text_pipe()
    demo_skip()
    demo_error_inspection()


if __name__ == "__main__":
    main()
