"""Drive lines from a binary source through a transformation into a sink.

This is the ``cat source | transform > sink`` loop. Two public entry points
differ only in how line content is presented to the caller's transformation:

- :func:`pipe` hands each line over as ``str`` (decoded with ``encoding``).
- :func:`pipe_bytes` hands each line over as raw ``bytes``.

For both shapes, a transformation that returns an empty value (or ``None``)
skips the line, a non-empty value is written followed by a single newline,
and an exception aborts the run. Runs never raise for source, transform or
sink failures; they return a :class:`PipeResult` holding the final
``LineCounts`` and, when the run stopped early, the failure.

Example:
    >>> import io
    >>> sink = io.BytesIO()
    >>> result = pipe(io.BytesIO(b"foo fighters\\narctic monkeys"), sink, str.upper)
    >>> str(result.line_counts)
    '2 lines read, 2 lines written'
    >>> sink.getvalue()
    b'FOO FIGHTERS\\nARCTIC MONKEYS\\n'
"""

from __future__ import annotations

import errno
import io
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Protocol, TypeVar

from splurge_cat_pipe.constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_MAX_LINE_LENGTH,
    LINE_DELIMITER,
)
from splurge_cat_pipe.exceptions import (
    SplurgeCatPipeReadError,
    SplurgeCatPipeRunError,
    SplurgeCatPipeTransformError,
    SplurgeCatPipeTypeError,
    SplurgeCatPipeWriteError,
)
from splurge_cat_pipe.line_counts import LineCounts
from splurge_cat_pipe.line_splitter import ByteSource, iter_lines, iter_text_lines

logger = logging.getLogger(__name__)

T = TypeVar("T")

LineTransform = Callable[[str], "str | None"]
RawBytesTransform = Callable[[bytes], "bytes | None"]

# A step receives one pulled line plus the live counters of the run and
# returns the encoded payload to write, or None to skip the line.
LineStep = Callable[[T, LineCounts], "bytes | None"]


class ByteSink(Protocol):
    def write(self, data: bytes, /) -> object: ...

    def flush(self) -> None: ...


@dataclass(frozen=True)
class PipeResult:
    """Outcome of one pipe run.

    Attributes:
        line_counts: Counters as they stood when the run ended.
        error: The failure that stopped the run, or ``None`` when the source
            was read to a clean end.
    """

    line_counts: LineCounts
    error: SplurgeCatPipeRunError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> LineCounts:
        """Raise the stored failure, or return the counts of a clean run."""
        if self.error is not None:
            raise self.error
        return self.line_counts


def _write_all(sink: ByteSink, data: bytes) -> None:
    # Buffered and duck-typed sinks take the whole payload; raw ones may not.
    if not isinstance(sink, io.RawIOBase):
        sink.write(data)
        return
    view = memoryview(data)
    while view:
        written = sink.write(view)
        if written is None:
            raise BlockingIOError(errno.EAGAIN, "sink is not ready for writing")
        if not written:
            raise OSError(f"sink accepted none of the remaining {len(view)} bytes")
        view = view[written:]


def _drive(
    lines: Iterator[T],
    sink: ByteSink,
    step: LineStep[T],
    line_counts: LineCounts,
) -> SplurgeCatPipeRunError | None:
    while True:
        try:
            line = next(lines)
        except StopIteration:
            return None
        except Exception as exc:
            return SplurgeCatPipeReadError(line_counts, exc)

        line_counts.read_line_count += 1

        try:
            payload = step(line, line_counts)
        except SplurgeCatPipeRunError as exc:
            # Failures of some other run (e.g. a nested pipe) are the step's failure
            if exc.observed_counts is line_counts:
                return exc
            return SplurgeCatPipeTransformError(line_counts, exc)
        except Exception as exc:
            return SplurgeCatPipeTransformError(line_counts, exc)

        if not payload:
            continue

        try:
            _write_all(sink, payload + LINE_DELIMITER)
        except Exception as exc:
            return SplurgeCatPipeWriteError(line_counts, exc)

        line_counts.written_line_count += 1


def _flush(
    sink: ByteSink,
    line_counts: LineCounts,
    error: SplurgeCatPipeRunError | None,
) -> SplurgeCatPipeRunError | None:
    try:
        sink.flush()
    except Exception as exc:
        if error is None:
            return SplurgeCatPipeWriteError(line_counts, exc)
        logger.warning("sink flush failed while handling %s: %s", error.error_code, exc)
    return error


def run_pipe(lines: Iterator[T], sink: ByteSink, step: LineStep[T]) -> PipeResult:
    """Run the read, transform, write loop over already split ``lines``.

    ``read_line_count`` is incremented as soon as a line is pulled, before
    ``step`` sees it. ``written_line_count`` is incremented only after the
    sink accepted the line. The sink is flushed however the loop ends.

    Exceptions raised while pulling from ``lines`` become
    ``SplurgeCatPipeReadError``; exceptions raised by ``step`` become
    ``SplurgeCatPipeTransformError`` unless they are a
    ``SplurgeCatPipeRunError`` built from this run's counters; exceptions
    raised by ``sink.write`` or ``sink.flush`` become
    ``SplurgeCatPipeWriteError``. Every failure carries the counters as they
    were at that moment. Short writes to a raw sink are completed.
    """
    line_counts = LineCounts()
    error = _drive(lines, sink, step, line_counts)
    error = _flush(sink, line_counts, error)

    if error is None:
        logger.debug("pipe finished with %s", line_counts)
    else:
        logger.warning("pipe stopped with %s (%s)", error.line_counts, error.error_code)
    return PipeResult(line_counts=line_counts.snapshot(), error=error)


def text_step(
    transform: LineTransform,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ENCODING_ERRORS,
) -> LineStep[str]:
    """Adapt a ``str -> str`` transformation into a pipe step."""

    def step(line: str, line_counts: LineCounts) -> bytes | None:
        try:
            out = transform(line)
        except Exception as exc:
            raise SplurgeCatPipeTransformError(line_counts, exc) from exc

        if out is None:
            return None
        if not isinstance(out, str):
            cause = SplurgeCatPipeTypeError(
                error_code="invalid-transform-result",
                message=f"line transform must return str or None, got {type(out).__name__}",
            )
            raise SplurgeCatPipeTransformError(line_counts, cause)
        if not out:
            return None

        try:
            return out.encode(encoding, errors)
        except UnicodeEncodeError as exc:
            raise SplurgeCatPipeWriteError(line_counts, exc) from exc

    return step


def raw_bytes_step(transform: RawBytesTransform) -> LineStep[bytes]:
    """Adapt a ``bytes -> bytes`` transformation into a pipe step."""

    def step(line: bytes, line_counts: LineCounts) -> bytes | None:
        try:
            out = transform(line)
        except Exception as exc:
            raise SplurgeCatPipeTransformError(line_counts, exc) from exc

        if out is None:
            return None
        if not isinstance(out, (bytes, bytearray, memoryview)):
            cause = SplurgeCatPipeTypeError(
                error_code="invalid-transform-result",
                message=f"raw bytes transform must return bytes or None, got {type(out).__name__}",
            )
            raise SplurgeCatPipeTransformError(line_counts, cause)
        return bytes(out) or None

    return step


def _require_callable(transform: object) -> None:
    if not callable(transform):
        raise SplurgeCatPipeTypeError(
            error_code="invalid-parameter",
            message=f"transform must be callable, got {type(transform).__name__}",
        )


def pipe(
    source: ByteSource,
    sink: ByteSink,
    transform: LineTransform,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ENCODING_ERRORS,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    max_line_length: int | None = DEFAULT_MAX_LINE_LENGTH,
) -> PipeResult:
    """Pipe ``source`` to ``sink`` through a text transformation.

    Args:
        source: Binary stream to read lines from. Not closed.
        sink: Binary stream to write lines to. Flushed, not closed.
        transform: Called once per line with the decoded line (delimiter
            removed). Return the replacement line, ``""``/``None`` to skip,
            or raise to stop the run.
        encoding: Codec used to decode input lines and encode output lines.
        errors: Codec error handler for both directions.
        buffer_size: Bytes requested per read from ``source``.
        max_line_length: Longest accepted input line in bytes, or ``None``.

    Returns:
        PipeResult with the final counts and the failure, if any.

    Raises:
        SplurgeCatPipeValueError: If a parameter is invalid.
        SplurgeCatPipeTypeError: If ``transform`` is not callable.
    """
    _require_callable(transform)
    lines = iter_text_lines(
        source,
        encoding=encoding,
        errors=errors,
        buffer_size=buffer_size,
        max_line_length=max_line_length,
    )
    logger.debug("starting text pipe: encoding=%s buffer_size=%d", encoding, buffer_size)
    return run_pipe(lines, sink, text_step(transform, encoding=encoding, errors=errors))


def pipe_bytes(
    source: ByteSource,
    sink: ByteSink,
    transform: RawBytesTransform,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    max_line_length: int | None = DEFAULT_MAX_LINE_LENGTH,
) -> PipeResult:
    """Pipe ``source`` to ``sink`` through a raw bytes transformation.

    Same contract as :func:`pipe`, but lines are passed to ``transform`` as
    undecoded ``bytes`` and the result is written as is.
    """
    _require_callable(transform)
    lines = iter_lines(source, buffer_size=buffer_size, max_line_length=max_line_length)
    logger.debug("starting raw bytes pipe: buffer_size=%d", buffer_size)
    return run_pipe(lines, sink, raw_bytes_step(transform))
