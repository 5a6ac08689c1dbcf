"""Split a binary source into newline-delimited lines.

The iterators returned here are lazy and single use. They read the source
``buffer_size`` bytes at a time, hold at most one partial line between
reads, and stop by raising whatever the source raised. A final segment with
no trailing delimiter is still produced as a line; an empty source produces
no lines at all.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from typing import Protocol

from splurge_cat_pipe.constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_MAX_LINE_LENGTH,
    LINE_DELIMITER,
    MIN_BUFFER_SIZE,
)
from splurge_cat_pipe.exceptions import (
    SplurgeCatPipeLineTooLongError,
    SplurgeCatPipeTypeError,
    SplurgeCatPipeValueError,
)


class ByteSource(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


def _validate_parameters(buffer_size: int, max_line_length: int | None) -> None:
    if buffer_size < MIN_BUFFER_SIZE:
        raise SplurgeCatPipeValueError(
            error_code="invalid-parameter",
            message=f"buffer_size must be at least {MIN_BUFFER_SIZE}, got {buffer_size}",
            details={"buffer_size": buffer_size},
        )
    if max_line_length is not None and max_line_length < 1:
        raise SplurgeCatPipeValueError(
            error_code="invalid-parameter",
            message=f"max_line_length must be positive or None, got {max_line_length}",
            details={"max_line_length": max_line_length},
        )


def _check_line_length(length: int, max_line_length: int | None) -> None:
    if max_line_length is not None and length > max_line_length:
        raise SplurgeCatPipeLineTooLongError(
            error_code="line-too-long",
            message=f"line exceeds the maximum length of {max_line_length} bytes",
            details={"max_line_length": max_line_length},
        )


def validate_encoding(encoding: str, errors: str) -> None:
    """Raise ``SplurgeCatPipeValueError`` for an unknown codec or error handler."""
    try:
        codecs.lookup(encoding)
        codecs.lookup_error(errors)
    except LookupError as exc:
        raise SplurgeCatPipeValueError(
            error_code="invalid-parameter",
            message=f"unknown encoding or error handler: encoding={encoding!r} errors={errors!r}",
            details={"encoding": encoding, "errors": errors},
            original_exception=exc,
        ) from exc


def _generate_lines(source: ByteSource, buffer_size: int, max_line_length: int | None) -> Iterator[bytes]:
    pending = bytearray()
    while True:
        raw = source.read(buffer_size)
        if raw is None:
            raise SplurgeCatPipeTypeError(
                error_code="invalid-source",
                message="source.read() returned None; non-blocking sources are not supported",
            )
        if not raw:
            break
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise SplurgeCatPipeTypeError(
                error_code="invalid-source",
                message=f"source.read() must return bytes, got {type(raw).__name__}",
            )

        # Only the newly appended bytes can contain a delimiter we have not seen.
        scan_from = len(pending)
        pending += raw
        start = 0
        end = pending.find(LINE_DELIMITER, scan_from)
        while end >= 0:
            _check_line_length(end - start, max_line_length)
            yield bytes(pending[start:end])
            start = end + 1
            end = pending.find(LINE_DELIMITER, start)
        del pending[:start]
        _check_line_length(len(pending), max_line_length)

    if pending:
        yield bytes(pending)


def iter_lines(
    source: ByteSource,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    max_line_length: int | None = DEFAULT_MAX_LINE_LENGTH,
) -> Iterator[bytes]:
    """Iterate over the delimiter-stripped lines of ``source``.

    Args:
        source: Object with a blocking ``read(size) -> bytes`` method.
        buffer_size: Number of bytes requested per read.
        max_line_length: Longest accepted line in bytes, or ``None`` for no limit.

    Returns:
        A lazy iterator of ``bytes`` lines.

    Raises:
        SplurgeCatPipeValueError: If a parameter is invalid. Raised
            immediately, before the source is touched.

    Errors raised by ``source.read()`` propagate out of the iterator, as does
    ``SplurgeCatPipeLineTooLongError`` when a line exceeds ``max_line_length``.
    """
    _validate_parameters(buffer_size, max_line_length)
    return _generate_lines(source, buffer_size, max_line_length)


def iter_text_lines(
    source: ByteSource,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ENCODING_ERRORS,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    max_line_length: int | None = DEFAULT_MAX_LINE_LENGTH,
) -> Iterator[str]:
    """Like :func:`iter_lines` but decodes each line with ``encoding``.

    A ``UnicodeDecodeError`` propagates out of the iterator for the line that
    could not be decoded.
    """
    validate_encoding(encoding, errors)
    lines = iter_lines(source, buffer_size=buffer_size, max_line_length=max_line_length)
    return (line.decode(encoding, errors) for line in lines)
