"""Tests for the raw bytes shape entry point, ``pipe_bytes()``."""

import io

import pytest

from splurge_cat_pipe import (
    LineCounts,
    SplurgeCatPipeReadError,
    SplurgeCatPipeTransformError,
    SplurgeCatPipeTypeError,
    pipe_bytes,
)

BANDS = b"foo fighters\narctic monkeys\nlime cordiale\n"


def run_bytes(data: bytes, transform, **kwargs):
    sink = io.BytesIO()
    result = pipe_bytes(io.BytesIO(data), sink, transform, **kwargs)
    return result, sink.getvalue()


@pytest.mark.parametrize(
    ("name", "transform", "data", "want_out", "want_counts"),
    [
        ("basic - one line", lambda b: b"arctic monkeys", b"foo fighters\n", b"arctic monkeys\n", LineCounts(1, 1)),
        ("basic - three line", lambda b: b, BANDS, BANDS, LineCounts(3, 3)),
        ("skip writes with None", lambda b: None, BANDS, b"", LineCounts(3, 0)),
        ("skip writes with empty", lambda b: b"", BANDS, b"", LineCounts(3, 0)),
        ("bytearray result", lambda b: bytearray(b.upper()), b"ab\ncd", b"AB\nCD\n", LineCounts(2, 2)),
        ("memoryview result", lambda b: memoryview(b[::-1]), b"ab\n", b"ba\n", LineCounts(1, 1)),
    ],
)
def test_pipe_bytes_cases(name, transform, data, want_out, want_counts):
    result, out = run_bytes(data, transform)
    assert result.ok, name
    assert out == want_out, name
    assert result.line_counts == want_counts, name


def test_undecodable_bytes_pass_through():
    data = b"\xff\xfe\n\x00\x01\n"
    result, out = run_bytes(data, lambda b: b)
    assert result.line_counts == LineCounts(2, 2)
    assert out == data


def test_transform_error():
    def fail(line: bytes) -> bytes:
        raise ValueError("Failed here")

    result, out = run_bytes(BANDS, fail)
    assert isinstance(result.error, SplurgeCatPipeTransformError)
    assert result.line_counts == LineCounts(1, 0)
    assert str(result.error) == (
        "[transform-failed] execution stopped with 1 lines read, 0 lines written, "
        "due to error from transform: Failed here"
    )
    assert out == b""


def test_str_result_is_transform_failure():
    result, out = run_bytes(BANDS, lambda b: b.decode())
    assert isinstance(result.error, SplurgeCatPipeTransformError)
    assert isinstance(result.error.original_exception, SplurgeCatPipeTypeError)
    assert out == b""


def test_source_read_returning_none_is_source_failure():
    class NotReady(io.BytesIO):
        def read(self, size=-1):
            return None

    sink = io.BytesIO()
    result = pipe_bytes(NotReady(), sink, lambda b: b)

    assert isinstance(result.error, SplurgeCatPipeReadError)
    assert result.error.original_exception.error_code == "invalid-source"
    assert result.line_counts == LineCounts(0, 0)
    assert sink.getvalue() == b""


def test_non_callable_transform():
    with pytest.raises(SplurgeCatPipeTypeError):
        pipe_bytes(io.BytesIO(b""), io.BytesIO(), None)


@pytest.mark.parametrize(("n", "k"), [(1, 1), (7, 2), (10, 3), (12, 4), (5, 10)])
def test_skip_every_kth(n: int, k: int):
    count = 0

    def skip_kth(line: bytes):
        nonlocal count
        count += 1
        return None if count % k == 0 else line

    data = b"".join(b"line %d\n" % i for i in range(n))
    result, _ = run_bytes(data, skip_kth)
    assert result.line_counts == LineCounts(n, n - n // k)
