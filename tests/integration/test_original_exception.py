import io
from pathlib import Path

import pytest

from splurge_cat_pipe import (
    SplurgeCatPipeReadError,
    SplurgeCatPipeWriteError,
    pipe,
    pipe_bytes,
)
from splurge_cat_pipe.line_counts import LineCounts

pytestmark = [pytest.mark.integration]


def test_reader_original_exception_on_oserror(tmp_path, failing_source):
    src = failing_source(b"a\nb\n", exc=OSError("boom"), fail_after=1)

    result = pipe(src, io.BytesIO(), lambda line: line)

    err = result.error
    assert isinstance(err, SplurgeCatPipeReadError)
    # __cause__ should be the original OSError and original_exception populated
    assert isinstance(err.__cause__, OSError)
    assert err.original_exception is err.__cause__
    assert err.line_counts == LineCounts(2, 2)


def test_writer_original_exception_on_write(failing_sink):
    sink = failing_sink(raise_on_write=PermissionError("read-only"))

    result = pipe_bytes(io.BytesIO(b"a\n"), sink, lambda b: b)

    err = result.error
    assert isinstance(err, SplurgeCatPipeWriteError)
    assert isinstance(err.original_exception, PermissionError)
    with pytest.raises(SplurgeCatPipeWriteError) as excinfo:
        result.raise_for_error()
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_closed_sink_is_write_failure(tmp_path: Path):
    dst_path = tmp_path / "out.txt"
    dst = dst_path.open("wb")
    dst.close()

    result = pipe_bytes(io.BytesIO(b"a\nb\n"), dst, lambda b: b)

    assert isinstance(result.error, SplurgeCatPipeWriteError)
    assert isinstance(result.error.original_exception, ValueError)
    assert result.line_counts == LineCounts(1, 0)


def test_closed_source_is_read_failure(tmp_path: Path):
    src_path = tmp_path / "in.txt"
    src_path.write_bytes(b"a\n")
    src = src_path.open("rb")
    src.close()

    result = pipe_bytes(src, io.BytesIO(), lambda b: b)

    assert isinstance(result.error, SplurgeCatPipeReadError)
    assert result.line_counts == LineCounts(0, 0)
