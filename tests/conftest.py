import io
import sys
from collections.abc import Callable
from pathlib import Path as _Path

import pytest


class FailingSource(io.BytesIO):
    """A BytesIO whose ``read`` raises ``exc`` once ``fail_after`` reads succeeded."""

    def __init__(self, data: bytes = b"", *, exc: BaseException, fail_after: int = 0):
        super().__init__(data)
        self._exc = exc
        self._reads_left = fail_after
        self.read_calls = 0

    def read(self, size=-1):
        self.read_calls += 1
        if self._reads_left <= 0:
            raise self._exc
        self._reads_left -= 1
        return super().read(size)


class FailingSink(io.BytesIO):
    """A BytesIO that can fail on the Nth ``write`` and/or on ``flush``."""

    def __init__(self, *, raise_on_write=None, fail_on_write: int = 1, raise_on_flush=None):
        super().__init__()
        self._raise_on_write = raise_on_write
        self._fail_on_write = fail_on_write
        self._raise_on_flush = raise_on_flush
        self.write_calls = 0
        self.flush_calls = 0

    def write(self, b):
        self.write_calls += 1
        if self._raise_on_write is not None and self.write_calls >= self._fail_on_write:
            raise self._raise_on_write
        return super().write(b)

    def flush(self):
        self.flush_calls += 1
        if self._raise_on_flush is not None:
            raise self._raise_on_flush
        return super().flush()


@pytest.fixture
def failing_source() -> Callable[..., FailingSource]:
    """Build a source that raises after a number of successful reads.

    Usage:
        src = failing_source(b"a\\nb\\n", exc=OSError("boom"), fail_after=1)
    """

    def _make(data: bytes = b"", *, exc: BaseException, fail_after: int = 0) -> FailingSource:
        return FailingSource(data, exc=exc, fail_after=fail_after)

    return _make


@pytest.fixture
def failing_sink() -> Callable[..., FailingSink]:
    """Build a sink that raises on its Nth write and/or on flush.

    Usage:
        sink = failing_sink(raise_on_write=OSError("disk full"), fail_on_write=2)
    """

    def _make(*, raise_on_write=None, fail_on_write: int = 1, raise_on_flush=None) -> FailingSink:
        return FailingSink(raise_on_write=raise_on_write, fail_on_write=fail_on_write, raise_on_flush=raise_on_flush)

    return _make


# Ensure tests can import the local package when pytest runs from the
# repository root or when the test runner's CWD differs. Prepend the
# repository root to sys.path so `import splurge_cat_pipe` resolves to the
# local source tree.
_ROOT = _Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))
