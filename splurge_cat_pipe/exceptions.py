"""Exception types for splurge-cat-pipe.

Every error raised or returned by the package derives from
``SplurgeCatPipeError`` and carries a short ``error_code``, a human readable
``message``, an optional ``details`` mapping and, where one exists, the
``original_exception`` that triggered it.

Run failures (``SplurgeCatPipeReadError``, ``SplurgeCatPipeWriteError`` and
``SplurgeCatPipeTransformError``) additionally carry a snapshot of the
``LineCounts`` at the moment the run stopped. They are returned inside a
``PipeResult`` rather than raised by the pipe entry points.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from splurge_cat_pipe.line_counts import LineCounts


class FailureKind(str, Enum):
    """Which stage of a run failed."""

    SOURCE = "source"
    SINK = "sink"
    TRANSFORM = "transform"


class SplurgeCatPipeError(Exception):
    """Base class for all splurge-cat-pipe errors."""

    def __init__(
        self,
        *,
        error_code: str = "general",
        message: str = "",
        details: dict[str, Any] | None = None,
        original_exception: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class SplurgeCatPipeValueError(SplurgeCatPipeError):
    """An argument or a piece of input has an unacceptable value."""


class SplurgeCatPipeLineTooLongError(SplurgeCatPipeValueError):
    """A line exceeded the configured maximum line length."""


class SplurgeCatPipeTypeError(SplurgeCatPipeError):
    """A transformation returned a value of the wrong type."""


class SplurgeCatPipeRunError(SplurgeCatPipeError):
    """A pipe run stopped before reaching the end of its source.

    Args:
        line_counts: Counters observed when the failure happened. A copy is
            stored so later changes to the caller's instance are not seen.
        cause: The exception raised by the failing stage.

    ``observed_counts`` keeps the instance the error was built from, so a
    driver can tell its own failures apart from those of another run.
    """

    kind: FailureKind
    stage: str = "pipe"
    default_error_code: str = "run-failed"

    def __init__(self, line_counts: LineCounts, cause: BaseException) -> None:
        self.observed_counts = line_counts
        self.line_counts = line_counts.snapshot()
        super().__init__(
            error_code=self.default_error_code,
            message=f"execution stopped with {self.line_counts}, due to error from {self.stage}: {cause}",
            details={
                "read_line_count": self.line_counts.read_line_count,
                "written_line_count": self.line_counts.written_line_count,
            },
            original_exception=cause,
        )
        self.__cause__ = cause


class SplurgeCatPipeReadError(SplurgeCatPipeRunError):
    """Reading from the source failed before a clean end of input."""

    kind = FailureKind.SOURCE
    stage = "reader"
    default_error_code = "read-failed"


class SplurgeCatPipeWriteError(SplurgeCatPipeRunError):
    """Writing to, or flushing, the sink failed."""

    kind = FailureKind.SINK
    stage = "writer"
    default_error_code = "write-failed"


class SplurgeCatPipeTransformError(SplurgeCatPipeRunError):
    """The caller's transformation signalled a failure."""

    kind = FailureKind.TRANSFORM
    stage = "transform"
    default_error_code = "transform-failed"
