"""Read/written line counters for a single pipe run."""

from __future__ import annotations

from dataclasses import dataclass

from splurge_cat_pipe.exceptions import SplurgeCatPipeValueError


@dataclass
class LineCounts:
    """Progress of a pipe run through its source and sink.

    ``written_line_count`` never exceeds ``read_line_count`` for counters
    maintained by the pipe driver.
    """

    read_line_count: int = 0
    written_line_count: int = 0

    def __post_init__(self) -> None:
        if self.read_line_count < 0 or self.written_line_count < 0:
            raise SplurgeCatPipeValueError(
                error_code="invalid-parameter",
                message=(
                    "line counts must be non-negative, got "
                    f"read={self.read_line_count} written={self.written_line_count}"
                ),
            )

    def snapshot(self) -> LineCounts:
        """Return an independent copy of the current counters.

        The copy is taken as is; the non-negative check is not applied.
        """
        copy = object.__new__(LineCounts)
        copy.read_line_count = self.read_line_count
        copy.written_line_count = self.written_line_count
        return copy

    def __str__(self) -> str:
        return f"{self.read_line_count} lines read, {self.written_line_count} lines written"
