"""splurge-cat-pipe: line-oriented transformation pipes over binary streams."""

from splurge_cat_pipe.cat_pipe import (
    LineStep,
    LineTransform,
    PipeResult,
    RawBytesTransform,
    pipe,
    pipe_bytes,
    raw_bytes_step,
    run_pipe,
    text_step,
)
from splurge_cat_pipe.exceptions import (
    FailureKind,
    SplurgeCatPipeError,
    SplurgeCatPipeLineTooLongError,
    SplurgeCatPipeReadError,
    SplurgeCatPipeRunError,
    SplurgeCatPipeTransformError,
    SplurgeCatPipeTypeError,
    SplurgeCatPipeValueError,
    SplurgeCatPipeWriteError,
)
from splurge_cat_pipe.line_counts import LineCounts
from splurge_cat_pipe.line_splitter import iter_lines, iter_text_lines

__version__ = "0.1.0"

__all__ = [
    "FailureKind",
    "LineCounts",
    "LineStep",
    "LineTransform",
    "PipeResult",
    "RawBytesTransform",
    "SplurgeCatPipeError",
    "SplurgeCatPipeLineTooLongError",
    "SplurgeCatPipeReadError",
    "SplurgeCatPipeRunError",
    "SplurgeCatPipeTransformError",
    "SplurgeCatPipeTypeError",
    "SplurgeCatPipeValueError",
    "SplurgeCatPipeWriteError",
    "iter_lines",
    "iter_text_lines",
    "pipe",
    "pipe_bytes",
    "raw_bytes_step",
    "run_pipe",
    "text_step",
]
