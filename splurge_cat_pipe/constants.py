"""Constants shared by the line splitter and the pipe driver."""

# Lines are delimited by a single newline byte. A preceding carriage return
# is part of the line content.
LINE_DELIMITER: bytes = b"\n"

DEFAULT_ENCODING: str = "utf-8"
DEFAULT_ENCODING_ERRORS: str = "strict"

# Raw read size used when pulling bytes from the source.
DEFAULT_BUFFER_SIZE: int = 32768
MIN_BUFFER_SIZE: int = 16

# Longest line, in bytes and excluding the delimiter, that the splitter will
# hold in memory before giving up on the source.
DEFAULT_MAX_LINE_LENGTH: int = 64 * 1024
