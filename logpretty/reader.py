"""Generator-based line reading and per-line flushed writing over binary streams."""

from typing import BinaryIO, Generator

ENCODING = "utf-8"
# Undecodable bytes survive the round trip to stdout
ERRORS = "surrogateescape"


def read_lines(stream: BinaryIO) -> Generator[str, None, None]:
    """Yield each line with its \\n or \\r\\n terminator removed.

    Only \\n ends a line; a lone \\r stays part of the line.
    """
    for chunk in stream:
        if chunk.endswith(b"\n"):
            chunk = chunk[:-1]
            if chunk.endswith(b"\r"):
                chunk = chunk[:-1]
        yield chunk.decode(ENCODING, ERRORS)


def write_line(stream: BinaryIO, line: str) -> None:
    """Write one line plus terminator and flush so pipes see output immediately."""
    stream.write(line.encode(ENCODING, ERRORS) + b"\n")
    stream.flush()
