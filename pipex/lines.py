"""Buffered line reading from a stream or a raw file descriptor."""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import IO, Union

__all__ = ["BUFFER_SIZE", "LineReader"]

BUFFER_SIZE = 42

Chunk = Union[str, bytes]


def _newline(chunk: Chunk) -> Chunk:
    return b"\n" if isinstance(chunk, (bytes, bytearray)) else "\n"


class LineReader:
    """Read a source one line at a time, keeping unread data between calls.

    *stream* is either a file-like object with ``read(size)`` or an integer
    file descriptor, which is read with :func:`os.read`. For interactive
    input pass a descriptor or an unbuffered binary stream so that a read
    returns as soon as a line is available.
    """

    def __init__(self, stream: IO | int, buffer_size: int = BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: Chunk | None = None

    def _read_chunk(self) -> Chunk:
        if isinstance(self._stream, int):
            return os.read(self._stream, self._buffer_size)
        return self._stream.read(self._buffer_size)

    def read_line(self) -> Chunk | None:
        """Return the next line, newline included, or None at end of input.

        The final line is returned without a newline if the input lacks one.
        A read error discards buffered data and propagates.
        """
        pending = self._pending
        try:
            while pending is None or _newline(pending) not in pending:
                chunk = self._read_chunk()
                if not chunk:
                    break
                pending = chunk if pending is None else pending + chunk
        except OSError:
            self._pending = None
            raise

        if not pending:
            self._pending = None
            return None

        end = pending.find(_newline(pending))
        if end < 0:
            self._pending = None
            return pending
        self._pending = pending[end + 1 :]
        return pending[: end + 1]

    def reset(self) -> None:
        """Discard any data read ahead but not yet returned."""
        self._pending = None

    def __iter__(self) -> Iterator[Chunk]:
        while (line := self.read_line()) is not None:
            yield line