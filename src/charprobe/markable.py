"""Bounded mark/reset for byte sources that cannot seek."""

from __future__ import annotations

import io
from typing import BinaryIO


class MarkableStream(io.RawIOBase):
    """Raw stream adding ``mark``/``reset`` on top of any ``read()``-able source.

    Bytes read after :meth:`mark` are kept so :meth:`reset` can replay them.
    Reading more than the mark's limit invalidates the mark.  Closing this
    stream closes the source.
    """

    def __init__(self, source: BinaryIO) -> None:
        super().__init__()
        self._source = source
        self._buffer = bytearray()
        self._pos = 0
        self._mark_limit = -1

    def readable(self) -> bool:
        return True

    def mark(self, limit: int) -> None:
        """Remember the current position for up to *limit* further bytes."""
        del self._buffer[: self._pos]
        self._pos = 0
        self._mark_limit = limit

    def reset(self) -> None:
        """Rewind to the last mark.

        :raises OSError: If no mark is set or more than its limit was read.
        """
        if self._mark_limit < 0:
            msg = "resetting to invalid mark"
            raise OSError(msg)
        self._pos = 0

    def readinto(self, b) -> int:
        if self.closed:
            msg = "I/O operation on closed file."
            raise ValueError(msg)
        size = len(b)
        if self._pos < len(self._buffer):
            n = min(size, len(self._buffer) - self._pos)
            b[:n] = self._buffer[self._pos : self._pos + n]
            self._pos += n
            return n
        data = self._source.read(size)
        if not data:
            return 0
        n = len(data)
        b[:n] = data
        if self._mark_limit >= 0:
            if len(self._buffer) + n > self._mark_limit:
                self._mark_limit = -1
                self._buffer.clear()
                self._pos = 0
            else:
                self._buffer += data
                self._pos += n
        return n

    def close(self) -> None:
        if not self.closed:
            try:
                self._source.close()
            finally:
                self._buffer.clear()
                super().close()
