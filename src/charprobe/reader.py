"""A text stream that detects the encoding of the bytes beneath it."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

from charprobe._utils import DEFAULT_DETECT_LENGTH, _validate_positive
from charprobe.detector import ByteWindow, Candidates, detect_window
from charprobe.errors import CharsetDetectionError
from charprobe.markable import MarkableStream
from charprobe.registry import get_candidates

logger = logging.getLogger(__name__)


def _can_rewind(stream: BinaryIO) -> bool:
    return isinstance(stream, io.IOBase) and stream.seekable()


class CharsetDetectReader(io.TextIOBase):
    """Text reader over a binary stream of unknown encoding.

    The first read peeks at up to *detect_length* bytes, rewinds, detects the
    encoding from the peeked bytes and decodes the whole stream with it from
    then on.  Streams that cannot seek are wrapped in a
    :class:`~charprobe.markable.MarkableStream` to make the rewind possible.

    Instances keep mutable state and are not safe to share between threads.

    :param stream: A readable binary stream.  Reading starts at its current
        position.
    :param detect_length: Number of leading bytes examined.  Larger values
        are more accurate and use more memory.
    :param candidates: Encoding names in priority order.  ``None`` or empty
        uses the default list.  Put a catch-all such as ``"ISO-8859-1"`` last
        to get a fallback instead of an error.
    :param errors: Error handler for decoding the content after detection.
        Malformed bytes past the examined prefix become U+FFFD by default;
        pass ``"strict"`` to raise :exc:`UnicodeDecodeError` instead.
    """

    def __init__(
        self,
        stream: BinaryIO,
        detect_length: int = DEFAULT_DETECT_LENGTH,
        candidates: Candidates = None,
        errors: str = "replace",
    ) -> None:
        super().__init__()
        self._stream: BinaryIO | None = None
        self._reader: io.TextIOWrapper | None = None
        self._encoding: str | None = None
        _validate_positive(detect_length, "detect_length")
        self._detect_length = detect_length
        self._candidates = get_candidates(candidates)
        self._errors = errors
        self._stream = stream

    def _peek(self) -> tuple[ByteWindow, BinaryIO]:
        if _can_rewind(self._stream):
            start = self._stream.tell()
            window = ByteWindow.read_from(self._stream, self._detect_length)
            self._stream.seek(start)
            return window, self._stream
        logger.debug("source cannot seek, buffering %d bytes", self._detect_length)
        markable = MarkableStream(self._stream)
        markable.mark(self._detect_length)
        window = ByteWindow.read_from(markable, self._detect_length)
        markable.reset()
        return window, io.BufferedReader(markable)

    def _ensure_reader(self) -> io.TextIOWrapper:
        if self.closed:
            msg = "I/O operation on closed file."
            raise ValueError(msg)
        if self._reader is not None:
            return self._reader
        window, source = self._peek()
        self._stream = source
        encoding = detect_window(window, self._candidates)
        if encoding is None:
            raise CharsetDetectionError(
                window.length, [c.name for c in self._candidates]
            )
        logger.debug("detected %s from the first %d bytes", encoding, window.length)
        info = next(c for c in self._candidates if c.name == encoding)
        codec = info.codec_for(window.data[:4])
        self._reader = io.TextIOWrapper(
            source,
            encoding=codec,
            errors=self._errors,
            newline="",
        )
        self._encoding = encoding
        return self._reader

    def detect(self) -> str:
        """Resolve the encoding now instead of on the first read.

        :returns: The detected encoding name.
        :raises CharsetDetectionError: If no candidate decodes the peeked bytes.
        """
        self._ensure_reader()
        return self._encoding

    @property
    def encoding(self) -> str | None:
        """The detected encoding name, or ``None`` before detection."""
        return self._encoding

    @property
    def errors(self) -> str:
        return self._errors

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> str:
        return self._ensure_reader().read(size)

    def readline(self, size: int | None = -1) -> str:
        return self._ensure_reader().readline(size)

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._reader is not None:
                self._reader.close()
            elif self._stream is not None:
                self._stream.close()
        finally:
            super().close()
