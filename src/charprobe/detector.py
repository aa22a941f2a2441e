"""First-match charset detection over ordered candidate lists.

Each candidate is tried in order with a strict decode; the first one that
succeeds wins.  Order is a tie-break policy, not an accuracy ranking: plain
ASCII bytes decode under nearly every candidate, and the earliest-listed one
is reported.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from charprobe._utils import (
    DEFAULT_BUFFER_SIZE,
    _read_fully,
    _validate_length,
    _validate_positive,
)
from charprobe.probe import probe
from charprobe.registry import TRUNCATION_RETRIES, EncodingInfo, get_candidates

logger = logging.getLogger(__name__)

Candidates = Iterable[str | EncodingInfo] | None


@dataclasses.dataclass(frozen=True, slots=True)
class ByteWindow:
    """Bytes produced by a single bounded read.

    *length* may be smaller than *capacity* when the source ended inside the
    window.
    """

    data: bytes
    length: int
    capacity: int

    def __post_init__(self) -> None:
        if not 0 <= self.length <= min(len(self.data), self.capacity):
            msg = (
                f"window length {self.length} does not fit "
                f"{len(self.data)} bytes of capacity {self.capacity}"
            )
            raise ValueError(msg)

    @classmethod
    def read_from(cls, stream: BinaryIO, capacity: int) -> ByteWindow:
        """Fill a window of *capacity* bytes from *stream*."""
        data = _read_fully(stream, capacity)
        return cls(data=data, length=len(data), capacity=capacity)

    @property
    def is_full(self) -> bool:
        """Whether the read filled the window, so more data likely follows."""
        return self.length == self.capacity

    def view(self) -> memoryview:
        """Return a read-only view of the valid bytes."""
        return memoryview(self.data)[: self.length]


def _first_match(
    data: bytes | memoryview, length: int, candidates: tuple[EncodingInfo, ...]
) -> str | None:
    for info in candidates:
        if probe(data, length, info):
            logger.debug("%d bytes decode as %s", length, info.name)
            return info.name
    logger.debug("no candidate decodes %d bytes", length)
    return None


def detect(
    data: bytes | bytearray | memoryview,
    length: int | None = None,
    candidates: Candidates = None,
) -> str | None:
    """Return the first candidate that strictly decodes ``data[:length]``.

    :param data: The raw bytes to examine.
    :param length: Number of leading bytes to examine.  Defaults to all of
        *data*.
    :param candidates: Encoding names in priority order.  ``None`` or empty
        uses :data:`~charprobe.registry.DEFAULT_CANDIDATES`; any other list
        replaces the default entirely.
    :returns: The matching encoding name, or ``None`` if no candidate decodes
        the bytes.
    :raises LookupError: If a candidate name is unknown.
    :raises ValueError: If *length* is outside ``0..len(data)``.
    """
    resolved = get_candidates(candidates)
    raw = data if isinstance(data, bytes) else bytes(data)
    if length is None:
        length = len(raw)
    _validate_length(length, len(raw))
    logger.debug("probing %d bytes against %d candidates", length, len(resolved))
    return _first_match(raw, length, resolved)


def detect_window(window: ByteWindow, candidates: Candidates = None) -> str | None:
    """Detect the encoding of a window cut from the head of a larger stream.

    When a full window fails, its last bytes may be the head of a multi-byte
    character split at the boundary.  The same candidates are then retried
    one, two and three bytes shorter, stopping at the first match.  A window
    that was not filled already holds the whole stream and is never retried.

    :param window: The bytes read from the head of the stream.
    :param candidates: Encoding names in priority order.
    :returns: The matching encoding name, or ``None``.
    """
    resolved = get_candidates(candidates)
    logger.debug(
        "probing %d-byte window against %d candidates",
        window.length,
        len(resolved),
    )
    view = window.view()
    encoding = _first_match(view, window.length, resolved)
    if encoding is not None or not window.is_full:
        return encoding
    for shrink in range(1, TRUNCATION_RETRIES + 1):
        length = window.length - shrink
        if length < 0:
            break
        logger.debug("retrying detection at %d bytes", length)
        encoding = _first_match(view, length, resolved)
        if encoding is not None:
            return encoding
    return None


def detect_stream(
    stream: BinaryIO,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    candidates: Candidates = None,
) -> str | None:
    """Detect the encoding of a binary stream, window by window.

    Windows of *buffer_size* bytes are read until one of them decodes under
    some candidate or the stream ends.  Each window is probed on its own,
    without truncation retry.

    The stream is consumed and always closed.  To read the content after
    detection, use :class:`~charprobe.reader.CharsetDetectReader` instead.

    :param stream: A readable binary stream.
    :param buffer_size: Bytes per probed window.
    :param candidates: Encoding names in priority order.
    :returns: The matching encoding name, or ``None`` if the stream is empty
        or no window decodes.
    """
    try:
        _validate_positive(buffer_size, "buffer_size")
        resolved = get_candidates(candidates)
        while True:
            window = ByteWindow.read_from(stream, buffer_size)
            if not window.length:
                return None
            encoding = _first_match(window.view(), window.length, resolved)
            if encoding is not None:
                return encoding
    finally:
        stream.close()


def detect_file(
    path: str | os.PathLike[str],
    candidates: Candidates = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> str | None:
    """Detect the encoding of the file at *path*.

    :raises OSError: If the file cannot be opened or read.
    """
    return detect_stream(Path(path).open("rb"), buffer_size, candidates)
