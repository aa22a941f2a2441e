"""Internal shared utilities for charprobe."""

from __future__ import annotations

from typing import BinaryIO

#: Default number of bytes the detecting reader peeks at before decoding.
DEFAULT_DETECT_LENGTH: int = 8192

#: Default window size for one-shot stream scanning.
DEFAULT_BUFFER_SIZE: int = 32_768


def _validate_positive(value: int, name: str) -> None:
    """Raise ValueError if *value* is not a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{name} must be a positive integer"
        raise ValueError(msg)


def _validate_length(length: int, size: int) -> None:
    """Raise ValueError unless 0 <= *length* <= *size*."""
    if not 0 <= length <= size:
        msg = f"length must be between 0 and {size}, got {length}"
        raise ValueError(msg)


def _read_fully(stream: BinaryIO, size: int) -> bytes:
    """Read up to *size* bytes, looping over short reads until EOF."""
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
