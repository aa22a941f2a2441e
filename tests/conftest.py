"""Shared test fixtures."""

from __future__ import annotations

import pytest

import charprobe.detector

MIXED_TEXT = "charprobe 是一个用于检测文本编码的小工具，支持中文与 English 混排。"  # noqa: RUF001


class ChunkedSource:
    """A non-seekable byte source that returns at most *chunk* bytes per read."""

    def __init__(self, data: bytes, chunk: int = 7) -> None:
        self._data = data
        self._pos = 0
        self._chunk = chunk
        self.reads = 0
        self.closed = False

    def read(self, size: int = -1) -> bytes:
        if self.closed:
            msg = "read from closed source"
            raise ValueError(msg)
        self.reads += 1
        if size < 0:
            size = len(self._data)
        size = min(size, self._chunk)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += len(chunk)
        return chunk

    def close(self) -> None:
        self.closed = True


class FailingSource(ChunkedSource):
    """A byte source whose reads fail after *good* bytes."""

    def __init__(self, data: bytes, good: int) -> None:
        super().__init__(data, chunk=good)
        self._good = good

    def read(self, size: int = -1) -> bytes:
        if self._pos >= self._good:
            msg = "device not ready"
            raise OSError(msg)
        return super().read(size)


@pytest.fixture
def mixed_text() -> str:
    return MIXED_TEXT


@pytest.fixture
def probed_lengths(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    """Record the length of every probe the detector runs."""
    lengths: list[int] = []
    real_probe = charprobe.detector.probe

    def spy(data, length, encoding):
        lengths.append(length)
        return real_probe(data, length, encoding)

    monkeypatch.setattr(charprobe.detector, "probe", spy)
    return lengths


def cut_utf8_window(size: int = 8192) -> tuple[bytes, str]:
    """Return UTF-8 bytes whose first *size* bytes end on the lead byte of 中.

    The Arabic letters place surrogate-range bytes at both even and odd
    offsets, so none of the UTF-16 candidates can decode the window either.
    """
    head = "بaب"
    text = head + "a" * (size - 1 - len(head.encode())) + "中"
    return text.encode(), text
