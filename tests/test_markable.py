# tests/test_markable.py
from __future__ import annotations

import io

import pytest

from charprobe.markable import MarkableStream
from conftest import ChunkedSource


def test_reset_replays_marked_bytes():
    stream = MarkableStream(ChunkedSource(b"0123456789", chunk=3))
    stream.mark(8)
    assert stream.read(3) == b"012"
    assert stream.read(3) == b"345"
    stream.reset()
    assert stream.read(4) == b"0123"
    assert stream.read(10) == b"45"
    assert stream.read(10) == b"678"
    assert stream.read(10) == b"9"
    assert stream.read(10) == b""


def test_mark_mid_stream():
    stream = MarkableStream(ChunkedSource(b"abcdef", chunk=2))
    assert stream.read(2) == b"ab"
    stream.mark(4)
    assert stream.read(2) == b"cd"
    stream.reset()
    assert stream.readall() == b"cdef"


def test_reset_without_mark_raises():
    stream = MarkableStream(ChunkedSource(b"abc"))
    with pytest.raises(OSError, match="invalid mark"):
        stream.reset()


def test_reading_past_limit_invalidates_mark():
    stream = MarkableStream(ChunkedSource(b"abcdef", chunk=3))
    stream.mark(4)
    stream.read(3)
    stream.read(3)
    with pytest.raises(OSError, match="invalid mark"):
        stream.reset()


def test_buffered_reader_sees_every_byte_once():
    data = bytes(range(256)) * 4
    raw = MarkableStream(ChunkedSource(data, chunk=5))
    raw.mark(100)
    assert raw.read(100) == data[:5]
    raw.reset()
    assert io.BufferedReader(raw).read() == data


def test_close_closes_source():
    source = ChunkedSource(b"abc")
    stream = MarkableStream(source)
    stream.close()
    assert stream.closed
    assert source.closed


def test_read_after_close_raises():
    stream = MarkableStream(ChunkedSource(b"abc"))
    stream.close()
    with pytest.raises(ValueError):
        stream.read(1)
