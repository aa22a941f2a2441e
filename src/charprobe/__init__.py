"""Charset detection by strict trial decoding against ordered candidates."""

from __future__ import annotations

from charprobe.detector import (
    ByteWindow,
    detect,
    detect_file,
    detect_stream,
    detect_window,
)
from charprobe.errors import CharsetDetectionError
from charprobe.reader import CharsetDetectReader
from charprobe.registry import DEFAULT_CANDIDATES, EncodingInfo

__version__ = "1.0.0"
__all__ = [
    "DEFAULT_CANDIDATES",
    "ByteWindow",
    "CharsetDetectReader",
    "CharsetDetectionError",
    "EncodingInfo",
    "detect",
    "detect_file",
    "detect_stream",
    "detect_window",
]
