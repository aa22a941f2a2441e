"""Strict trial decoding of a byte span under one encoding."""

from __future__ import annotations

import codecs

from charprobe._utils import _validate_length
from charprobe.registry import EncodingInfo, lookup


def probe(
    data: bytes | bytearray | memoryview,
    length: int,
    encoding: str | EncodingInfo,
) -> bool:
    """Return True if ``data[:length]`` decodes under *encoding* without errors.

    Decoding is strict: a single malformed or unmappable sequence anywhere in
    the span makes the probe fail.  A truncated trailing character counts as
    malformed.  *data* is decoded through a view and never modified.

    :param data: The bytes to examine.
    :param length: Number of leading bytes of *data* to decode.
    :param encoding: Encoding name or resolved :class:`EncodingInfo`.
    :returns: Whether the whole span decoded cleanly.
    :raises LookupError: If *encoding* cannot be resolved.
    :raises ValueError: If *length* is outside ``0..len(data)``.
    """
    info = lookup(encoding)
    view = memoryview(data).cast("B")
    _validate_length(length, view.nbytes)
    span = view[:length]
    codec = info.codec_for(bytes(span[:4]))
    try:
        codecs.decode(span, codec, "strict")
    except UnicodeDecodeError:
        return False
    return True
