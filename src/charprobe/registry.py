"""Encoding name resolution and the default candidate list.

Candidate names follow IANA charset spelling (``"UTF-8"``, ``"GBK"``,
``"US-ASCII"``).  Each name resolves to an :class:`EncodingInfo` that
carries the Python codec used for strict decoding.  Names outside
:data:`REGISTRY` are accepted when :func:`codecs.lookup` knows them.
"""

from __future__ import annotations

import codecs
import dataclasses
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

#: Number of shorter lengths tried when a full window fails to decode.
#: Covers a character of up to ``TRUNCATION_RETRIES + 1`` bytes cut at the
#: window boundary.
TRUNCATION_RETRIES: int = 3

# Codecs that honour a leading byte order mark.  Without one they must read
# big-endian, not the platform byte order Python would otherwise assume.
_BOM_SENSING: dict[str, tuple[tuple[bytes, ...], str]] = {
    "utf-16": ((codecs.BOM_UTF16_BE, codecs.BOM_UTF16_LE), "utf-16-be"),
    "utf-32": ((codecs.BOM_UTF32_BE, codecs.BOM_UTF32_LE), "utf-32-be"),
}


@dataclasses.dataclass(frozen=True, slots=True)
class EncodingInfo:
    """A resolvable candidate encoding.

    :param name: Canonical name reported by detection.
    :param python_codec: Codec name passed to :func:`codecs.lookup`.
    :param max_char_bytes: Longest byte sequence of a single character, or
        ``None`` when unknown.
    """

    name: str
    python_codec: str
    max_char_bytes: int | None = None

    def codec_for(self, head: bytes) -> str:
        """Return the codec that decodes bytes beginning with *head*.

        BOM-sensing codecs such as ``utf-16`` are kept when *head* starts
        with a byte order mark, which they consume.  Otherwise the
        big-endian codec is returned.
        """
        entry = _BOM_SENSING.get(self.python_codec)
        if entry is None:
            return self.python_codec
        boms, default = entry
        return self.python_codec if head.startswith(boms) else default


def _normalize(name: str) -> str:
    return name.lower().replace("-", "").replace("_", "")


REGISTRY: dict[str, EncodingInfo] = {
    info.name: info
    for info in (
        EncodingInfo("UTF-8", "utf-8", 4),
        EncodingInfo("GBK", "gbk", 2),
        EncodingInfo("GB2312", "gb2312", 2),
        EncodingInfo("GB18030", "gb18030", 4),
        EncodingInfo("UTF-16BE", "utf-16-be", 4),
        EncodingInfo("UTF-16LE", "utf-16-le", 4),
        EncodingInfo("UTF-16", "utf-16", 4),
        EncodingInfo("BIG5", "big5", 2),
        # Platform alias for BOM-sensing UTF-16; no Python codec has this name.
        EncodingInfo("UNICODE", "utf-16", 4),
        EncodingInfo("US-ASCII", "ascii", 1),
        EncodingInfo("UTF-32BE", "utf-32-be", 4),
        EncodingInfo("UTF-32LE", "utf-32-le", 4),
        EncodingInfo("Shift_JIS", "shift_jis", 2),
        EncodingInfo("EUC-JP", "euc_jp", 3),
        EncodingInfo("EUC-KR", "euc_kr", 2),
        EncodingInfo("ISO-8859-1", "latin-1", 1),
        EncodingInfo("windows-1252", "cp1252", 1),
    )
}

_BY_NORMALIZED: dict[str, EncodingInfo] = {
    _normalize(name): info for name, info in REGISTRY.items()
}


def lookup(name: str | EncodingInfo) -> EncodingInfo:
    """Resolve *name* to an :class:`EncodingInfo`.

    Registry names match case-insensitively and ignore ``-`` and ``_``.
    Any other name is accepted if :func:`codecs.lookup` knows it, and is
    reported back with the caller's spelling.

    :raises LookupError: If no codec exists for *name*.
    """
    if isinstance(name, EncodingInfo):
        return name
    info = _BY_NORMALIZED.get(_normalize(name))
    if info is not None:
        return info
    try:
        codec = codecs.lookup(name)
    except LookupError:
        msg = f"unknown encoding: {name}"
        raise LookupError(msg) from None
    return EncodingInfo(name=name, python_codec=codec.name)


#: The out-of-the-box candidate list, in priority order.
DEFAULT_CANDIDATES: tuple[EncodingInfo, ...] = tuple(
    lookup(name)
    for name in (
        "UTF-8",
        "GBK",
        "GB2312",
        "GB18030",
        "UTF-16BE",
        "UTF-16LE",
        "UTF-16",
        "BIG5",
        "UNICODE",
        "US-ASCII",
    )
)


def get_candidates(
    candidates: Iterable[str | EncodingInfo] | None = None,
) -> tuple[EncodingInfo, ...]:
    """Resolve a candidate list, substituting the default when it is empty.

    Every entry is resolved before returning, so an unknown name fails the
    whole call even if an earlier candidate would have matched.

    :param candidates: Encoding names or :class:`EncodingInfo` objects in
        priority order.  ``None`` or an empty iterable means
        :data:`DEFAULT_CANDIDATES`; a non-empty list replaces it entirely.
    :returns: The resolved candidates, in the given order.
    :raises LookupError: If any name cannot be resolved.
    """
    if candidates is None:
        return DEFAULT_CANDIDATES
    if isinstance(candidates, (str, EncodingInfo)):
        candidates = (candidates,)
    resolved = tuple(lookup(c) for c in candidates)
    if not resolved:
        return DEFAULT_CANDIDATES
    for info in resolved:
        if (
            info.max_char_bytes is not None
            and info.max_char_bytes > TRUNCATION_RETRIES + 1
        ):
            logger.warning(
                "%s characters span up to %d bytes but truncation retry only "
                "covers %d",
                info.name,
                info.max_char_bytes,
                TRUNCATION_RETRIES + 1,
            )
    return resolved
