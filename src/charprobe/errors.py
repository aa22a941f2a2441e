"""Exceptions raised by charprobe."""

from __future__ import annotations

from collections.abc import Sequence


class CharsetDetectionError(ValueError):
    """Raised when no candidate encoding can strictly decode the examined bytes.

    Only the detecting reader raises this; the plain detection functions
    report the same outcome by returning ``None``.
    """

    def __init__(self, length: int, candidates: Sequence[str]) -> None:
        self.length = length
        self.candidates = tuple(candidates)
        super().__init__(
            f"can't detect charset of the first {length} bytes "
            f"(tried {', '.join(self.candidates)})"
        )
