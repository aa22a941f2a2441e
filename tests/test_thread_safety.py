"""Thread-safety integration tests for concurrent detect() calls."""

from __future__ import annotations

import threading

from charprobe import detect

_SAMPLES: list[tuple[bytes, str]] = [
    ("这是中文测试文本，用于并发检测。".encode(), "UTF-8"),  # noqa: RUF001
    ("这是中文测试文本，用于并发检测。".encode("gbk"), "GBK"),  # noqa: RUF001
    ("表情😀 ok".encode("gb18030"), "GB18030"),
    (b"plain ascii", "UTF-8"),
]


def _run_concurrent_detect(n_workers: int, iterations: int) -> list[str]:
    """Spawn *n_workers* threads per sample, each calling detect() *iterations* times.

    Returns a list of error strings (empty = success).
    """
    errors: list[str] = []
    barrier = threading.Barrier(n_workers * len(_SAMPLES))

    def worker(data: bytes, expected: str) -> None:
        barrier.wait()
        for _ in range(iterations):
            enc = detect(data)
            if enc != expected:
                errors.append(f"Expected {expected}, got {enc!r}")

    threads = []
    for _ in range(n_workers):
        for data, expected in _SAMPLES:
            t = threading.Thread(target=worker, args=(data, expected))
            threads.append(t)
            t.start()

    for t in threads:
        t.join()

    return errors


def test_concurrent_detect_no_corruption():
    """Multiple threads calling detect() simultaneously must not corrupt results."""
    errors = _run_concurrent_detect(n_workers=3, iterations=20)
    assert not errors, "Thread-safety violations:\n" + "\n".join(errors[:10])


def test_concurrent_detect_high_concurrency():
    errors = _run_concurrent_detect(n_workers=8, iterations=10)
    assert not errors, "Thread-safety violations:\n" + "\n".join(errors[:10])
