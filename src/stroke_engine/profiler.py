"""Stage timing for the recognizer.

Records how long normalization and the template scan take over a rolling
window of calls:

    profiler = StrokeProfiler()
    recognizer = DollarRecognizer.with_defaults(profiler=profiler)
    recognizer.recognize(points)
    print(profiler.summary())
"""

from __future__ import annotations

import time
from collections import Counter, deque
from contextlib import contextmanager
from typing import Iterator

import numpy as np


class StrokeProfiler:
    """Rolling per-stage timings in milliseconds."""

    def __init__(self, window_size: int = 256):
        self._window_size = window_size
        self._samples: dict[str, deque[float]] = {}
        self._calls: Counter[str] = Counter()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the enclosed block under `name`, even if it raises."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - t0) * 1000.0
            self._samples.setdefault(name, deque(maxlen=self._window_size)).append(elapsed)
            self._calls[name] += 1

    def summary(self) -> dict[str, dict]:
        """Per-stage avg/p95/max over the window, plus the total call count."""
        out = {}
        for name, samples in self._samples.items():
            ms = np.fromiter(samples, dtype=np.float64)
            out[name] = {
                "avg_ms": round(float(ms.mean()), 3),
                "p95_ms": round(float(np.percentile(ms, 95)), 3),
                "max_ms": round(float(ms.max()), 3),
                "calls": self._calls[name],
            }
        return out

    def reset(self):
        self._samples.clear()
        self._calls.clear()
