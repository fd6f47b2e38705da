#!/usr/bin/env python3
"""StrokeEngine Benchmark: normalization cost, scan latency and accuracy.

Recognizes jittered copies of the built-in strokes against libraries of
growing size. Extra templates are random walks so the scan has real work.

Usage:
    python examples/benchmark.py
    python examples/benchmark.py --iterations 5000 --library-size 200
"""

from __future__ import annotations

import argparse
import gc
import sys
import time
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stroke_engine.gestures import default_gestures
from stroke_engine.normalizer import normalize
from stroke_engine.recognizer import DollarRecognizer


def random_walks(n: int, rng: np.random.Generator, length: int = 40) -> list[np.ndarray]:
    """Synthetic filler strokes, one cumulative random walk each."""
    return [np.cumsum(rng.normal(0.0, 5.0, (length, 2)), axis=0) for _ in range(n)]


def jittered_queries(n: int, rng: np.random.Generator, jitter: float) -> list[tuple[str, np.ndarray]]:
    library = default_gestures()
    queries = []
    for i in range(n):
        g = library[i % len(library)]
        pts = np.asarray(g.points)
        queries.append((g.name, pts + rng.normal(0.0, jitter, pts.shape)))
    return queries


def summarize(times: list[float]) -> dict:
    times_ms = np.array(times) * 1000
    return {
        "mean_ms": float(np.mean(times_ms)),
        "median_ms": float(np.median(times_ms)),
        "p95_ms": float(np.percentile(times_ms, 95)),
        "p99_ms": float(np.percentile(times_ms, 99)),
        "throughput": 1000.0 / float(np.mean(times_ms)),
    }


def benchmark_normalize(queries: list[tuple[str, np.ndarray]]) -> dict:
    for _, pts in queries[:10]:
        normalize(pts)

    gc.collect()
    times = []
    for _, pts in queries:
        t0 = time.perf_counter()
        normalize(pts)
        times.append(time.perf_counter() - t0)
    return summarize(times)


def benchmark_recognize(recognizer: DollarRecognizer, queries: list[tuple[str, np.ndarray]]) -> dict:
    for _, pts in queries[:10]:
        recognizer.recognize(pts)

    gc.collect()
    times = []
    correct = 0
    for name, pts in queries:
        t0 = time.perf_counter()
        result = recognizer.recognize(pts)
        times.append(time.perf_counter() - t0)
        correct += result.name == name

    stats = summarize(times)
    stats["accuracy"] = correct / len(queries)
    return stats


def print_table(title: str, rows: list[tuple[str, str]]):
    """Print a formatted table."""
    max_key = max(len(r[0]) for r in rows)
    max_val = max(len(r[1]) for r in rows)
    width = max_key + max_val + 7

    print()
    print(f"  ╭{'─' * width}╮")
    print(f"  │ {title:<{width-2}} │")
    print(f"  ├{'─' * width}┤")
    for key, val in rows:
        print(f"  │ {key:<{max_key}}   {val:>{max_val}} │")
    print(f"  ╰{'─' * width}╯")


def main():
    parser = argparse.ArgumentParser(description="StrokeEngine Benchmark")
    parser.add_argument("-n", "--iterations", type=int, default=2000, help="Number of query strokes")
    parser.add_argument("--library-size", type=int, default=100, help="Largest template count to scan")
    parser.add_argument("--jitter", type=float, default=2.0, help="Per-point noise on queries")
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    print()
    print("  ┌─────────────────────────────────────┐")
    print("  │   StrokeEngine Benchmark Suite ✍️    │")
    print("  └─────────────────────────────────────┘")
    print()

    print(f"  Generating {args.iterations} jittered query strokes...")
    queries = jittered_queries(args.iterations, rng, args.jitter)

    print("  Running normalization benchmark...")
    norm = benchmark_normalize(queries)
    print_table("Normalization (64 points)", [
        ("Mean latency", f"{norm['mean_ms']:.3f} ms"),
        ("P95 latency", f"{norm['p95_ms']:.3f} ms"),
        ("Throughput", f"{norm['throughput']:.0f} strokes/sec"),
    ])

    sizes = sorted({len(default_gestures()), args.library_size // 4, args.library_size})
    for size in sizes:
        recognizer = DollarRecognizer.with_defaults()
        filler = random_walks(max(0, size - len(recognizer)), rng)
        for i, pts in enumerate(filler):
            recognizer.add_gesture(f"noise_{i}", pts)

        print(f"  Running recognition benchmark ({len(recognizer)} templates)...")
        rec = benchmark_recognize(recognizer, queries)
        print_table(f"Recognition, {len(recognizer)} templates", [
            ("Accuracy", f"{rec['accuracy']:.1%}"),
            ("Mean latency", f"{rec['mean_ms']:.3f} ms"),
            ("Median latency", f"{rec['median_ms']:.3f} ms"),
            ("P95 latency", f"{rec['p95_ms']:.3f} ms"),
            ("P99 latency", f"{rec['p99_ms']:.3f} ms"),
            ("Throughput", f"{rec['throughput']:.0f} recognitions/sec"),
        ])

    print_table("System", [
        ("Platform", sys.platform),
        ("Python", f"{sys.version.split()[0]}"),
        ("NumPy", f"{np.__version__}"),
    ])
    print()


if __name__ == "__main__":
    main()
