"""StrokeEngine CLI.

Usage:
    stroke-engine recognize STROKE_FILE   Match a stroke against the built-in library
    stroke-engine gestures                List built-in gestures
    stroke-engine benchmark               Time recognition of jittered strokes

STROKE_FILE is JSON: a list of [x, y] pairs or {"x": .., "y": ..} objects,
or an object with a "points" key holding such a list.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Optional

try:
    import typer
except ImportError:
    raise ImportError("typer is required for CLI. Install with: pip install typer")

from stroke_engine.config import RecognizerConfig
from stroke_engine.errors import ConfigError, StrokeError

app = typer.Typer(
    name="stroke-engine",
    help="✍️  Single-stroke gesture recognition ($1 + Protractor).",
    add_completion=False,
)


def _load_config(path: Optional[str]) -> RecognizerConfig:
    if not path:
        return RecognizerConfig()
    try:
        return RecognizerConfig.from_yaml(path)
    except (OSError, ConfigError) as e:
        typer.echo(f"❌ Could not load config {path}: {e}", err=True)
        raise typer.Exit(1)


def _load_stroke(path: Path) -> list:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("points", [])
    return data


@app.command()
def recognize(
    stroke_file: str = typer.Argument(..., help="JSON file holding one stroke"),
    alt: bool = typer.Option(False, "--alt", help="Use the alternate (layout) library"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to recognizer YAML config"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Recognize a single stroke."""
    from stroke_engine.recognizer import DollarRecognizer

    path = Path(stroke_file)
    if not path.exists():
        typer.echo(f"❌ Stroke file not found: {stroke_file}", err=True)
        raise typer.Exit(1)

    try:
        points = _load_stroke(path)
    except json.JSONDecodeError as e:
        typer.echo(f"❌ {stroke_file} is not valid JSON: {e}", err=True)
        raise typer.Exit(1)
    except UnicodeDecodeError as e:
        typer.echo(f"❌ {stroke_file} is not UTF-8 text: {e}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"❌ Could not read {stroke_file}: {e}", err=True)
        raise typer.Exit(1)

    recognizer = DollarRecognizer.with_defaults(alt=alt, config=_load_config(config))

    try:
        result = recognizer.recognize(points)
    except StrokeError as e:
        typer.echo(f"❌ Invalid stroke: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict()))
        return

    typer.echo(f"🎯 {result.name}")
    typer.echo(f"   Score: {result.score:.3f} ({result.band.value})")
    typer.echo(f"   Scan time: {result.time} ms")


@app.command()
def gestures(
    alt: bool = typer.Option(False, "--alt", help="List the alternate (layout) library"),
):
    """List the built-in gestures."""
    from stroke_engine.gestures import alt_gestures, default_gestures

    library = alt_gestures() if alt else default_gestures()
    for g in library:
        typer.echo(f"{g.name:18s} {g.description}")


@app.command()
def benchmark(
    iterations: int = typer.Option(500, help="Number of strokes to recognize"),
    jitter: float = typer.Option(2.0, help="Per-point noise added to each stroke"),
    alt: bool = typer.Option(False, "--alt", help="Benchmark the alternate library"),
    seed: int = typer.Option(42, help="Random seed"),
):
    """Run recognition benchmarks on jittered built-in strokes."""
    import numpy as np
    from stroke_engine.gestures import alt_gestures, default_gestures
    from stroke_engine.profiler import StrokeProfiler
    from stroke_engine.recognizer import DollarRecognizer

    library = alt_gestures() if alt else default_gestures()
    profiler = StrokeProfiler()
    recognizer = DollarRecognizer(library, profiler=profiler)
    profiler.reset()

    typer.echo(f"⚡ Running benchmark: {iterations} strokes, {len(recognizer)} templates")

    rng = np.random.default_rng(seed)
    correct = 0
    times = []
    for i in range(iterations):
        gesture = library[i % len(library)]
        stroke = np.asarray(gesture.points) + rng.normal(0.0, jitter, (len(gesture.points), 2))

        t0 = time.perf_counter()
        result = recognizer.recognize(stroke)
        times.append(time.perf_counter() - t0)

        if result.name == gesture.name:
            correct += 1

    avg_ms = sum(times) / len(times) * 1000
    p95_ms = sorted(times)[int(len(times) * 0.95)] * 1000

    typer.echo(f"\n📊 Results:")
    typer.echo(f"   Accuracy:        {correct / iterations:.1%}")
    typer.echo(f"   Average latency: {avg_ms:.3f} ms")
    typer.echo(f"   P95 latency:     {p95_ms:.3f} ms")

    typer.echo(f"\n📈 Stage breakdown:")
    for name, stats in profiler.summary().items():
        typer.echo(f"   {name:12s} avg={stats['avg_ms']:.3f}ms  p95={stats['p95_ms']:.3f}ms")


def main():
    app()


if __name__ == "__main__":
    main()
