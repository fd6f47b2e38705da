"""$1 unistroke recognition with the Protractor distance.

Each stored template is a unit vector produced by the normalizer. A query
stroke goes through the same pipeline and is compared against every
template with the optimal cosine distance, a closed-form replacement for the
classic golden-section rotation search. The nearest template wins.

Usage:
    recognizer = DollarRecognizer.with_defaults()
    result = recognizer.recognize([(10, 10), (40, 60), (90, 5)])
    print(result.name, result.score)

    recognizer.add_gesture("zigzag", points, on_complete="undo")
    recognizer.remove_gesture("zigzag")
"""

from __future__ import annotations

import logging
import math
import threading
import time
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

import numpy as np

from stroke_engine.config import RecognizerConfig
from stroke_engine.geometry import Point
from stroke_engine.gestures import alt_gestures, default_gestures
from stroke_engine.profiler import StrokeProfiler
from stroke_engine.templates import GestureDefinition, Template

logger = logging.getLogger("stroke_engine.recognizer")

NO_MATCH = "No match."


def optimal_cosine_distance(v1: np.ndarray, v2: np.ndarray) -> float:
    """Minimum angular distance between two unit vectors over all rotations.

    Both vectors hold interleaved (x, y) pairs. Returns radians in [0, pi];
    0 is a perfect match.
    """
    v1 = np.asarray(v1, dtype=np.float64)
    v2 = np.asarray(v2, dtype=np.float64)
    if v1.shape != v2.shape or v1.ndim != 1 or len(v1) % 2:
        raise ValueError(
            f"vectors must be 1-D, of equal even length; got {v1.shape} and {v2.shape}"
        )

    a = float(np.dot(v1, v2))
    b = float(np.dot(v1[0::2], v2[1::2]) - np.dot(v1[1::2], v2[0::2]))

    if a == 0.0:
        angle = math.copysign(math.pi / 2, b)
    else:
        angle = math.atan(b / a)

    similarity = a * math.cos(angle) + b * math.sin(angle)
    if not math.isfinite(similarity):
        raise ValueError("vectors contain non-finite values")
    # Accumulated rounding can push this just outside acos's domain
    return math.acos(min(1.0, max(-1.0, similarity)))


class ScoreBand(Enum):
    """Advisory confidence band for a score."""
    REJECTED = "rejected"
    TENTATIVE = "tentative"
    CONFIDENT = "confident"

    @classmethod
    def classify(cls, score: float, config: Optional[RecognizerConfig] = None) -> ScoreBand:
        config = config or RecognizerConfig()
        if score <= config.pass_threshold:
            return cls.REJECTED
        if score <= config.confident_threshold:
            return cls.TENTATIVE
        return cls.CONFIDENT


@dataclass(frozen=True)
class RecognitionResult:
    """Outcome of one recognize() call.

    `score` is ``1 - distance`` and is not clamped, so it can dip below 0
    for very dissimilar strokes. `time` is the scan duration in whole ms.
    """
    name: str
    score: float
    time: int
    on_complete: Optional[Any] = None
    band: ScoreBand = ScoreBand.REJECTED

    @property
    def matched(self) -> bool:
        return self.band is not ScoreBand.REJECTED

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "time": self.time,
            "band": self.band.value,
        }


def _as_definition(item: Any) -> GestureDefinition:
    if isinstance(item, GestureDefinition):
        return item
    if isinstance(item, dict):
        return GestureDefinition(**item)
    return GestureDefinition(*item)


class DollarRecognizer:
    """Nearest-template stroke recognizer.

    Holds an ordered list of templates. Order only matters for ties: the
    earliest-added template wins. Not thread-safe; see SynchronizedRecognizer.
    """

    def __init__(
        self,
        gestures: Iterable[Any] = (),
        config: Optional[RecognizerConfig] = None,
        profiler: Optional[StrokeProfiler] = None,
    ):
        self.config = config or RecognizerConfig()
        self._profiler = profiler
        self._templates: list[Template] = []

        for item in gestures:
            definition = _as_definition(item)
            self._templates.append(self._build(
                definition.name, definition.points, definition.on_complete
            ))

        if self._templates:
            logger.debug("Recognizer created with %d templates", len(self._templates))

    def _stage(self, name: str):
        if self._profiler is None:
            return nullcontext()
        return self._profiler.stage(name)

    def _build(self, name: str, points, on_complete: Optional[Any]) -> Template:
        with self._stage("normalize"):
            return Template.from_stroke(name, points, on_complete, self.config)

    def recognize(self, points: Iterable[Any] | np.ndarray) -> RecognitionResult:
        """Return the closest template for a completed stroke.

        Raises:
            InvalidStrokeError: if the stroke cannot be normalized.
        """
        candidate = self._build("", points, None)

        best_index = -1
        best_distance = math.inf
        t0 = time.perf_counter()
        with self._stage("match"):
            for i, template in enumerate(self._templates):
                d = optimal_cosine_distance(template.vector, candidate.vector)
                if d < best_distance:
                    best_distance = d
                    best_index = i
        elapsed = int((time.perf_counter() - t0) * 1000)

        if best_index == -1:
            logger.debug("No templates registered, returning no-match result")
            return RecognitionResult(name=NO_MATCH, score=0.0, time=elapsed)

        winner = self._templates[best_index]
        score = 1.0 - best_distance
        logger.debug(
            "Recognized %r (score=%.3f, %d templates, %d ms)",
            winner.name, score, len(self._templates), elapsed,
        )
        return RecognitionResult(
            name=winner.name,
            score=score,
            time=elapsed,
            on_complete=winner.on_complete,
            band=ScoreBand.classify(score, self.config),
        )

    def add_gesture(
        self,
        name: str,
        points: Iterable[Any] | np.ndarray,
        on_complete: Optional[Any] = None,
    ) -> int:
        """Append a template. Returns how many templates now share `name`."""
        self._templates.append(self._build(name, points, on_complete))
        count = sum(1 for t in self._templates if t.name == name)
        if count > 1:
            logger.debug("Added gesture %r (%d templates share this name)", name, count)
        else:
            logger.debug("Added gesture %r", name)
        return count

    def remove_gesture(self, name: str) -> int:
        """Remove every template called `name`. Returns the total remaining."""
        before = len(self._templates)
        self._templates = [t for t in self._templates if t.name != name]
        logger.debug(
            "Removed %d template(s) named %r, %d remaining",
            before - len(self._templates), name, len(self._templates),
        )
        return len(self._templates)

    def original_points(self, name: str) -> Optional[tuple[Point, ...]]:
        """Raw points of the first template called `name`, if any."""
        for template in self._templates:
            if template.name == name:
                return template.original_points
        return None

    def names(self) -> list[str]:
        """Distinct template names in insertion order."""
        return list(dict.fromkeys(t.name for t in self._templates))

    @property
    def templates(self) -> tuple[Template, ...]:
        return tuple(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(tuple(self._templates))

    def __contains__(self, name: object) -> bool:
        return any(t.name == name for t in self._templates)

    @classmethod
    def with_defaults(
        cls,
        alt: bool = False,
        config: Optional[RecognizerConfig] = None,
        profiler: Optional[StrokeProfiler] = None,
    ) -> DollarRecognizer:
        """Create a recognizer loaded with the built-in gesture library.

        Args:
            alt: Use the alternate (layout) library instead of the default one.
        """
        gestures = alt_gestures() if alt else default_gestures()
        return cls(gestures, config=config, profiler=profiler)


class SynchronizedRecognizer:
    """Serializes access to a DollarRecognizer shared between threads."""

    def __init__(self, recognizer: Optional[DollarRecognizer] = None):
        self._recognizer = recognizer or DollarRecognizer()
        self._lock = threading.Lock()

    def recognize(self, points) -> RecognitionResult:
        with self._lock:
            return self._recognizer.recognize(points)

    def add_gesture(self, name: str, points, on_complete: Optional[Any] = None) -> int:
        with self._lock:
            return self._recognizer.add_gesture(name, points, on_complete)

    def remove_gesture(self, name: str) -> int:
        with self._lock:
            return self._recognizer.remove_gesture(name)

    def original_points(self, name: str) -> Optional[tuple[Point, ...]]:
        with self._lock:
            return self._recognizer.original_points(name)

    @property
    def templates(self) -> tuple[Template, ...]:
        with self._lock:
            return self._recognizer.templates

    def __len__(self) -> int:
        with self._lock:
            return len(self._recognizer)
