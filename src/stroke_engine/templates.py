"""Gesture definitions and the immutable templates built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import numpy as np

from stroke_engine.config import RecognizerConfig
from stroke_engine.geometry import Point, as_stroke
from stroke_engine.normalizer import normalize


@dataclass
class GestureDefinition:
    """A named example stroke, as supplied by the caller.

    `on_complete` is an opaque handle (callback, action id, anything). The
    engine only carries it through to the recognition result.
    """
    name: str
    points: list
    on_complete: Optional[Any] = None
    description: str = ""


@dataclass(frozen=True, eq=False)
class Template:
    """A gesture normalized once at creation time.

    Never mutated after construction; replacing a gesture means removing it
    from the recognizer and adding a new one.
    """
    name: str
    original_points: tuple[Point, ...]
    vector: np.ndarray = field(repr=False)
    on_complete: Optional[Any] = None

    @classmethod
    def from_stroke(
        cls,
        name: str,
        points: Iterable[Any] | np.ndarray,
        on_complete: Optional[Any] = None,
        config: Optional[RecognizerConfig] = None,
    ) -> Template:
        """Normalize `points` and build a template.

        Raises:
            InvalidStrokeError: if the stroke cannot be normalized.
        """
        raw = as_stroke(points)
        vector = normalize(raw, config)
        vector.setflags(write=False)
        original = tuple(Point(float(x), float(y)) for x, y in raw)
        return cls(name=name, original_points=original, vector=vector, on_complete=on_complete)

    @classmethod
    def from_definition(
        cls,
        definition: GestureDefinition,
        config: Optional[RecognizerConfig] = None,
    ) -> Template:
        return cls.from_stroke(
            definition.name, definition.points, definition.on_complete, config
        )

    @property
    def num_points(self) -> int:
        return len(self.vector) // 2
