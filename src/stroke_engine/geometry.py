"""Geometry primitives for 2D strokes.

Strokes are handled internally as float64 arrays of shape (N, 2). `as_stroke`
converts whatever the capture layer hands us (pairs, ``{"x", "y"}`` dicts,
objects with ``.x``/``.y``) into such an array and always returns a fresh copy,
so nothing downstream can alias caller-owned data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple

import numpy as np

from stroke_engine.errors import InvalidStrokeError


class Point(NamedTuple):
    """A single (x, y) sample."""
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box: min corner plus extents (w/h may be 0)."""
    x: float
    y: float
    w: float
    h: float


def _coerce_point(p: Any) -> tuple[float, float]:
    if isinstance(p, (str, bytes)):
        raise InvalidStrokeError(f"cannot interpret {p!r} as a point")
    if isinstance(p, dict):
        try:
            return float(p["x"]), float(p["y"])
        except KeyError as e:
            raise InvalidStrokeError(f"point {p!r} is missing key {e}") from e
    if hasattr(p, "x") and hasattr(p, "y"):
        return float(p.x), float(p.y)
    try:
        x, y = p[0], p[1]
    except (TypeError, IndexError) as e:
        raise InvalidStrokeError(f"cannot interpret {p!r} as a point") from e
    return float(x), float(y)


def as_stroke(points: Iterable[Any] | np.ndarray) -> np.ndarray:
    """Convert a point sequence to a new (N, 2) float64 array.

    Raises:
        InvalidStrokeError: if points are malformed or not finite.
    """
    if points is None:
        raise InvalidStrokeError("stroke is None")
    if isinstance(points, (str, bytes)):
        raise InvalidStrokeError("stroke must be a sequence of points, not a string")

    if isinstance(points, np.ndarray):
        if points.ndim != 2 or points.shape[1] < 2:
            raise InvalidStrokeError(
                f"expected an array of shape (N, 2), got {points.shape}"
            )
        try:
            arr = np.array(points[:, :2], dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidStrokeError(f"invalid stroke array: {e}") from e
    else:
        try:
            coords = [_coerce_point(p) for p in points]
        except (TypeError, ValueError) as e:
            if isinstance(e, InvalidStrokeError):
                raise
            raise InvalidStrokeError(f"invalid stroke: {e}") from e
        arr = np.array(coords, dtype=np.float64).reshape(-1, 2)

    if not np.all(np.isfinite(arr)):
        raise InvalidStrokeError("stroke contains NaN or infinite coordinates")
    return arr


def distance(p1, p2) -> float:
    """Euclidean distance between two points."""
    dx = float(p2[0]) - float(p1[0])
    dy = float(p2[1]) - float(p1[1])
    return float(np.hypot(dx, dy))


def path_length(points: np.ndarray) -> float:
    """Sum of consecutive point-to-point distances."""
    if len(points) < 2:
        return 0.0
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def centroid(points: np.ndarray) -> np.ndarray:
    """Arithmetic mean of all points, shape (2,)."""
    return points.mean(axis=0)


def bounding_box(points: np.ndarray) -> BoundingBox:
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    return BoundingBox(
        x=float(lo[0]),
        y=float(lo[1]),
        w=float(hi[0] - lo[0]),
        h=float(hi[1] - lo[1]),
    )
