"""Stroke normalization: resample -> rotate -> scale -> translate -> vectorize.

Turns an arbitrary-length raw stroke into a fixed-length unit vector that the
Protractor distance can compare. Stage order matters: the scale step is
non-uniform, so it has to run after rotation or results change for any stroke
with a non-square bounding box.

Usage:
    vec = normalize(points)                     # default 64 points / 250 square
    pts = canonical_points(points, config)      # (N, 2) before vectorizing
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional

import numpy as np

from stroke_engine.config import DEGENERATE_REJECT, RecognizerConfig
from stroke_engine.errors import DegenerateBoundingBoxError, InvalidStrokeError
from stroke_engine.geometry import (
    as_stroke,
    bounding_box,
    centroid,
    distance,
    path_length,
)


def validate_stroke(points: Iterable[Any] | np.ndarray) -> np.ndarray:
    """Return a private (N, 2) copy of `points` or raise InvalidStrokeError."""
    pts = as_stroke(points)
    if len(pts) < 2:
        raise InvalidStrokeError(f"stroke needs at least 2 points, got {len(pts)}")
    with np.errstate(over="ignore", invalid="ignore"):
        length = path_length(pts)
    if not math.isfinite(length):
        raise InvalidStrokeError("stroke path length overflows (coordinates too large)")
    if length <= 0.0:
        raise InvalidStrokeError("stroke has zero path length (all points coincide)")
    return pts


def resample(points: Iterable[Any] | np.ndarray, n: int) -> np.ndarray:
    """Resample a stroke to exactly `n` points evenly spaced by arc length.

    Each interpolated point becomes the start of the next measured segment,
    so spacing is measured along the new polyline rather than from the
    original vertices.

    Args:
        points: Raw stroke, at least 2 points with non-zero path length.
        n: Number of output points (>= 2).

    Returns:
        Array of shape (n, 2).
    """
    if n < 2:
        raise ValueError(f"resample needs n >= 2, got {n}")

    pts = validate_stroke(points)
    interval = path_length(pts) / (n - 1)

    accumulated = 0.0
    prev = pts[0]
    out = [prev.copy()]

    for cur in pts[1:]:
        d = distance(prev, cur)
        while accumulated + d >= interval and len(out) < n:
            t = (interval - accumulated) / d
            q = prev + t * (cur - prev)
            out.append(q)
            prev = q
            d = distance(prev, cur)
            accumulated = 0.0
        accumulated += d
        prev = cur

    # Rounding can leave us one point short of n
    while len(out) < n:
        out.append(pts[-1].copy())

    return np.array(out, dtype=np.float64)


def indicative_angle(points: np.ndarray) -> float:
    """Angle (radians) from the first point to the centroid."""
    c = centroid(points)
    return math.atan2(c[1] - points[0][1], c[0] - points[0][0])


def rotate_by(points: np.ndarray, radians: float) -> np.ndarray:
    """Rotate all points about the centroid."""
    c = centroid(points)
    cos, sin = math.cos(radians), math.sin(radians)
    rel = points - c
    rotated = np.empty_like(rel)
    rotated[:, 0] = rel[:, 0] * cos - rel[:, 1] * sin
    rotated[:, 1] = rel[:, 0] * sin + rel[:, 1] * cos
    return rotated + c


def scale_to(
    points: np.ndarray,
    size: float,
    degenerate_policy: str = DEGENERATE_REJECT,
    epsilon: float = 1e-9,
) -> np.ndarray:
    """Non-uniformly scale so the bounding box becomes `size` x `size`.

    An extent at or below ``epsilon * max(w, h)`` counts as degenerate. With
    the "reject" policy that raises DegenerateBoundingBoxError; with
    "epsilon" the extent is floored to that value and scaling proceeds.
    """
    box = bounding_box(points)
    longest = max(box.w, box.h)
    if longest <= 0.0:
        raise InvalidStrokeError("cannot scale a stroke with zero extent")

    floor = epsilon * longest
    w, h = box.w, box.h
    if w <= floor or h <= floor:
        if degenerate_policy == DEGENERATE_REJECT:
            raise DegenerateBoundingBoxError(w, h)
        w, h = max(w, floor), max(h, floor)

    return points * np.array([size / w, size / h])


def translate_to(points: np.ndarray, origin=(0.0, 0.0)) -> np.ndarray:
    """Shift points so their centroid lands on `origin`."""
    return points + (np.asarray(origin, dtype=np.float64) - centroid(points))


def vectorize(points: np.ndarray) -> np.ndarray:
    """Flatten to [x0, y0, x1, y1, ...] and scale to unit Euclidean norm."""
    flat = np.asarray(points, dtype=np.float64).reshape(-1)
    magnitude = float(np.linalg.norm(flat))
    if not math.isfinite(magnitude):
        raise InvalidStrokeError("stroke normalized to non-finite coordinates")
    if magnitude == 0.0:
        raise InvalidStrokeError("cannot vectorize a stroke collapsed to the origin")
    return flat / magnitude


def canonical_points(
    points: Iterable[Any] | np.ndarray,
    config: Optional[RecognizerConfig] = None,
) -> np.ndarray:
    """Run resample, rotate, scale and translate. Returns shape (N, 2)."""
    config = config or RecognizerConfig()

    pts = resample(points, config.num_points)
    pts = rotate_by(pts, -indicative_angle(pts))
    pts = scale_to(
        pts,
        config.square_size,
        degenerate_policy=config.degenerate_policy,
        epsilon=config.degenerate_epsilon,
    )
    return translate_to(pts, config.origin)


def normalize(
    points: Iterable[Any] | np.ndarray,
    config: Optional[RecognizerConfig] = None,
) -> np.ndarray:
    """Full pipeline: raw stroke -> unit vector of length 2 * num_points."""
    return vectorize(canonical_points(points, config))
