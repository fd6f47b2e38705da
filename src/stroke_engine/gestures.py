"""Built-in gesture libraries.

Strokes are generated in screen coordinates (y grows downward) inside a
100 x 100 box, drawn in the direction a person would naturally draw them.
Direction matters: the first point anchors the orientation used during
normalization.

Two libraries ship with the engine:
- default: x, rectangle, circle, check, caret, v, delete, pigtail
- alt: circle_layout, triangle_layout (bound to a modifier key by the host)
"""

from __future__ import annotations

import math

from stroke_engine.templates import GestureDefinition


def _polyline(vertices: list[tuple[float, float]], steps: int = 8) -> list[tuple[float, float]]:
    """Densify a polyline by linear interpolation along each edge."""
    points = [vertices[0]]
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:]):
        for i in range(1, steps + 1):
            t = i / steps
            points.append((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))
    return points


def _ellipse(n: int = 48, start: float = -math.pi / 2) -> list[tuple[float, float]]:
    """Closed clockwise (on screen) loop starting at the top."""
    points = []
    for i in range(n + 1):
        a = start + 2 * math.pi * i / n
        points.append((50 + 50 * math.cos(a), 50 + 50 * math.sin(a)))
    return points


def _pigtail(n: int = 48) -> list[tuple[float, float]]:
    """Curl with a single loop, drawn left to right."""
    # Prolate cycloid: d > r gives the loop
    r, d = 10.0, 22.0
    points = []
    for i in range(n + 1):
        t = 2 * math.pi * i / n
        points.append((r * t - d * math.sin(t) + 10, 60 - (r - d * math.cos(t))))
    return points


def x_stroke() -> list[tuple[float, float]]:
    return _polyline([(0, 0), (100, 100), (100, 0), (0, 100)])


def rectangle_stroke() -> list[tuple[float, float]]:
    return _polyline([(0, 0), (100, 0), (100, 70), (0, 70), (0, 0)])


def circle_stroke() -> list[tuple[float, float]]:
    return _ellipse()


def check_stroke() -> list[tuple[float, float]]:
    return _polyline([(0, 55), (30, 100), (100, 0)])


def caret_stroke() -> list[tuple[float, float]]:
    return _polyline([(0, 100), (50, 0), (100, 100)])


def v_stroke() -> list[tuple[float, float]]:
    return _polyline([(0, 0), (50, 100), (100, 0)])


def delete_stroke() -> list[tuple[float, float]]:
    return _polyline([(0, 0), (100, 100), (0, 100), (100, 0), (0, 0)])


def pigtail_stroke() -> list[tuple[float, float]]:
    return _pigtail()


def triangle_stroke() -> list[tuple[float, float]]:
    return _polyline([(50, 0), (100, 90), (0, 90), (50, 0)])


def default_gestures() -> list[GestureDefinition]:
    """The standard single-stroke command set."""
    return [
        GestureDefinition("x", x_stroke(), description="Cross drawn as one stroke"),
        GestureDefinition("rectangle", rectangle_stroke(), description="Closed box, clockwise from top-left"),
        GestureDefinition("circle", circle_stroke(), description="Closed loop, clockwise from the top"),
        GestureDefinition("check", check_stroke(), description="Check mark"),
        GestureDefinition("caret", caret_stroke(), description="Upward chevron"),
        GestureDefinition("v", v_stroke(), description="Downward chevron"),
        GestureDefinition("delete", delete_stroke(), description="Hourglass scribble"),
        GestureDefinition("pigtail", pigtail_stroke(), description="Stroke with a single loop"),
    ]


def alt_gestures() -> list[GestureDefinition]:
    """Layout gestures used while the modifier key is held."""
    return [
        GestureDefinition("circle_layout", circle_stroke(), description="Arrange selection in a circle"),
        GestureDefinition("triangle_layout", triangle_stroke(), description="Arrange selection in a triangle"),
    ]
