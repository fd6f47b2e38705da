"""Exceptions raised by the stroke recognizer."""

from __future__ import annotations


class StrokeError(ValueError):
    """Base class for problems with a stroke handed to the engine."""


class InvalidStrokeError(StrokeError):
    """Stroke cannot be normalized: too few points, zero length, bad values."""


class DegenerateBoundingBoxError(InvalidStrokeError):
    """Rotated stroke has (near) zero width or height, so it cannot be scaled."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        super().__init__(
            f"stroke bounding box is degenerate (w={width:.3g}, h={height:.3g}); "
            "straight-line strokes cannot be scaled to a square"
        )


class ConfigError(ValueError):
    """Invalid recognizer configuration."""
