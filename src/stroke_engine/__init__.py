"""StrokeEngine - $1 unistroke recognition with the Protractor distance."""

__version__ = "0.1.0"

from stroke_engine.errors import (
    StrokeError,
    InvalidStrokeError,
    DegenerateBoundingBoxError,
    ConfigError,
)
from stroke_engine.config import RecognizerConfig
from stroke_engine.geometry import Point, BoundingBox, distance, path_length, centroid, bounding_box
from stroke_engine.normalizer import normalize, canonical_points, resample
from stroke_engine.templates import GestureDefinition, Template
from stroke_engine.recognizer import (
    DollarRecognizer,
    SynchronizedRecognizer,
    RecognitionResult,
    ScoreBand,
    optimal_cosine_distance,
    NO_MATCH,
)
from stroke_engine.gestures import default_gestures, alt_gestures
from stroke_engine.profiler import StrokeProfiler
