"""Tests for the resample/rotate/scale/translate/vectorize pipeline."""

import math

import numpy as np
import pytest

from stroke_engine.config import RecognizerConfig
from stroke_engine.errors import DegenerateBoundingBoxError, InvalidStrokeError
from stroke_engine.geometry import bounding_box, centroid
from stroke_engine.normalizer import (
    canonical_points,
    indicative_angle,
    normalize,
    resample,
    rotate_by,
    scale_to,
    translate_to,
    validate_stroke,
    vectorize,
)


def make_zigzag():
    return [(0, 0), (20, 40), (40, 5), (60, 45), (80, 10), (100, 50)]


def make_random_stroke(seed, n=30):
    rng = np.random.default_rng(seed)
    return np.cumsum(rng.normal(0.0, 5.0, (n, 2)), axis=0)


class TestValidate:
    def test_single_point(self):
        with pytest.raises(InvalidStrokeError):
            validate_stroke([(1, 1)])

    def test_empty(self):
        with pytest.raises(InvalidStrokeError):
            validate_stroke([])

    def test_coincident_points(self):
        with pytest.raises(InvalidStrokeError):
            validate_stroke([(5, 5), (5, 5), (5, 5)])

    def test_valid(self):
        pts = validate_stroke([(0, 0), (1, 1)])
        assert pts.shape == (2, 2)


class TestResample:
    @pytest.mark.parametrize("seed", range(10))
    def test_always_n_points(self, seed):
        assert len(resample(make_random_stroke(seed), 64)) == 64

    def test_two_point_stroke(self):
        assert len(resample([(0, 0), (10, 0)], 64)) == 64

    def test_other_sizes(self):
        assert len(resample(make_zigzag(), 16)) == 16
        assert len(resample(make_zigzag(), 2)) == 2

    def test_even_spacing_on_straight_line(self):
        pts = resample([(0, 0), (30, 0), (100, 0)], 11)
        gaps = np.linalg.norm(np.diff(pts, axis=0), axis=1)
        np.testing.assert_allclose(gaps, 10.0, atol=1e-9)

    def test_preserves_endpoints(self):
        stroke = make_zigzag()
        pts = resample(stroke, 64)
        np.testing.assert_allclose(pts[0], stroke[0])
        np.testing.assert_allclose(pts[-1], stroke[-1], atol=1e-6)

    def test_duplicate_points_tolerated(self):
        pts = resample([(0, 0), (0, 0), (10, 10), (10, 10), (20, 0)], 64)
        assert len(pts) == 64
        assert np.all(np.isfinite(pts))

    def test_does_not_mutate_input(self):
        stroke = make_zigzag()
        before = list(stroke)
        resample(stroke, 64)
        assert stroke == before

    def test_does_not_mutate_array_input(self):
        stroke = np.array(make_zigzag(), dtype=np.float64)
        before = stroke.copy()
        resample(stroke, 64)
        np.testing.assert_array_equal(stroke, before)

    def test_n_too_small(self):
        with pytest.raises(ValueError):
            resample(make_zigzag(), 1)

    def test_zero_length_rejected(self):
        with pytest.raises(InvalidStrokeError):
            resample([(3, 3), (3, 3)], 64)

    def test_overflowing_path_length_rejected(self):
        with pytest.raises(InvalidStrokeError):
            resample([(0, 0), (1e308, 1e308), (-1e308, 5e307)], 64)


class TestRotation:
    def test_indicative_angle(self):
        pts = np.array([[0, 0], [2, 2]], dtype=np.float64)
        assert indicative_angle(pts) == pytest.approx(math.pi / 4)

    def test_rotate_keeps_centroid(self):
        pts = np.array(make_zigzag(), dtype=np.float64)
        rotated = rotate_by(pts, 1.1)
        np.testing.assert_allclose(centroid(rotated), centroid(pts), atol=1e-9)

    def test_rotate_to_zero(self):
        pts = resample(make_zigzag(), 64)
        rotated = rotate_by(pts, -indicative_angle(pts))
        assert indicative_angle(rotated) == pytest.approx(0.0, abs=1e-9)

    def test_quarter_turn(self):
        pts = np.array([[-1, 0], [1, 0]], dtype=np.float64)
        rotated = rotate_by(pts, math.pi / 2)
        np.testing.assert_allclose(rotated, [[0, -1], [0, 1]], atol=1e-12)


class TestScaleTranslate:
    def test_scale_to_square(self):
        pts = np.array([[0, 0], [10, 0], [10, 40], [0, 40]], dtype=np.float64)
        box = bounding_box(scale_to(pts, 250.0))
        assert box.w == pytest.approx(250.0)
        assert box.h == pytest.approx(250.0)

    def test_degenerate_rejected(self):
        pts = np.array([[0, 0], [10, 0], [20, 0]], dtype=np.float64)
        with pytest.raises(DegenerateBoundingBoxError) as exc:
            scale_to(pts, 250.0)
        assert exc.value.height == 0.0

    def test_degenerate_is_invalid_stroke(self):
        assert issubclass(DegenerateBoundingBoxError, InvalidStrokeError)

    def test_degenerate_epsilon_policy(self):
        pts = np.array([[0, 0], [10, 0], [20, 0]], dtype=np.float64)
        scaled = scale_to(pts, 250.0, degenerate_policy="epsilon")
        assert np.all(np.isfinite(scaled))
        assert bounding_box(scaled).w == pytest.approx(250.0)

    def test_zero_extent(self):
        pts = np.array([[1, 1], [1, 1]], dtype=np.float64)
        with pytest.raises(InvalidStrokeError):
            scale_to(pts, 250.0, degenerate_policy="epsilon")

    def test_translate_to_origin(self):
        pts = np.array(make_zigzag(), dtype=np.float64)
        np.testing.assert_allclose(centroid(translate_to(pts)), [0, 0], atol=1e-9)

    def test_translate_to_point(self):
        pts = np.array(make_zigzag(), dtype=np.float64)
        moved = translate_to(pts, (5.0, -3.0))
        np.testing.assert_allclose(centroid(moved), [5.0, -3.0], atol=1e-9)


class TestVectorize:
    def test_unit_norm(self):
        vec = vectorize(np.array([[3.0, 4.0], [0.0, 0.0]]))
        np.testing.assert_allclose(vec, [0.6, 0.8, 0.0, 0.0])

    def test_interleaved_order(self):
        vec = vectorize(np.array([[1.0, 2.0], [3.0, 4.0]]))
        ratio = vec / vec[0]
        np.testing.assert_allclose(ratio, [1, 2, 3, 4])

    def test_all_zero_rejected(self):
        with pytest.raises(InvalidStrokeError):
            vectorize(np.zeros((4, 2)))

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidStrokeError):
            vectorize(np.array([[np.inf, 0.0], [1.0, 1.0]]))


class TestPipeline:
    def test_vector_length(self):
        assert normalize(make_zigzag()).shape == (128,)

    def test_vector_length_follows_config(self):
        config = RecognizerConfig(num_points=32)
        assert normalize(make_zigzag(), config).shape == (64,)

    @pytest.mark.parametrize("seed", range(5))
    def test_unit_norm(self, seed):
        vec = normalize(make_random_stroke(seed))
        assert float(np.linalg.norm(vec)) == pytest.approx(1.0, abs=1e-6)

    def test_canonical_shape(self):
        pts = canonical_points(make_zigzag())
        assert pts.shape == (64, 2)
        np.testing.assert_allclose(centroid(pts), [0, 0], atol=1e-9)
        box = bounding_box(pts)
        assert box.w == pytest.approx(250.0)
        assert box.h == pytest.approx(250.0)

    def test_deterministic(self):
        a = normalize(make_zigzag())
        b = normalize(make_zigzag())
        np.testing.assert_array_equal(a, b)

    def test_scale_and_translation_invariant(self):
        stroke = np.array(make_zigzag(), dtype=np.float64)
        a = normalize(stroke)
        b = normalize(stroke * 3.5 + np.array([200.0, -40.0]))
        np.testing.assert_allclose(a, b, atol=1e-9)

    def test_rotation_precedes_scaling(self):
        stroke = make_zigzag()
        r = resample(stroke, 64)
        expected = translate_to(scale_to(rotate_by(r, -indicative_angle(r)), 250.0))
        np.testing.assert_allclose(canonical_points(stroke), expected, atol=1e-9)

        scaled = scale_to(r, 250.0)
        swapped = translate_to(rotate_by(scaled, -indicative_angle(scaled)))
        assert not np.allclose(canonical_points(stroke), swapped, atol=1e-3)
