"""Tests for the vectorised coordinate helpers."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from volley_overlap.core.coordinates import CoordinateBounds, Point, is_valid_position
from volley_overlap.transform.batch import (
    as_points,
    batch_clamp,
    batch_clamp_to_valid,
    batch_court_to_screen,
    batch_distances,
    batch_screen_to_court,
    batch_validate_positions,
    closest_point_on_segment,
    is_within_circle,
    squared_distance,
)
from volley_overlap.transform.transformer import CoordinateTransformer

SAMPLE = [
    [0.0, 0.0],
    [4.5, 4.5],
    [9.0, 9.0],
    [9.5, 4.0],
    [4.0, 10.0],
    [4.0, 11.5],
    [-0.1, 3.0],
]


class TestAsPoints:
    """Input coercion."""

    def test_list_of_pairs(self):
        arr = as_points([[1, 2], [3, 4]])
        assert arr.dtype == np.float64
        assert arr.shape == (2, 2)

    def test_empty(self):
        assert as_points([]).shape == (0, 2)

    @pytest.mark.parametrize("bad", [[1.0, 2.0], [[1.0, 2.0, 3.0]], np.zeros((2, 2, 2))])
    def test_bad_shape(self, bad):
        with pytest.raises(ValueError, match=r"\(N, 2\)"):
            as_points(bad)


class TestConversion:
    """Batch conversion matches the scalar transformer."""

    def test_screen_to_court(self):
        transformer = CoordinateTransformer()
        screen = [[300.0, 180.0], [600.0, 360.0], [0.0, 0.0]]
        result = batch_screen_to_court(screen, transformer)
        expected = [transformer.screen_to_court(x, y) for x, y in screen]
        assert_allclose(result, expected)

    def test_court_to_screen(self):
        transformer = CoordinateTransformer()
        result = batch_court_to_screen(SAMPLE, transformer)
        expected = [transformer.court_to_screen(x, y) for x, y in SAMPLE]
        assert_allclose(result, expected)


class TestValidation:
    """Batch containment matches is_valid_position."""

    @pytest.mark.parametrize("allow_service_zone", [False, True])
    def test_matches_scalar(self, allow_service_zone):
        mask = batch_validate_positions(SAMPLE, allow_service_zone)
        expected = [is_valid_position(x, y, allow_service_zone) for x, y in SAMPLE]
        assert_array_equal(mask, expected)

    def test_nan_is_invalid(self):
        mask = batch_validate_positions([[np.nan, 4.0], [4.0, 4.0]])
        assert_array_equal(mask, [False, True])


class TestClamp:
    """Clamping into bounds."""

    def test_clamp_to_court(self):
        result = batch_clamp_to_valid([[-1.0, 12.0], [4.0, 4.0]])
        assert_array_equal(result, [[0.0, 9.0], [4.0, 4.0]])

    def test_clamp_to_extended(self):
        result = batch_clamp_to_valid([[4.0, 12.0]], allow_service_zone=True)
        assert_array_equal(result, [[4.0, 11.0]])

    def test_clamp_matches_scalar(self):
        bounds = CoordinateBounds(1.0, 3.0, 2.0, 5.0)
        result = batch_clamp(SAMPLE, bounds)
        expected = [bounds.clamp(x, y) for x, y in SAMPLE]
        assert_allclose(result, expected)


class TestDistances:
    """Distance helpers."""

    def test_batch_distances(self):
        result = batch_distances([[0.0, 0.0], [1.0, 1.0]], [[3.0, 4.0], [1.0, 1.0]])
        assert_allclose(result, [5.0, 0.0])

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            batch_distances([[0.0, 0.0]], [[1.0, 1.0], [2.0, 2.0]])

    def test_squared_distance(self):
        assert squared_distance(Point(0.0, 0.0), Point(3.0, 4.0)) == 25.0

    def test_within_circle(self):
        assert is_within_circle(Point(3.0, 4.0), Point(0.0, 0.0), 5.0)
        assert not is_within_circle(Point(3.0, 4.1), Point(0.0, 0.0), 5.0)


class TestClosestPointOnSegment:
    """Projection onto a segment."""

    def test_interior(self):
        assert closest_point_on_segment(Point(2.0, 3.0), Point(0.0, 0.0), Point(4.0, 0.0)) == Point(
            2.0, 0.0
        )

    def test_clamped_to_end(self):
        assert closest_point_on_segment(Point(9.0, 1.0), Point(0.0, 0.0), Point(4.0, 0.0)) == Point(
            4.0, 0.0
        )

    def test_degenerate_segment(self):
        start = Point(1.0, 1.0)
        assert closest_point_on_segment(Point(5.0, 5.0), start, start) == start
