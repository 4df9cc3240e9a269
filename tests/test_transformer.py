"""Tests for screen/court coordinate conversion."""

import math

import pytest

from volley_overlap.config import Config, ScreenConfig
from volley_overlap.core.coordinates import COURT_BOUNDS, CoordinateBounds, Point
from volley_overlap.exceptions import ConfigurationError
from volley_overlap.transform.transformer import CoordinateTransformer, ScreenSpace


@pytest.fixture
def transformer():
    return CoordinateTransformer()


class TestScreenSpace:
    """Test the reference canvas."""

    def test_defaults(self):
        screen = ScreenSpace()
        assert (screen.width, screen.height) == (600.0, 360.0)

    @pytest.mark.parametrize("width,height", [(0, 360), (600, -1), (float("nan"), 360)])
    def test_rejects_non_positive(self, width, height):
        with pytest.raises(ConfigurationError, match="positive"):
            ScreenSpace(width=width, height=height)

    def test_from_config(self):
        config = Config(screen=ScreenConfig(width=900.0, height=540.0))
        assert ScreenSpace.from_config(config) == ScreenSpace(900.0, 540.0)


class TestConversion:
    """Linear scaling between pixels and metres."""

    def test_screen_to_court(self, transformer):
        point = transformer.screen_to_court(300.0, 180.0)
        assert point.x == pytest.approx(4.5)
        assert point.y == pytest.approx(4.5)

    def test_court_to_screen(self, transformer):
        point = transformer.court_to_screen(9.0, 9.0)
        assert point.x == pytest.approx(600.0)
        assert point.y == pytest.approx(360.0)

    def test_origin_fixed(self, transformer):
        assert transformer.screen_to_court(0.0, 0.0) == Point(0.0, 0.0)

    def test_round_trip(self, transformer):
        point = transformer.screen_to_court(*transformer.court_to_screen(2.25, 7.1))
        assert point.x == pytest.approx(2.25)
        assert point.y == pytest.approx(7.1)

    def test_service_zone_maps_below_canvas(self, transformer):
        assert transformer.court_to_screen(4.5, 11.0).y == pytest.approx(440.0)

    def test_custom_screen(self):
        transformer = CoordinateTransformer(ScreenSpace(width=900.0, height=900.0))
        point = transformer.screen_to_court(100.0, 450.0)
        assert point == pytest.approx((1.0, 4.5))

    def test_from_config(self):
        config = Config(screen=ScreenConfig(width=90.0, height=90.0))
        transformer = CoordinateTransformer.from_config(config)
        assert transformer.court_to_screen(1.0, 1.0) == Point(10.0, 10.0)

    def test_scaling_factors(self, transformer):
        factors = transformer.scaling_factors
        assert factors.scale_x == pytest.approx(9.0 / 600.0)
        assert factors.scale_y == pytest.approx(9.0 / 360.0)

    def test_frozen(self, transformer):
        with pytest.raises(AttributeError):
            transformer.to_court_x = 1.0


class TestBoundsConversion:
    """Rectangles are scaled corner by corner."""

    def test_court_bounds_to_screen(self, transformer):
        bounds = transformer.court_bounds_to_screen(COURT_BOUNDS)
        assert bounds.max_x == pytest.approx(600.0)
        assert bounds.max_y == pytest.approx(360.0)
        assert bounds.min_x == 0.0

    def test_screen_bounds_to_court(self, transformer):
        bounds = transformer.screen_bounds_to_court(CoordinateBounds(60.0, 120.0, 40.0, 80.0))
        assert bounds.min_x == pytest.approx(0.9)
        assert bounds.max_x == pytest.approx(1.8)
        assert bounds.min_y == pytest.approx(1.0)
        assert bounds.max_y == pytest.approx(2.0)


class TestGeometryHelpers:
    """Static position helpers."""

    def test_is_valid_position(self):
        assert CoordinateTransformer.is_valid_position(4.5, 4.5)
        assert not CoordinateTransformer.is_valid_position(4.5, 10.0)
        assert CoordinateTransformer.is_valid_position(4.5, 10.0, allow_service_zone=True)

    def test_normalize_coordinates(self):
        assert CoordinateTransformer.normalize_coordinates(10.0, -1.0) == Point(9.0, 0.0)
        assert CoordinateTransformer.normalize_coordinates(4.0, 12.0, True) == Point(4.0, 11.0)

    def test_within_and_clamp(self):
        bounds = CoordinateBounds(1.0, 2.0, 1.0, 2.0)
        assert CoordinateTransformer.is_within_bounds(1.5, 1.5, bounds)
        assert not CoordinateTransformer.is_within_bounds(2.5, 1.5, bounds)
        assert CoordinateTransformer.clamp_to_bounds(2.5, 0.0, bounds) == Point(2.0, 1.0)

    def test_distance(self):
        assert CoordinateTransformer.distance(Point(0.0, 0.0), Point(3.0, 4.0)) == 5.0
        assert math.isclose(CoordinateTransformer.distance(Point(1.0, 1.0), Point(1.0, 1.0)), 0.0)
