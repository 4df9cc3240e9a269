"""Conversion between court metres and the host's pixel canvas.

The host draws the court on a fixed reference canvas (600 x 360 px by
default). Conversion is a pure linear scale on each axis with no offset or
flip: pixel (0, 0) is the left end of the net and the canvas height maps
onto the 9 m court length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..core.coordinates import (
    COURT_BOUNDS,
    COURT_LENGTH,
    COURT_WIDTH,
    EXTENDED_BOUNDS,
    CoordinateBounds,
    Point,
    is_valid_position,
)
from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..config import Config

DEFAULT_SCREEN_WIDTH = 600.0
DEFAULT_SCREEN_HEIGHT = 360.0


@dataclass(frozen=True)
class ScalingFactors:
    """Metres per pixel on each axis."""

    scale_x: float
    scale_y: float


@dataclass(frozen=True)
class ScreenSpace:
    """Reference canvas size in pixels.

    Raises:
        ConfigurationError: If either dimension is not positive
    """

    width: float = DEFAULT_SCREEN_WIDTH
    height: float = DEFAULT_SCREEN_HEIGHT

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ConfigurationError(
                "Screen size must be positive",
                context={"width": self.width, "height": self.height},
                suggestions=["Set [screen] width and height to the reference canvas size"],
            )

    @classmethod
    def from_config(cls, config: Config) -> ScreenSpace:
        return cls(width=config.screen.width, height=config.screen.height)


@dataclass(frozen=True)
class CoordinateTransformer:
    """Screen/court conversion with scale factors fixed at construction.

    Example::

        transformer = CoordinateTransformer()
        court = transformer.screen_to_court(300, 180)   # Point(4.5, 4.5)
        screen = transformer.court_to_screen(9.0, 9.0)  # Point(600.0, 360.0)
    """

    screen: ScreenSpace = field(default_factory=ScreenSpace)
    to_court_x: float = field(init=False, repr=False)
    to_court_y: float = field(init=False, repr=False)
    to_screen_x: float = field(init=False, repr=False)
    to_screen_y: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "to_court_x", COURT_WIDTH / self.screen.width)
        object.__setattr__(self, "to_court_y", COURT_LENGTH / self.screen.height)
        object.__setattr__(self, "to_screen_x", self.screen.width / COURT_WIDTH)
        object.__setattr__(self, "to_screen_y", self.screen.height / COURT_LENGTH)

    @classmethod
    def from_config(cls, config: Config) -> CoordinateTransformer:
        return cls(screen=ScreenSpace.from_config(config))

    def screen_to_court(self, screen_x: float, screen_y: float) -> Point:
        return Point(screen_x * self.to_court_x, screen_y * self.to_court_y)

    def court_to_screen(self, x: float, y: float) -> Point:
        return Point(x * self.to_screen_x, y * self.to_screen_y)

    def screen_bounds_to_court(self, bounds: CoordinateBounds) -> CoordinateBounds:
        return CoordinateBounds(
            min_x=bounds.min_x * self.to_court_x,
            max_x=bounds.max_x * self.to_court_x,
            min_y=bounds.min_y * self.to_court_y,
            max_y=bounds.max_y * self.to_court_y,
        )

    def court_bounds_to_screen(self, bounds: CoordinateBounds) -> CoordinateBounds:
        return CoordinateBounds(
            min_x=bounds.min_x * self.to_screen_x,
            max_x=bounds.max_x * self.to_screen_x,
            min_y=bounds.min_y * self.to_screen_y,
            max_y=bounds.max_y * self.to_screen_y,
        )

    @property
    def scaling_factors(self) -> ScalingFactors:
        """Screen to court factors (metres per pixel)."""
        return ScalingFactors(scale_x=self.to_court_x, scale_y=self.to_court_y)

    @staticmethod
    def is_valid_position(x: float, y: float, allow_service_zone: bool = False) -> bool:
        """Exact court (or court plus service zone) containment in metres."""
        return is_valid_position(x, y, allow_service_zone)

    @staticmethod
    def normalize_coordinates(x: float, y: float, allow_service_zone: bool = False) -> Point:
        """Clamp a court position onto the court, or court plus service zone."""
        bounds = EXTENDED_BOUNDS if allow_service_zone else COURT_BOUNDS
        return bounds.clamp(x, y)

    @staticmethod
    def is_within_bounds(x: float, y: float, bounds: CoordinateBounds) -> bool:
        return bounds.contains(x, y)

    @staticmethod
    def clamp_to_bounds(x: float, y: float, bounds: CoordinateBounds) -> Point:
        return bounds.clamp(x, y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """Euclidean distance between two points in the same space."""
        return math.hypot(p1.x - p2.x, p1.y - p2.y)
