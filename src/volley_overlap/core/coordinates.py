"""
Court coordinate system.

All engine coordinates are metres in a right-handed 2D system seen from
behind the team's own endline:

- X axis: 0.0 (left sideline) to 9.0 (right sideline)
- Y axis: 0.0 (net) to 9.0 (endline); the service zone extends to 11.0
- Origin is where the left sideline meets the net

Smaller ``y`` is therefore closer to the net.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .tolerance import EPSILON, is_within_range

__all__ = [
    "COURT_WIDTH",
    "COURT_LENGTH",
    "NET_Y",
    "ENDLINE_Y",
    "SERVICE_ZONE_START",
    "SERVICE_ZONE_END",
    "LEFT_SIDELINE_X",
    "RIGHT_SIDELINE_X",
    "ATTACK_LINE_Y",
    "CENTER_LINE_X",
    "TOLERANCE",
    "Point",
    "CoordinateBounds",
    "COURT_BOUNDS",
    "EXTENDED_BOUNDS",
    "is_within_court_bounds",
    "is_within_extended_bounds",
    "is_in_service_zone",
    "is_valid_position",
]

COURT_WIDTH = 9.0
COURT_LENGTH = 9.0
NET_Y = 0.0
ENDLINE_Y = 9.0
SERVICE_ZONE_START = 9.0
SERVICE_ZONE_END = 11.0  # 2 m behind the endline
LEFT_SIDELINE_X = 0.0
RIGHT_SIDELINE_X = 9.0
ATTACK_LINE_Y = 3.0
CENTER_LINE_X = 4.5

TOLERANCE = EPSILON


class Point(NamedTuple):
    """A position in either metric or screen space."""

    x: float
    y: float


@dataclass(frozen=True)
class CoordinateBounds:
    """Axis-aligned rectangle in court metres.

    Used both for the fixed court areas and for per-player drag limits.
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def is_valid(self) -> bool:
        """True if the minimum of each axis does not exceed its maximum."""
        return self.min_x <= self.max_x and self.min_y <= self.max_y

    def contains(self, x: float, y: float, epsilon: float = 0.0) -> bool:
        """Inclusive containment test, optionally widened by ``epsilon``."""
        return is_within_range(x, self.min_x, self.max_x, epsilon) and is_within_range(
            y, self.min_y, self.max_y, epsilon
        )

    def clamp(self, x: float, y: float) -> Point:
        """Clamp a point into the rectangle."""
        return Point(
            max(self.min_x, min(self.max_x, x)),
            max(self.min_y, min(self.max_y, y)),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "min_x": self.min_x,
            "max_x": self.max_x,
            "min_y": self.min_y,
            "max_y": self.max_y,
        }


COURT_BOUNDS = CoordinateBounds(
    min_x=LEFT_SIDELINE_X,
    max_x=RIGHT_SIDELINE_X,
    min_y=NET_Y,
    max_y=ENDLINE_Y,
)

EXTENDED_BOUNDS = CoordinateBounds(
    min_x=LEFT_SIDELINE_X,
    max_x=RIGHT_SIDELINE_X,
    min_y=NET_Y,
    max_y=SERVICE_ZONE_END,
)

_SERVICE_ZONE = CoordinateBounds(
    min_x=LEFT_SIDELINE_X,
    max_x=RIGHT_SIDELINE_X,
    min_y=SERVICE_ZONE_START,
    max_y=SERVICE_ZONE_END,
)


def is_within_court_bounds(x: float, y: float, epsilon: float = 0.0) -> bool:
    """Check that a point lies on the court (service zone excluded)."""
    return COURT_BOUNDS.contains(x, y, epsilon)


def is_within_extended_bounds(x: float, y: float, epsilon: float = 0.0) -> bool:
    """Check that a point lies on the court or in the service zone."""
    return EXTENDED_BOUNDS.contains(x, y, epsilon)


def is_in_service_zone(x: float, y: float, epsilon: float = 0.0) -> bool:
    """Check that a point lies between the endline and the back of the service zone."""
    return _SERVICE_ZONE.contains(x, y, epsilon)


def is_valid_position(
    x: float, y: float, allow_service_zone: bool = False, epsilon: float = 0.0
) -> bool:
    """Check a player position, admitting the service zone only when asked."""
    if allow_service_zone:
        return is_within_extended_bounds(x, y, epsilon)
    return is_within_court_bounds(x, y, epsilon)
