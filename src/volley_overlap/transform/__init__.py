"""Screen/court coordinate conversion for host applications."""

from .batch import (
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
from .state import ScreenPlayerState, ScreenPosition, StateConverter
from .transformer import CoordinateTransformer, ScalingFactors, ScreenSpace

__all__ = [
    "CoordinateTransformer",
    "ScalingFactors",
    "ScreenSpace",
    "ScreenPlayerState",
    "ScreenPosition",
    "StateConverter",
    "as_points",
    "batch_clamp",
    "batch_clamp_to_valid",
    "batch_court_to_screen",
    "batch_distances",
    "batch_screen_to_court",
    "batch_validate_positions",
    "closest_point_on_segment",
    "is_within_circle",
    "squared_distance",
]
