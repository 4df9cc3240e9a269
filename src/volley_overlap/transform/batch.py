"""Vectorised versions of the coordinate helpers.

Points are passed as ``(N, 2)`` arrays of ``[x, y]`` rows. Every function
here matches its scalar counterpart in :mod:`.transformer` and
:mod:`volley_overlap.core.coordinates` element by element; they exist only
so a host can convert or check many points in one call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..core.coordinates import COURT_BOUNDS, EXTENDED_BOUNDS, CoordinateBounds, Point

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from .transformer import CoordinateTransformer


def as_points(points: ArrayLike) -> NDArray[np.float64]:
    """Coerce ``points`` to a float ``(N, 2)`` array.

    Raises:
        ValueError: If the input cannot be shaped as ``(N, 2)``
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected an (N, 2) array of points, got shape {arr.shape}")
    return arr


def batch_screen_to_court(
    points: ArrayLike, transformer: CoordinateTransformer
) -> NDArray[np.float64]:
    arr = as_points(points)
    return arr * np.array([transformer.to_court_x, transformer.to_court_y])


def batch_court_to_screen(
    points: ArrayLike, transformer: CoordinateTransformer
) -> NDArray[np.float64]:
    arr = as_points(points)
    return arr * np.array([transformer.to_screen_x, transformer.to_screen_y])


def _area(allow_service_zone: bool) -> CoordinateBounds:
    return EXTENDED_BOUNDS if allow_service_zone else COURT_BOUNDS


def batch_validate_positions(
    points: ArrayLike, allow_service_zone: bool = False
) -> NDArray[np.bool_]:
    """Boolean mask of points inside the court (or court plus service zone).

    NaN coordinates are never inside.
    """
    arr = as_points(points)
    area = _area(allow_service_zone)
    x, y = arr[:, 0], arr[:, 1]
    return (x >= area.min_x) & (x <= area.max_x) & (y >= area.min_y) & (y <= area.max_y)


def batch_clamp(points: ArrayLike, bounds: CoordinateBounds) -> NDArray[np.float64]:
    """Clamp every point into ``bounds``."""
    arr = as_points(points)
    lower = np.array([bounds.min_x, bounds.min_y])
    upper = np.array([bounds.max_x, bounds.max_y])
    return np.clip(arr, lower, upper)


def batch_clamp_to_valid(
    points: ArrayLike, allow_service_zone: bool = False
) -> NDArray[np.float64]:
    return batch_clamp(points, _area(allow_service_zone))


def batch_distances(points_a: ArrayLike, points_b: ArrayLike) -> NDArray[np.float64]:
    """Row-wise Euclidean distances between two equally long point arrays.

    Raises:
        ValueError: If the arrays hold different numbers of points
    """
    a = as_points(points_a)
    b = as_points(points_b)
    if a.shape != b.shape:
        raise ValueError(f"Point arrays must have the same length, got {len(a)} and {len(b)}")
    return np.hypot(a[:, 0] - b[:, 0], a[:, 1] - b[:, 1])


def squared_distance(p1: Point, p2: Point) -> float:
    """Squared distance; enough for comparisons and avoids the square root."""
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return dx * dx + dy * dy


def is_within_circle(point: Point, center: Point, radius: float) -> bool:
    return squared_distance(point, center) <= radius * radius


def closest_point_on_segment(point: Point, start: Point, end: Point) -> Point:
    """Project ``point`` onto the segment from ``start`` to ``end``.

    A degenerate segment (both ends equal) returns ``start``.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return Point(start.x, start.y)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(start.x + t * dx, start.y + t * dy)
