"""Tolerance-aware comparison primitives for court coordinates.

Player positions come from drag events and pixel-to-metre conversion, so two
players that "stand on the same line" rarely have bit-identical coordinates.
Every ordering and bounds check in the engine goes through these helpers so
that the same slack (3 cm by default) is applied everywhere.

Example:
    >>> from volley_overlap.core import tolerance
    >>> tolerance.is_equal(4.50, 4.52)
    True
    >>> tolerance.is_less(4.50, 4.52)
    False
    >>> tolerance.compare(1.0, 2.0)
    -1
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Literal

# Official tolerance for position comparisons, in metres.
EPSILON = 0.03

Direction = Literal["min", "max"]


def _eps(epsilon: float | None) -> float:
    return EPSILON if epsilon is None else epsilon


def get_epsilon() -> float:
    """Return the default comparison tolerance in metres."""
    return EPSILON


def is_equal(a: float, b: float, epsilon: float | None = None) -> bool:
    """Check whether ``a`` and ``b`` are within ``epsilon`` of each other."""
    return abs(a - b) <= _eps(epsilon)


def is_less(a: float, b: float, epsilon: float | None = None) -> bool:
    """Check whether ``a`` is below ``b`` by more than the tolerance."""
    return a < b - _eps(epsilon)


def is_less_or_equal(a: float, b: float, epsilon: float | None = None) -> bool:
    """Complement of :func:`is_greater`."""
    return a <= b + _eps(epsilon)


def is_greater(a: float, b: float, epsilon: float | None = None) -> bool:
    """Check whether ``a`` is above ``b`` by more than the tolerance."""
    return a > b + _eps(epsilon)


def is_greater_or_equal(a: float, b: float, epsilon: float | None = None) -> bool:
    """Complement of :func:`is_less`."""
    return a >= b - _eps(epsilon)


def is_significant_difference(a: float, b: float, epsilon: float | None = None) -> bool:
    """Check whether ``a`` and ``b`` differ by more than the tolerance."""
    return not is_equal(a, b, epsilon)


def apply_tolerance(value: float, direction: Direction, epsilon: float | None = None) -> float:
    """Shift a boundary value by the tolerance.

    Args:
        value: The boundary value (e.g. a neighbour's x coordinate)
        direction: ``"min"`` subtracts the tolerance, ``"max"`` adds it
        epsilon: Optional tolerance override

    Returns:
        The shifted value

    Raises:
        ValueError: If ``direction`` is not ``"min"`` or ``"max"``
    """
    eps = _eps(epsilon)
    if direction == "min":
        return value - eps
    if direction == "max":
        return value + eps
    raise ValueError(f"direction must be 'min' or 'max', got {direction!r}")


def compare(a: float, b: float, epsilon: float | None = None) -> int:
    """Three-way comparison using the same thresholds as the predicates.

    Returns:
        -1 if ``is_less(a, b)``, 1 if ``is_greater(a, b)``, 0 otherwise
    """
    if is_less(a, b, epsilon):
        return -1
    if is_greater(a, b, epsilon):
        return 1
    return 0


def is_within_range(
    value: float, minimum: float, maximum: float, epsilon: float | None = None
) -> bool:
    """Inclusive range test that accepts values up to ``epsilon`` outside."""
    return is_greater_or_equal(value, minimum, epsilon) and is_less_or_equal(
        value, maximum, epsilon
    )


def clamp_with_tolerance(
    value: float, minimum: float, maximum: float, epsilon: float | None = None
) -> float:
    """Clamp ``value`` to ``[minimum, maximum]``.

    Values that overshoot a bound by no more than ``epsilon`` are returned
    unchanged.
    """
    if is_less(value, minimum, epsilon):
        return minimum
    if is_greater(value, maximum, epsilon):
        return maximum
    return value


def round_to_precision(value: float, digits: int = 3) -> float:
    """Round to ``digits`` decimal places, ties going up.

    ``round()`` uses banker's rounding, which turns 2.5 into 2; here 2.5
    becomes 3 and -2.5 becomes -2.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def are_points_equal(p1, p2, epsilon: float | None = None) -> bool:
    """Check that two points agree on both axes within tolerance.

    Points may be any objects with ``x`` and ``y`` attributes.
    """
    return is_equal(p1.x, p2.x, epsilon) and is_equal(p1.y, p2.y, epsilon)


def find_closest(target: float, candidates: Iterable[float]) -> float:
    """Return the candidate nearest to ``target``.

    Ties resolve to the earliest candidate.

    Raises:
        ValueError: If ``candidates`` is empty
    """
    values = list(candidates)
    if not values:
        raise ValueError("Cannot find closest value in an empty candidate set")

    closest = values[0]
    best = abs(target - closest)
    for value in values[1:]:
        distance = abs(target - value)
        if distance < best:
            best = distance
            closest = value
    return closest
