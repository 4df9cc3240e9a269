"""Drag bounds that keep a lineup legal.

For a given slot, :func:`calculate_valid_bounds` returns the rectangle the
slot's player can move within, given where everyone else currently stands:

- The base area is the court, or the court plus service zone for the server,
  grown if need be to take in the player's current position.
- The left neighbour (if any) sets ``min_x`` just right of their x.
- The right neighbour (if any) sets ``max_x`` just left of their x.
- The column counterpart sets ``max_y`` (front row) or ``min_y`` (back row),
  unless the server of that pair is standing in the service zone.

Neighbours here are linear: the left-most player of a row has no left
bound other than the sideline.

Example::

    from volley_overlap.validate import calculate_valid_bounds

    bounds = calculate_valid_bounds(3, lineup)
    if bounds.is_constrained:
        print(bounds.constraint_reasons)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Union

from ..core import tolerance
from ..core.coordinates import COURT_BOUNDS, EXTENDED_BOUNDS, CoordinateBounds, Point
from ..core.neighbors import (
    get_linear_left_neighbor,
    get_linear_right_neighbor,
    get_row_counterpart,
    is_front_row,
)
from ..core.types import PlayerState, is_valid_slot, slot_full_name
from .lineup import has_finite_position, index_lineup
from .overlap import is_server_exempt

logger = logging.getLogger(__name__)

Lineup = Union[Sequence[PlayerState], Mapping[int, PlayerState]]

CONFLICT_REASON = "Conflicting constraints detected"


@dataclass(frozen=True)
class PositionBounds(CoordinateBounds):
    """Drag bounds for one player.

    Attributes:
        is_constrained: True if any neighbour narrowed the base area
        constraint_reasons: Human-readable reason for each applied bound
    """

    is_constrained: bool = False
    constraint_reasons: tuple[str, ...] = ()

    @classmethod
    def from_area(cls, area: CoordinateBounds) -> PositionBounds:
        """Unconstrained bounds covering ``area``."""
        return cls(min_x=area.min_x, max_x=area.max_x, min_y=area.min_y, max_y=area.max_y)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = super().to_dict()
        result["is_constrained"] = self.is_constrained
        result["constraint_reasons"] = list(self.constraint_reasons)
        return result


def locatable(player: PlayerState | None) -> PlayerState | None:
    if player is None or not has_finite_position(player):
        return None
    return player


def fold_bounds(
    player: PlayerState,
    left: PlayerState | None,
    right: PlayerState | None,
    counterpart: PlayerState | None,
    eps: float,
) -> PositionBounds:
    """Intersect the base area with every applicable neighbour bound.

    Both the per-slot and the batch calculators end here, so they cannot
    disagree. Missing neighbours contribute nothing.

    The base area always contains the player's current position, so a
    player standing off court in a legal lineup is inside their own
    bounds. Reporting off-court players is :func:`.validate_lineup`'s job.
    """
    base = EXTENDED_BOUNDS if player.is_server else COURT_BOUNDS
    min_x, max_x = min(base.min_x, player.x), max(base.max_x, player.x)
    min_y, max_y = min(base.min_y, player.y), max(base.max_y, player.y)
    reasons: list[str] = []

    if left is not None:
        min_x = max(min_x, tolerance.apply_tolerance(left.x, "max", eps))
        reasons.append(f"Must be right of {slot_full_name(left.slot)} (slot {left.slot})")

    if right is not None:
        max_x = min(max_x, tolerance.apply_tolerance(right.x, "min", eps))
        reasons.append(f"Must be left of {slot_full_name(right.slot)} (slot {right.slot})")

    if counterpart is not None and not is_server_exempt(player, counterpart):
        name = f"{slot_full_name(counterpart.slot)} (slot {counterpart.slot})"
        if is_front_row(player.slot):
            max_y = min(max_y, tolerance.apply_tolerance(counterpart.y, "min", eps))
            reasons.append(f"Must be in front of {name}")
        else:
            min_y = max(min_y, tolerance.apply_tolerance(counterpart.y, "max", eps))
            reasons.append(f"Must be behind {name}")

    is_constrained = bool(reasons)

    if min_x > max_x or min_y > max_y:
        logger.debug(
            f"Conflicting bounds for slot {player.slot}: "
            f"x=[{min_x:.3f}, {max_x:.3f}] y=[{min_y:.3f}, {max_y:.3f}]"
        )
        reasons.append(CONFLICT_REASON)
        if min_x > max_x:
            min_x = max_x = (min_x + max_x) / 2
        if min_y > max_y:
            min_y = max_y = (min_y + max_y) / 2

    return PositionBounds(
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        is_constrained=is_constrained,
        constraint_reasons=tuple(reasons),
    )


def resolve_player(
    slot: int, by_slot: Mapping[int, PlayerState], is_server: bool | None
) -> PlayerState | None:
    """The player in ``slot`` with the server flag overridden if requested."""
    player = locatable(by_slot.get(slot))
    if player is None or is_server is None or player.is_server == is_server:
        return player
    return PlayerState(
        id=player.id,
        display_name=player.display_name,
        role=player.role,
        slot=player.slot,
        x=player.x,
        y=player.y,
        is_server=is_server,
    )


def calculate_valid_bounds(
    slot: int,
    lineup: Lineup,
    *,
    is_server: bool | None = None,
    epsilon: float | None = None,
) -> PositionBounds:
    """Compute where ``slot``'s player may move without creating an overlap.

    Args:
        slot: Rotation slot of the player being dragged
        lineup: Current lineup, as a sequence or a slot-keyed mapping
        is_server: Treat the player as server (or not) regardless of the
            lineup's flag
        epsilon: Comparison tolerance in metres (defaults to 0.03)

    Returns:
        Bounds for the slot. An invalid slot, or a slot nobody occupies,
        gets the plain court bounds.
    """
    if not is_valid_slot(slot):
        return PositionBounds.from_area(COURT_BOUNDS)

    by_slot = index_lineup(lineup)
    player = resolve_player(slot, by_slot, is_server)
    if player is None:
        return PositionBounds.from_area(COURT_BOUNDS)

    eps = tolerance.get_epsilon() if epsilon is None else epsilon
    left_slot = get_linear_left_neighbor(slot)
    right_slot = get_linear_right_neighbor(slot)
    return fold_bounds(
        player,
        locatable(by_slot.get(left_slot)) if left_slot is not None else None,
        locatable(by_slot.get(right_slot)) if right_slot is not None else None,
        locatable(by_slot.get(get_row_counterpart(slot))),
        eps,
    )


def is_position_valid(
    slot: int,
    position: tuple[float, float],
    lineup: Lineup,
    *,
    is_server: bool | None = None,
    epsilon: float | None = None,
) -> bool:
    """Check whether ``position`` lies inside the slot's drag bounds.

    The tolerance is already built into the bounds, so containment here is
    exact.
    """
    x, y = position
    bounds = calculate_valid_bounds(slot, lineup, is_server=is_server, epsilon=epsilon)
    return bounds.contains(x, y)


def snap_to_valid_position(
    slot: int,
    position: tuple[float, float],
    lineup: Lineup,
    *,
    is_server: bool | None = None,
    epsilon: float | None = None,
) -> Point:
    """Return ``position`` if it is valid, else the nearest point inside the bounds."""
    x, y = position
    bounds = calculate_valid_bounds(slot, lineup, is_server=is_server, epsilon=epsilon)
    if bounds.contains(x, y):
        return Point(x, y)
    return bounds.clamp(x, y)
