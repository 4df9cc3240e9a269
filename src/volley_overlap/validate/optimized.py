"""Batch drag-bound calculation for interactive use.

Produces exactly the same bounds as :func:`.constraints.calculate_valid_bounds`
(both go through :func:`.constraints.fold_bounds`) but indexes the lineup
and resolves neighbours once for all six slots. Every slot is computed
against the same snapshot; there is no ordering between slots.

The dependency helpers tell a UI which slots need new bounds after a move:
moving slot 3 changes the bounds of 4, 2 and 6, and nothing else.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from ..core import tolerance
from ..core.coordinates import COURT_BOUNDS
from ..core.neighbors import (
    get_linear_left_neighbor,
    get_linear_right_neighbor,
    get_row_counterpart,
)
from ..core.types import ALL_SLOTS, PlayerState, is_valid_slot
from .constraints import (
    Lineup,
    PositionBounds,
    fold_bounds,
    locatable,
    resolve_player,
)
from .lineup import index_lineup

if TYPE_CHECKING:
    from .cache import LineupCache

# slot -> (linear left, linear right, counterpart)
_NEIGHBOR_TABLE: dict[int, tuple[int | None, int | None, int]] = {
    slot: (
        get_linear_left_neighbor(slot),
        get_linear_right_neighbor(slot),
        get_row_counterpart(slot),
    )
    for slot in ALL_SLOTS
}


def _bounds_from_index(
    slot: int,
    by_slot: Mapping[int, PlayerState],
    is_server: bool | None,
    eps: float,
) -> PositionBounds:
    player = resolve_player(slot, by_slot, is_server)
    if player is None:
        return PositionBounds.from_area(COURT_BOUNDS)
    left, right, counterpart = (
        locatable(by_slot.get(s)) if s is not None else None for s in _NEIGHBOR_TABLE[slot]
    )
    return fold_bounds(player, left, right, counterpart, eps)


def calculate_bounds_fast(
    slot: int,
    lineup: Lineup,
    *,
    is_server: bool | None = None,
    epsilon: float | None = None,
    cache: LineupCache | None = None,
) -> PositionBounds:
    """Bounds for one slot, optionally served from ``cache``."""
    if not is_valid_slot(slot):
        return PositionBounds.from_area(COURT_BOUNDS)

    by_slot = index_lineup(lineup)
    eps = tolerance.get_epsilon() if epsilon is None else epsilon

    def compute() -> PositionBounds:
        return _bounds_from_index(slot, by_slot, is_server, eps)

    if cache is None:
        return compute()
    return cache.get_bounds(slot, by_slot, compute, is_server=is_server, epsilon=eps)


def calculate_all_bounds(
    lineup: Lineup,
    *,
    epsilon: float | None = None,
    cache: LineupCache | None = None,
) -> dict[int, PositionBounds]:
    """Bounds for all six slots from one snapshot of ``lineup``.

    Returns:
        Mapping of slot to bounds, with an entry for every slot 1-6
    """
    by_slot = index_lineup(lineup)
    eps = tolerance.get_epsilon() if epsilon is None else epsilon

    result: dict[int, PositionBounds] = {}
    for slot in ALL_SLOTS:
        if cache is None:
            result[slot] = _bounds_from_index(slot, by_slot, None, eps)
        else:
            result[slot] = cache.get_bounds(
                slot,
                by_slot,
                lambda slot=slot: _bounds_from_index(slot, by_slot, None, eps),
                epsilon=eps,
            )
    return result


def constraint_dependencies(slot: int) -> tuple[int, ...]:
    """Slots whose positions bound ``slot``, sorted. Empty for an invalid slot."""
    if not is_valid_slot(slot):
        return ()
    return tuple(sorted(s for s in _NEIGHBOR_TABLE[slot] if s is not None))


def dependent_slots(slot: int) -> tuple[int, ...]:
    """Slots whose bounds change when ``slot``'s player moves, sorted."""
    if not is_valid_slot(slot):
        return ()
    return tuple(s for s in ALL_SLOTS if slot in constraint_dependencies(s))


def _snapshot(player: PlayerState | None) -> tuple | None:
    if player is None:
        return None
    return (player.x, player.y, player.is_server)


def slots_needing_recalculation(previous: Lineup, current: Lineup) -> tuple[int, ...]:
    """Slots whose bounds may differ between two snapshots of a lineup.

    A slot needs new bounds if its own player changed (position, server
    flag, or presence) or if any slot it depends on changed.
    """
    before = index_lineup(previous)
    after = index_lineup(current)

    changed = {
        slot for slot in ALL_SLOTS if _snapshot(before.get(slot)) != _snapshot(after.get(slot))
    }
    stale = set(changed)
    for slot in changed:
        stale.update(dependent_slots(slot))
    return tuple(sorted(stale))
