"""Lineup shape checks.

These run before any geometric rule. They never raise: every problem with
the lineup itself is returned as a :class:`Violation` so callers can render
a message for any input, however malformed.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Mapping
from numbers import Real

from ..core import tolerance
from ..core.coordinates import COURT_BOUNDS, EXTENDED_BOUNDS
from ..core.types import ALL_SLOTS, PlayerState, is_valid_slot
from .models import Location, OverlapResult, Violation, ViolationCode

logger = logging.getLogger(__name__)

LINEUP_SIZE = 6


def as_player_list(lineup: object) -> list | None:
    """Materialise ``lineup`` as a list of entries.

    A slot-keyed mapping contributes its values. Returns None when
    ``lineup`` is not a collection of entries at all (None, a number, a
    string). The entries themselves are not checked.
    """
    if isinstance(lineup, Mapping):
        return list(lineup.values())
    if isinstance(lineup, (str, bytes)) or not isinstance(lineup, Iterable):
        return None
    return list(lineup)


def index_lineup(lineup: object) -> dict[int, PlayerState]:
    """Slot to player map. The first player claiming a slot wins.

    Entries that are not player states, or carry no valid slot, are skipped.
    """
    by_slot: dict[int, PlayerState] = {}
    for player in as_player_list(lineup) or ():
        if isinstance(player, PlayerState) and is_valid_slot(player.slot):
            by_slot.setdefault(player.slot, player)
    return by_slot


def _is_finite(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def has_finite_position(player: PlayerState) -> bool:
    """True if both coordinates are real, finite numbers."""
    return _is_finite(player.x) and _is_finite(player.y)


def collect_coordinates(players: Iterable[PlayerState]) -> dict[int, Location] | None:
    """Positions keyed by slot, skipping players that cannot be located."""
    coords = {
        p.slot: Location(x=p.x, y=p.y)
        for p in players
        if is_valid_slot(p.slot) and has_finite_position(p)
    }
    return coords or None


def _describe(player: PlayerState) -> str:
    return f"{player.display_name} (slot {player.slot!r})"


def _check_entries(lineup: object) -> tuple[list[PlayerState] | None, list[Violation]]:
    players = as_player_list(lineup)
    if players is None:
        return None, [
            Violation(
                code=ViolationCode.INVALID_LINEUP_TYPE,
                message=(
                    "Invalid lineup: expected a sequence of players, "
                    f"got {type(lineup).__name__}"
                ),
            )
        ]

    bad = [(i, p) for i, p in enumerate(players, start=1) if not isinstance(p, PlayerState)]
    if bad:
        details = ", ".join(f"entry {i} ({type(p).__name__})" for i, p in bad)
        return None, [
            Violation(
                code=ViolationCode.INVALID_PLAYER_STATE,
                message=f"Invalid lineup: not a player state: {details}",
            )
        ]
    return players, []


def check_lineup_shape(lineup: object) -> list[Violation]:
    """Check player count, slot permutation, server count and coordinates.

    Input that is not a collection of player states at all is reported as
    ``INVALID_LINEUP_TYPE`` or ``INVALID_PLAYER_STATE`` and nothing else is
    checked. A wrong player count is likewise reported alone; the remaining
    checks are all evaluated so a caller sees every structural problem at
    once. Messages and slot lists are sorted so the result does not depend
    on the order of ``lineup``.

    Args:
        lineup: Player states in any order, or a slot-keyed mapping

    Returns:
        Shape violations, empty if the lineup is well-formed
    """
    players, violations = _check_entries(lineup)
    if players is None:
        return violations

    if len(players) != LINEUP_SIZE:
        return [
            Violation(
                code=ViolationCode.INVALID_PLAYER_COUNT,
                message=f"Invalid lineup: expected {LINEUP_SIZE} players, got {len(players)}",
            )
        ]

    bad_slot_players = sorted(
        (p for p in players if not is_valid_slot(p.slot)), key=lambda p: (repr(p.slot), p.id)
    )
    if bad_slot_players:
        details = ", ".join(_describe(p) for p in bad_slot_players)
        violations.append(
            Violation(
                code=ViolationCode.INVALID_SLOT,
                message=f"Invalid lineup: invalid rotation slots found: {details}",
            )
        )

    slot_counts = Counter(p.slot for p in players if is_valid_slot(p.slot))
    duplicates = sorted(slot for slot, count in slot_counts.items() if count > 1)
    if duplicates:
        violations.append(
            Violation(
                code=ViolationCode.DUPLICATE_SLOT,
                slots=tuple(duplicates),
                message="Invalid lineup: duplicate rotation slots found: "
                + ", ".join(str(s) for s in duplicates),
            )
        )

    missing = [slot for slot in ALL_SLOTS if slot not in slot_counts]
    if missing:
        violations.append(
            Violation(
                code=ViolationCode.MISSING_SLOT,
                slots=tuple(missing),
                message="Invalid lineup: no player in rotation slots: "
                + ", ".join(str(s) for s in missing),
            )
        )

    servers = sorted((p for p in players if p.is_server), key=lambda p: (repr(p.slot), p.id))
    if not servers:
        violations.append(
            Violation(
                code=ViolationCode.NO_SERVER,
                message="Invalid lineup: expected exactly 1 server, got 0",
            )
        )
    elif len(servers) > 1:
        details = ", ".join(_describe(p) for p in servers)
        violations.append(
            Violation(
                code=ViolationCode.MULTIPLE_SERVERS,
                slots=tuple(sorted({p.slot for p in servers if is_valid_slot(p.slot)})),
                message=(
                    f"Multiple servers detected: {details}. "
                    "Only one player can be designated as the server at serve contact."
                ),
                coordinates=collect_coordinates(servers),
            )
        )

    unlocatable = sorted(
        (p for p in players if not has_finite_position(p)), key=lambda p: (repr(p.slot), p.id)
    )
    if unlocatable:
        details = ", ".join(_describe(p) for p in unlocatable)
        violations.append(
            Violation(
                code=ViolationCode.INVALID_COORDINATES,
                slots=tuple(sorted({p.slot for p in unlocatable if is_valid_slot(p.slot)})),
                message=f"Invalid lineup: coordinates must be finite numbers: {details}",
            )
        )

    return violations


def validate_lineup(
    lineup: Iterable[PlayerState],
    *,
    check_bounds: bool = True,
    epsilon: float | None = None,
) -> OverlapResult:
    """Shape checks plus an optional court-bounds check.

    Bounds are only checked for a well-formed lineup. The server may stand
    anywhere up to the back of the service zone; everyone else must be on
    the court.

    Args:
        lineup: Player states in any order, or a slot-keyed mapping
        check_bounds: Also report players outside their allowed area
        epsilon: Tolerance for the bounds check (defaults to 0.03 m)

    Returns:
        Result with shape and ``OUT_OF_BOUNDS`` violations
    """
    players = as_player_list(lineup)
    violations = check_lineup_shape(lineup if players is None else players)

    if not violations and check_bounds:
        eps = tolerance.get_epsilon() if epsilon is None else epsilon
        for player in sorted(players, key=lambda p: p.slot):
            allowed = EXTENDED_BOUNDS if player.is_server else COURT_BOUNDS
            if allowed.contains(player.x, player.y, eps):
                continue
            area = "court and service zone" if player.is_server else "court"
            violations.append(
                Violation(
                    code=ViolationCode.OUT_OF_BOUNDS,
                    slots=(player.slot,),
                    message=(
                        f"{_describe(player)} at ({player.x:.2f}, {player.y:.2f}) "
                        f"is outside the {area}"
                    ),
                    coordinates=collect_coordinates([player]),
                )
            )

    if violations:
        logger.debug("Lineup check found %d problem(s)", len(violations))
    return OverlapResult(violations=violations)
