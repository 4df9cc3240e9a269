"""Overlap rule checker.

Decides whether a six-player lineup is legal at the moment of serve:

1. The lineup must be well-formed (see :mod:`.lineup`). Any shape problem
   is reported and the geometric rules are skipped.
2. Within each row, every player must be to the left of the player to
   their right (front row 4, 3, 2; back row 5, 6, 1). The server is held
   to this rule like everyone else.
3. Each front-row player must be closer to the net than their back-row
   counterpart (4/5, 3/6, 2/1). A pair is exempt when one of the two is
   the server and is standing in the service zone.

All comparisons use the tolerance helpers, so players closer together than
the tolerance count as overlapping.

Example::

    from volley_overlap.validate import check_overlap

    result = check_overlap(lineup)
    if not result.is_legal:
        for violation in result.violations:
            print(violation.code.value, violation.message)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..core import tolerance
from ..core.coordinates import SERVICE_ZONE_START, is_in_service_zone
from ..core.neighbors import get_linear_right_neighbor, get_row_counterpart
from ..core.types import BACK_ROW, FRONT_ROW, PlayerState, slot_full_name
from .lineup import as_player_list, check_lineup_shape, collect_coordinates, index_lineup
from .models import (
    OverlapResult,
    SummarySeverity,
    Violation,
    ViolationCode,
    ViolationSummary,
)

logger = logging.getLogger(__name__)

__all__ = [
    "check_overlap",
    "is_server_exempt",
    "explain_violation",
    "suggest_fix",
    "summarize_violations",
    "user_friendly_messages",
    "is_position_legal",
]


def is_server_exempt(first: PlayerState, second: PlayerState) -> bool:
    """True if either player is the server standing in the service zone.

    Such a pair is not held to the front/back rule, and the matching drag
    bound is not applied. The zone test is exact: the server must be
    strictly behind the endline, so a server standing on the line or
    within tolerance of it gets no exemption.
    """
    return any(
        p.is_server and p.y > SERVICE_ZONE_START and is_in_service_zone(p.x, p.y)
        for p in (first, second)
    )


def _row_order_violation(left: PlayerState, right: PlayerState) -> Violation:
    return Violation(
        code=ViolationCode.ROW_ORDER,
        slots=(left.slot, right.slot),
        message=(
            f"Row order violation: {slot_full_name(left.slot)} ({left.display_name}) "
            f"at x={left.x:.2f}m must be to the left of "
            f"{slot_full_name(right.slot)} ({right.display_name}) at x={right.x:.2f}m"
        ),
        coordinates=collect_coordinates((left, right)),
    )


def _front_back_violation(front: PlayerState, back: PlayerState) -> Violation:
    return Violation(
        code=ViolationCode.FRONT_BACK,
        slots=(front.slot, back.slot),
        message=(
            f"Front/back violation: {slot_full_name(front.slot)} ({front.display_name}) "
            f"at y={front.y:.2f}m must be in front of "
            f"{slot_full_name(back.slot)} ({back.display_name}) at y={back.y:.2f}m"
        ),
        coordinates=collect_coordinates((front, back)),
    )


def _check_row_order(
    by_slot: dict[int, PlayerState], epsilon: float | None
) -> list[Violation]:
    violations = []
    for row in (FRONT_ROW, BACK_ROW):
        for slot in row:
            right_slot = get_linear_right_neighbor(slot)
            if right_slot is None:
                continue
            left, right = by_slot[slot], by_slot[right_slot]
            if not tolerance.is_less(left.x, right.x, epsilon):
                violations.append(_row_order_violation(left, right))
    return violations


def _check_front_back(
    by_slot: dict[int, PlayerState], epsilon: float | None
) -> list[Violation]:
    violations = []
    for front_slot in FRONT_ROW:
        front = by_slot[front_slot]
        back = by_slot[get_row_counterpart(front_slot)]
        if is_server_exempt(front, back):
            continue
        if not tolerance.is_less(front.y, back.y, epsilon):
            violations.append(_front_back_violation(front, back))
    return violations


def check_overlap(
    lineup: Iterable[PlayerState], *, epsilon: float | None = None
) -> OverlapResult:
    """Validate a lineup against the overlap rules.

    Never raises for bad lineup data; every problem is reported as a
    violation. Row-order violations come first (front row, then back row,
    left to right), followed by front/back violations in column order.

    Args:
        lineup: Six player states in any order, or a slot-keyed mapping
        epsilon: Comparison tolerance in metres (defaults to 0.03)

    Returns:
        OverlapResult whose ``is_legal`` is True iff nothing was violated
    """
    players = as_player_list(lineup)

    shape_violations = check_lineup_shape(lineup if players is None else players)
    if shape_violations:
        logger.debug(
            "Lineup rejected before geometric checks: %s",
            ", ".join(v.code.value for v in shape_violations),
        )
        return OverlapResult(violations=shape_violations)

    by_slot = {p.slot: p for p in players}
    violations = _check_row_order(by_slot, epsilon)
    violations.extend(_check_front_back(by_slot, epsilon))

    logger.debug("Overlap check complete: %d violation(s)", len(violations))
    return OverlapResult(violations=violations)


def _player_name(slot: int, by_slot: dict[int, PlayerState]) -> str:
    player = by_slot.get(slot)
    return f"{player.display_name} (slot {slot})" if player else f"slot {slot}"


def explain_violation(violation: Violation, lineup: Sequence[PlayerState]) -> str:
    """Describe a violation in terms of the players involved.

    Uses the violation's recorded coordinates when available. Shape
    violations are explained by their own message.
    """
    by_slot = index_lineup(lineup)
    coords = violation.coordinates or {}

    if violation.code in (ViolationCode.ROW_ORDER, ViolationCode.FRONT_BACK) and len(
        violation.slots
    ) == 2:
        first, second = violation.slots
        relation = (
            "to the left of" if violation.code == ViolationCode.ROW_ORDER else "in front of"
        )
        parts = []
        for slot in (first, second):
            text = f"{slot_full_name(slot)} {_player_name(slot, by_slot)}"
            if slot in coords:
                text += f" at ({coords[slot].x:.2f}, {coords[slot].y:.2f})"
            parts.append(text)
        return f"{parts[0]} must be {relation} {parts[1]}"

    if violation.code == ViolationCode.MULTIPLE_SERVERS:
        names = ", ".join(_player_name(slot, by_slot) for slot in violation.slots)
        return f"Only one player can be the server. Currently serving: {names}"

    return violation.message


def suggest_fix(
    violation: Violation,
    lineup: Sequence[PlayerState],
    *,
    epsilon: float | None = None,
) -> str | None:
    """Suggest how to resolve a violation.

    Returns:
        A one-sentence suggestion, or None if nothing specific can be said
    """
    by_slot = index_lineup(lineup)
    min_gap_cm = round((tolerance.get_epsilon() if epsilon is None else epsilon) * 100)
    code = violation.code

    if code == ViolationCode.ROW_ORDER:
        if len(violation.slots) != 2:
            return "Adjust player positions to maintain proper row order."
        left, right = (by_slot.get(s) for s in violation.slots)
        if left is None or right is None:
            return "Adjust player positions to maintain proper row order."
        if left.x > right.x:
            return (
                f"Move {slot_full_name(left.slot)} ({left.display_name}) to the left of "
                f"{slot_full_name(right.slot)} ({right.display_name})."
            )
        return (
            f"Increase separation between {slot_full_name(left.slot)} and "
            f"{slot_full_name(right.slot)} to at least {min_gap_cm}cm."
        )

    if code == ViolationCode.FRONT_BACK:
        if len(violation.slots) != 2:
            return "Adjust player positions to maintain proper front/back order."
        front, back = (by_slot.get(s) for s in violation.slots)
        if front is None or back is None:
            return "Adjust player positions to maintain proper front/back order."
        if front.y >= back.y:
            return (
                f"Move {slot_full_name(front.slot)} ({front.display_name}) closer to the net "
                f"than {slot_full_name(back.slot)} ({back.display_name})."
            )
        return (
            f"Increase front/back separation between {slot_full_name(front.slot)} and "
            f"{slot_full_name(back.slot)} to at least {min_gap_cm}cm."
        )

    if code == ViolationCode.MULTIPLE_SERVERS:
        return "Designate only one player as the server."
    if code == ViolationCode.NO_SERVER:
        return "Designate one player as the server."
    if code == ViolationCode.INVALID_COORDINATES:
        return "Give every player finite x and y coordinates."
    if code == ViolationCode.OUT_OF_BOUNDS:
        return "Move the player back onto the court."
    if code.family == ViolationCode.INVALID_LINEUP:
        return "Ensure exactly 6 players with unique rotation slots (1-6)."
    return None


def summarize_violations(violations: Sequence[Violation]) -> ViolationSummary:
    """Count violations per code and grade their overall severity.

    A single row-order slip is minor, up to two violations of any kind are
    major, and anything beyond that is critical.
    """
    types: dict[str, int] = {}
    affected: set[int] = set()
    for violation in violations:
        types[violation.code.value] = types.get(violation.code.value, 0) + 1
        affected.update(violation.slots)

    total = len(violations)
    if total == 0:
        severity = SummarySeverity.NONE
    elif total == 1 and violations[0].code == ViolationCode.ROW_ORDER:
        severity = SummarySeverity.MINOR
    elif total <= 2:
        severity = SummarySeverity.MAJOR
    else:
        severity = SummarySeverity.CRITICAL

    return ViolationSummary(
        total_violations=total,
        violation_types=types,
        affected_slots=tuple(sorted(affected)),
        severity=severity,
    )


_TIPS = (
    (
        ViolationCode.ROW_ORDER,
        "Tip: Players in the same row must be positioned left to right in their designated order.",
    ),
    (
        ViolationCode.FRONT_BACK,
        "Tip: Front row players must be positioned closer to the net than their back row counterparts.",
    ),
    (
        ViolationCode.MULTIPLE_SERVERS,
        "Tip: Only one player can be designated as the server at the moment of serve contact.",
    ),
)


def user_friendly_messages(violations: Sequence[Violation]) -> list[str]:
    """Numbered violation messages with a heading and rule tips, for display."""
    if not violations:
        return ["All players are positioned correctly according to volleyball overlap rules."]

    summary = summarize_violations(violations)
    if summary.total_violations == 1:
        messages = ["1 positioning violation detected:"]
    else:
        messages = [f"{summary.total_violations} positioning violations detected:"]

    messages.extend(f"{i}. {v.message}" for i, v in enumerate(violations, start=1))

    for code, tip in _TIPS:
        if summary.violation_types.get(code.value):
            messages.append(tip)
    return messages


def is_position_legal(
    slot: int,
    position: tuple[float, float],
    lineup: Iterable[PlayerState],
    *,
    epsilon: float | None = None,
) -> bool:
    """Check whether moving ``slot``'s player to ``position`` keeps the lineup legal.

    An incomplete lineup (fewer than six entries, or nobody in ``slot``)
    cannot be judged and always allows the move, as does input that is not
    a collection of players at all.
    """
    players = as_player_list(lineup)
    if players is None or len(players) != 6:
        return True
    if not any(isinstance(p, PlayerState) and p.slot == slot for p in players):
        return True

    x, y = position
    moved = [
        p.moved_to(x, y) if isinstance(p, PlayerState) and p.slot == slot else p
        for p in players
    ]
    return check_overlap(moved, epsilon=epsilon).is_legal
