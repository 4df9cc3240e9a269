"""Slot topology: row membership, left/right neighbours and column counterparts.

Two notions of neighbour are provided:

- :func:`get_left_neighbor` / :func:`get_right_neighbor` are circular within
  a row (4 -> 3 -> 2 -> 4 to the right in the front row), so every slot has
  both neighbours.
- :func:`get_linear_left_neighbor` / :func:`get_linear_right_neighbor` stop
  at the sidelines, which is what the drag constraints need: the left-most
  player of a row has nobody to its left.

Functions taking a slot return ``None`` (or ``False``) for anything that is
not a valid slot rather than raising.
"""

from __future__ import annotations

from typing import Literal, NamedTuple

from .types import BACK_ROW, FRONT_ROW, is_valid_slot

__all__ = [
    "Neighbors",
    "RowType",
    "ColumnPosition",
    "get_left_neighbor",
    "get_right_neighbor",
    "get_linear_left_neighbor",
    "get_linear_right_neighbor",
    "get_row_counterpart",
    "is_front_row",
    "is_back_row",
    "get_all_neighbors",
    "get_row_type",
    "get_column_position",
    "get_row_slots",
    "are_adjacent",
    "are_counterparts",
]

RowType = Literal["front", "back"]
ColumnPosition = Literal["left", "middle", "right"]

_COLUMNS: tuple[ColumnPosition, ...] = ("left", "middle", "right")

_COUNTERPARTS: dict[int, int] = {
    4: 5,
    5: 4,
    3: 6,
    6: 3,
    2: 1,
    1: 2,
}


class Neighbors(NamedTuple):
    """All topological relations of one slot."""

    left: int | None
    right: int | None
    counterpart: int | None


def _row_of(slot: object) -> tuple[int, ...] | None:
    if not is_valid_slot(slot):
        return None
    return FRONT_ROW if slot in FRONT_ROW else BACK_ROW


def get_left_neighbor(slot: int) -> int | None:
    """Circular left neighbour within the slot's row."""
    row = _row_of(slot)
    if row is None:
        return None
    return row[(row.index(slot) - 1) % 3]


def get_right_neighbor(slot: int) -> int | None:
    """Circular right neighbour within the slot's row."""
    row = _row_of(slot)
    if row is None:
        return None
    return row[(row.index(slot) + 1) % 3]


def get_linear_left_neighbor(slot: int) -> int | None:
    """Left neighbour without wrap-around; None at the left sideline."""
    row = _row_of(slot)
    if row is None:
        return None
    index = row.index(slot)
    return row[index - 1] if index > 0 else None


def get_linear_right_neighbor(slot: int) -> int | None:
    """Right neighbour without wrap-around; None at the right sideline."""
    row = _row_of(slot)
    if row is None:
        return None
    index = row.index(slot)
    return row[index + 1] if index < len(row) - 1 else None


def get_row_counterpart(slot: int) -> int | None:
    """Slot in the other row sharing the same column."""
    if not is_valid_slot(slot):
        return None
    return _COUNTERPARTS[slot]


def is_front_row(slot: int) -> bool:
    return is_valid_slot(slot) and slot in FRONT_ROW


def is_back_row(slot: int) -> bool:
    return is_valid_slot(slot) and slot in BACK_ROW


def get_all_neighbors(slot: int) -> Neighbors:
    return Neighbors(
        left=get_left_neighbor(slot),
        right=get_right_neighbor(slot),
        counterpart=get_row_counterpart(slot),
    )


def get_row_type(slot: int) -> RowType | None:
    if is_front_row(slot):
        return "front"
    if is_back_row(slot):
        return "back"
    return None


def get_column_position(slot: int) -> ColumnPosition | None:
    row = _row_of(slot)
    if row is None:
        return None
    return _COLUMNS[row.index(slot)]


def get_row_slots(row: RowType) -> tuple[int, ...]:
    """Slots of a row ordered left to right.

    Raises:
        ValueError: If ``row`` is not ``"front"`` or ``"back"``
    """
    if row == "front":
        return FRONT_ROW
    if row == "back":
        return BACK_ROW
    raise ValueError(f"row must be 'front' or 'back', got {row!r}")


def are_adjacent(slot_a: int, slot_b: int) -> bool:
    """True if the two slots sit next to each other in the same row.

    Adjacency is linear: the two sideline slots of a row are not adjacent.
    """
    return slot_b is not None and slot_b in (
        get_linear_left_neighbor(slot_a),
        get_linear_right_neighbor(slot_a),
    )


def are_counterparts(slot_a: int, slot_b: int) -> bool:
    counterpart = get_row_counterpart(slot_a)
    return counterpart is not None and counterpart == slot_b
