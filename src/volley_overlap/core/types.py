"""Player, role and rotation types shared by the validator and the converters."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import InvalidSlotError, ValidationError

__all__ = [
    "ALL_SLOTS",
    "FRONT_ROW",
    "BACK_ROW",
    "SLOT_LABELS",
    "SLOT_FULL_NAMES",
    "Role",
    "PlayerState",
    "RotationMap",
    "is_valid_slot",
    "slot_label",
    "slot_full_name",
]

ALL_SLOTS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)

# Left to right as seen from behind the team's own endline.
FRONT_ROW: tuple[int, ...] = (4, 3, 2)
BACK_ROW: tuple[int, ...] = (5, 6, 1)

SLOT_LABELS: dict[int, str] = {
    1: "RB",
    2: "RF",
    3: "MF",
    4: "LF",
    5: "LB",
    6: "MB",
}

SLOT_FULL_NAMES: dict[int, str] = {
    1: "Right Back",
    2: "Right Front",
    3: "Middle Front",
    4: "Left Front",
    5: "Left Back",
    6: "Middle Back",
}


def is_valid_slot(value: Any) -> bool:
    """Check that ``value`` is an integer rotation slot 1-6.

    Booleans are rejected even though ``True == 1``.
    """
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 6


def _require_slot(slot: Any) -> int:
    if not is_valid_slot(slot):
        raise InvalidSlotError(
            "Unknown rotation slot",
            slot=slot,
            suggestions=["Rotation slots are numbered 1-6"],
        )
    return slot


def slot_label(slot: int) -> str:
    """Short zone label such as ``"RB"`` or ``"LF"``."""
    return SLOT_LABELS[_require_slot(slot)]


def slot_full_name(slot: int) -> str:
    """Long zone name such as ``"Right Back"``."""
    return SLOT_FULL_NAMES[_require_slot(slot)]


class Role(str, Enum):
    """Player role. Descriptive only; legality never depends on it."""

    SETTER = "S"
    OPPOSITE = "OPP"
    OUTSIDE_HITTER_1 = "OH1"
    OUTSIDE_HITTER_2 = "OH2"
    MIDDLE_BLOCKER_1 = "MB1"
    MIDDLE_BLOCKER_2 = "MB2"
    LIBERO = "L"
    DEFENSIVE_SPECIALIST = "DS"
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, value: str | None) -> Role:
        """Map a role code or long name to a Role.

        Matching is case-insensitive and accepts both the short codes
        (``"OH2"``) and hyphenated long names (``"outside-hitter-2"``).
        Anything unrecognised becomes :attr:`UNKNOWN`.
        """
        if not value:
            return cls.UNKNOWN
        return _ROLE_ALIASES.get(value.strip().lower(), cls.UNKNOWN)


_ROLE_ALIASES: dict[str, Role] = {
    "setter": Role.SETTER,
    "opposite": Role.OPPOSITE,
    "outside-hitter": Role.OUTSIDE_HITTER_1,
    "outside-hitter-1": Role.OUTSIDE_HITTER_1,
    "outside-hitter-2": Role.OUTSIDE_HITTER_2,
    "middle-blocker": Role.MIDDLE_BLOCKER_1,
    "middle-blocker-1": Role.MIDDLE_BLOCKER_1,
    "middle-blocker-2": Role.MIDDLE_BLOCKER_2,
    "libero": Role.LIBERO,
    "defensive-specialist": Role.DEFENSIVE_SPECIALIST,
}
_ROLE_ALIASES.update({role.value.lower(): role for role in Role})


@dataclass(frozen=True)
class PlayerState:
    """One player's snapshot at the moment of serve.

    Nothing is validated here: a lineup with bad slots or NaN coordinates
    must still be representable so the validator can report on it.

    Attributes:
        id: Identifier, unique within a lineup
        display_name: Name used in violation messages
        role: Descriptive role tag
        slot: Rotation slot 1-6
        x: Metres from the left sideline
        y: Metres from the net
        is_server: Whether this player is serving
    """

    id: str
    display_name: str
    role: Role
    slot: int
    x: float
    y: float
    is_server: bool = False

    def moved_to(self, x: float, y: float) -> PlayerState:
        """Return a copy of this player at a new position."""
        return PlayerState(
            id=self.id,
            display_name=self.display_name,
            role=self.role,
            slot=self.slot,
            x=x,
            y=y,
            is_server=self.is_server,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "role": self.role.value,
            "slot": self.slot,
            "x": self.x,
            "y": self.y,
            "is_server": self.is_server,
        }


class RotationMap(Mapping):
    """Immutable slot to player-id assignment.

    The six slots must each map to a distinct, non-empty player id. All
    problems are collected and raised together as a :class:`ValidationError`.

    Example::

        rotation = RotationMap({1: "p1", 2: "p2", 3: "p3", 4: "p4", 5: "p5", 6: "p6"})
        rotation[4]             # "p4"
        rotation.slot_of("p6")  # 6
    """

    __slots__ = ("_slots",)

    def __init__(self, assignments: Mapping[int, str]):
        errors: list[str] = []

        for slot in assignments:
            if not is_valid_slot(slot):
                errors.append(f"Invalid rotation slot {slot!r}")
        for slot in ALL_SLOTS:
            if slot not in assignments:
                errors.append(f"Slot {slot} has no player")

        seen: dict[str, int] = {}
        for slot, player_id in assignments.items():
            if not player_id:
                errors.append(f"Slot {slot} has an empty player id")
                continue
            if player_id in seen:
                errors.append(
                    f"Player {player_id!r} is assigned to both slot {seen[player_id]} and slot {slot}"
                )
            else:
                seen[player_id] = slot

        if errors:
            raise ValidationError(
                errors,
                suggestions=["Assign each of the slots 1-6 to exactly one distinct player"],
            )

        self._slots: dict[int, str] = {slot: assignments[slot] for slot in ALL_SLOTS}

    def __getitem__(self, slot: int) -> str:
        return self._slots[slot]

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __hash__(self) -> int:
        return hash(tuple(self._slots.items()))

    def __repr__(self) -> str:
        return f"RotationMap({self._slots!r})"

    def slot_of(self, player_id: str) -> int | None:
        """Return the slot assigned to ``player_id``, or None."""
        for slot, assigned in self._slots.items():
            if assigned == player_id:
                return slot
        return None
