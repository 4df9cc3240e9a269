"""Validation result models using Pydantic.

A validation run produces an :class:`OverlapResult` holding zero or more
:class:`Violation` entries. Violations are immutable and compare by value,
so two runs over the same lineup produce equal results.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ViolationCode(str, Enum):
    """Violation codes.

    The first four are the top-level codes. The remaining ones describe a
    specific lineup-shape problem and all belong to the ``INVALID_LINEUP``
    family, except that a second server is always reported as
    ``MULTIPLE_SERVERS``.
    """

    ROW_ORDER = "ROW_ORDER"
    FRONT_BACK = "FRONT_BACK"
    MULTIPLE_SERVERS = "MULTIPLE_SERVERS"
    INVALID_LINEUP = "INVALID_LINEUP"

    INVALID_LINEUP_TYPE = "INVALID_LINEUP_TYPE"
    INVALID_PLAYER_STATE = "INVALID_PLAYER_STATE"
    INVALID_PLAYER_COUNT = "INVALID_PLAYER_COUNT"
    DUPLICATE_SLOT = "DUPLICATE_SLOT"
    MISSING_SLOT = "MISSING_SLOT"
    INVALID_SLOT = "INVALID_SLOT"
    NO_SERVER = "NO_SERVER"
    INVALID_COORDINATES = "INVALID_COORDINATES"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"

    @property
    def family(self) -> ViolationCode:
        """Top-level code this code is reported under."""
        if self in _TOP_LEVEL:
            return self
        return ViolationCode.INVALID_LINEUP

    @property
    def is_shape_problem(self) -> bool:
        """True for codes raised by lineup-shape checks rather than geometry."""
        return self not in (ViolationCode.ROW_ORDER, ViolationCode.FRONT_BACK)


_TOP_LEVEL = frozenset(
    {
        ViolationCode.ROW_ORDER,
        ViolationCode.FRONT_BACK,
        ViolationCode.MULTIPLE_SERVERS,
        ViolationCode.INVALID_LINEUP,
    }
)


class SummarySeverity(str, Enum):
    """Overall severity of a set of violations, for UI emphasis."""

    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class Location(BaseModel):
    """A player position in court metres."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class Violation(BaseModel):
    """A single rule violation.

    Attributes:
        code: What was violated
        slots: Slots involved, in the order the rule names them (left before
            right, front before back)
        message: Human-readable description naming slots and players
        coordinates: Positions of the players involved, keyed by slot
    """

    model_config = ConfigDict(frozen=True)

    code: ViolationCode
    slots: tuple[int, ...] = ()
    message: str
    coordinates: dict[int, Location] | None = None

    def __hash__(self) -> int:
        coords = tuple(sorted(self.coordinates.items())) if self.coordinates else None
        return hash((self.code, self.slots, self.message, coords))

    @property
    def family(self) -> ViolationCode:
        return self.code.family

    def involves(self, slot: int) -> bool:
        """Check whether ``slot`` is implicated in this violation."""
        return slot in self.slots

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(mode="json")


class OverlapResult(BaseModel):
    """Outcome of validating one lineup.

    ``is_legal`` is derived from the violation list and cannot disagree
    with it. Results are immutable, so one can be shared between callers
    (the cache hands out the same instance on every hit).
    """

    model_config = ConfigDict(frozen=True)

    violations: tuple[Violation, ...] = ()

    @property
    def is_legal(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[ViolationCode]:
        """Violation codes in detection order."""
        return [v.code for v in self.violations]

    @property
    def affected_slots(self) -> list[int]:
        """Sorted slots implicated by any violation."""
        return sorted({slot for v in self.violations for slot in v.slots})

    def filter_by_code(self, code: ViolationCode) -> list[Violation]:
        """Violations with exactly ``code``."""
        return [v for v in self.violations if v.code == code]

    def filter_by_family(self, family: ViolationCode) -> list[Violation]:
        """Violations whose code belongs to ``family``."""
        return [v for v in self.violations if v.code.family == family]

    def __iter__(self):
        """Iterate over all violations."""
        return iter(self.violations)

    def __len__(self) -> int:
        return len(self.violations)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "is_legal": self.is_legal,
            "violations": [v.to_dict() for v in self.violations],
        }


class ViolationSummary(BaseModel):
    """Counts and severity for a set of violations."""

    model_config = ConfigDict(frozen=True)

    total_violations: int = 0
    violation_types: dict[str, int] = Field(default_factory=dict)
    affected_slots: tuple[int, ...] = ()
    severity: SummarySeverity = SummarySeverity.NONE
