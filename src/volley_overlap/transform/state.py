"""Conversion between the host's screen-space player records and PlayerState.

The host keeps players in pixel coordinates with a free-form role string;
the engine wants metres and a :class:`Role`. :class:`StateConverter` is the
only place the two meet.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from ..core.coordinates import CoordinateBounds, Point
from ..core.types import PlayerState, Role, RotationMap
from .transformer import CoordinateTransformer


@dataclass
class ScreenPosition:
    """A player's position on the host canvas, in pixels."""

    x: float
    y: float
    is_custom: bool = True
    last_modified: datetime = field(default_factory=datetime.now)


@dataclass
class ScreenPlayerState:
    """Player record as the host stores it.

    Attributes:
        role: Free-form role text, e.g. ``"setter"`` or ``"OH1"``
        x: Pixels from the canvas's left edge
        y: Pixels from the canvas's top edge (the net)
    """

    id: str
    display_name: str
    role: str
    slot: int
    x: float
    y: float
    is_server: bool = False
    is_custom: bool = True
    last_modified: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class StateConverter:
    """Translate player records between screen pixels and court metres."""

    transformer: CoordinateTransformer = field(default_factory=CoordinateTransformer)

    @staticmethod
    def map_role(role: str | Role | None) -> Role:
        if isinstance(role, Role):
            return role
        return Role.from_string(role)

    def to_court_state(
        self,
        screen_state: ScreenPlayerState,
        slot: int | None = None,
        is_server: bool | None = None,
    ) -> PlayerState:
        """Convert a screen record, optionally overriding its slot and server flag."""
        point = self.transformer.screen_to_court(screen_state.x, screen_state.y)
        return PlayerState(
            id=screen_state.id,
            display_name=screen_state.display_name,
            role=self.map_role(screen_state.role),
            slot=screen_state.slot if slot is None else slot,
            x=point.x,
            y=point.y,
            is_server=screen_state.is_server if is_server is None else is_server,
        )

    def to_screen_state(self, state: PlayerState) -> ScreenPlayerState:
        point = self.transformer.court_to_screen(state.x, state.y)
        return ScreenPlayerState(
            id=state.id,
            display_name=state.display_name,
            role=state.role.value,
            slot=state.slot,
            x=point.x,
            y=point.y,
            is_server=state.is_server,
        )

    def position_to_court(self, position: ScreenPosition) -> Point:
        return self.transformer.screen_to_court(position.x, position.y)

    def court_to_position(self, point: Point, is_custom: bool = True) -> ScreenPosition:
        screen = self.transformer.court_to_screen(point.x, point.y)
        return ScreenPosition(x=screen.x, y=screen.y, is_custom=is_custom)

    def formation_to_court_states(
        self,
        positions: Mapping[str, ScreenPosition],
        rotation_map: RotationMap,
        server_slot: int = 1,
    ) -> list[PlayerState]:
        """Build a lineup from a formation's per-player screen positions.

        Players in ``rotation_map`` without a position are left out, so the
        result may hold fewer than six players. Display names default to the
        player id and roles to :attr:`Role.UNKNOWN`.
        """
        states = []
        for slot, player_id in rotation_map.items():
            position = positions.get(player_id)
            if position is None:
                continue
            point = self.position_to_court(position)
            states.append(
                PlayerState(
                    id=player_id,
                    display_name=player_id,
                    role=Role.UNKNOWN,
                    slot=slot,
                    x=point.x,
                    y=point.y,
                    is_server=slot == server_slot,
                )
            )
        return states

    def court_states_to_formation(
        self, states: Iterable[PlayerState]
    ) -> dict[str, ScreenPosition]:
        return {state.id: self.court_to_position(Point(state.x, state.y)) for state in states}

    @staticmethod
    def create_rotation_map(states: Iterable[PlayerState]) -> RotationMap:
        """Rotation map from a lineup.

        Raises:
            ValidationError: If the lineup's slots are not a permutation of 1-6
        """
        return RotationMap({state.slot: state.id for state in states})

    @staticmethod
    def find_server_slot(states: Iterable[PlayerState]) -> int:
        """Slot of the first server found, or 1 if nobody is serving."""
        for state in states:
            if state.is_server:
                return state.slot
        return 1

    def is_valid_screen_position(self, point: Point) -> bool:
        """Check a pixel position against the reference canvas."""
        return self.screen_area.contains(point.x, point.y)

    def normalize_screen_position(self, point: Point) -> Point:
        return self.screen_area.clamp(point.x, point.y)

    @property
    def screen_area(self) -> CoordinateBounds:
        screen = self.transformer.screen
        return CoordinateBounds(min_x=0.0, max_x=screen.width, min_y=0.0, max_y=screen.height)
