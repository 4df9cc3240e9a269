"""Pytest fixtures for volley-overlap tests."""

import pytest

from volley_overlap.core.types import PlayerState, Role

# slot -> (id, display name, role, x, y, is_server)
LEGAL_POSITIONS = {
    1: ("p1", "Ana", Role.SETTER, 7.0, 8.0, True),
    2: ("p2", "Bea", Role.OPPOSITE, 8.0, 4.0, False),
    3: ("p3", "Cleo", Role.MIDDLE_BLOCKER_1, 4.5, 4.0, False),
    4: ("p4", "Dana", Role.OUTSIDE_HITTER_1, 1.0, 4.0, False),
    5: ("p5", "Eve", Role.OUTSIDE_HITTER_2, 2.0, 8.0, False),
    6: ("p6", "Faye", Role.MIDDLE_BLOCKER_2, 4.5, 8.0, False),
}


def build_lineup(**changes):
    """Build the reference legal lineup with per-slot overrides.

    Keyword arguments are ``s<slot>=dict(...)`` with PlayerState field
    overrides, e.g. ``build_lineup(s3={"x": 8.0})``.
    """
    lineup = []
    for slot, (pid, name, role, x, y, server) in LEGAL_POSITIONS.items():
        fields = {
            "id": pid,
            "display_name": name,
            "role": role,
            "slot": slot,
            "x": x,
            "y": y,
            "is_server": server,
        }
        fields.update(changes.get(f"s{slot}", {}))
        lineup.append(PlayerState(**fields))
    return lineup


@pytest.fixture
def legal_lineup() -> list[PlayerState]:
    """The six-player lineup that satisfies every overlap rule."""
    return build_lineup()


@pytest.fixture
def make_lineup():
    """Factory for variations of the legal lineup."""
    return build_lineup
