"""
volley-overlap: Volleyball overlap-rule validation engine.

Decides whether a six-player lineup is legal at the moment of serve and
computes drag bounds that keep it legal. Pure and synchronous: no I/O
unless the host explicitly loads a config file.

Modules:
    core: Court coordinates, slot topology, tolerance comparisons
    validate: Overlap checks, drag bounds, result cache
    transform: Screen/court coordinate conversion
    config: Optional TOML configuration

Quick Start::

    from volley_overlap import PlayerState, Role, check_overlap

    lineup = [
        PlayerState("p1", "Ana", Role.SETTER, 1, 7.0, 8.0, is_server=True),
        PlayerState("p2", "Bea", Role.OPPOSITE, 2, 8.0, 4.0),
        ...
    ]
    result = check_overlap(lineup)
    if not result.is_legal:
        for violation in result.violations:
            print(violation.message)
"""

__version__ = "0.1.0"

from volley_overlap.config import Config, ConfigError
from volley_overlap.core import tolerance
from volley_overlap.core.coordinates import (
    COURT_BOUNDS,
    EXTENDED_BOUNDS,
    TOLERANCE,
    CoordinateBounds,
    Point,
)
from volley_overlap.core.types import PlayerState, Role, RotationMap
from volley_overlap.exceptions import (
    ConfigurationError,
    InvalidSlotError,
    ValidationError,
    VolleyOverlapError,
)
from volley_overlap.transform import CoordinateTransformer, ScreenSpace, StateConverter
from volley_overlap.validate import (
    LineupCache,
    LineupChecker,
    OverlapResult,
    PositionBounds,
    Violation,
    ViolationCode,
    calculate_all_bounds,
    calculate_valid_bounds,
    check_overlap,
)

__all__ = [
    "__version__",
    # Core
    "tolerance",
    "COURT_BOUNDS",
    "EXTENDED_BOUNDS",
    "TOLERANCE",
    "CoordinateBounds",
    "Point",
    "PlayerState",
    "Role",
    "RotationMap",
    # Validation
    "check_overlap",
    "calculate_valid_bounds",
    "calculate_all_bounds",
    "LineupCache",
    "LineupChecker",
    "OverlapResult",
    "PositionBounds",
    "Violation",
    "ViolationCode",
    # Transform
    "CoordinateTransformer",
    "ScreenSpace",
    "StateConverter",
    # Config and errors
    "Config",
    "ConfigError",
    "ConfigurationError",
    "InvalidSlotError",
    "ValidationError",
    "VolleyOverlapError",
]
