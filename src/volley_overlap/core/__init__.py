"""Court geometry, slot topology and tolerance primitives."""

from . import tolerance
from .coordinates import (
    COURT_BOUNDS,
    EXTENDED_BOUNDS,
    TOLERANCE,
    CoordinateBounds,
    Point,
    is_in_service_zone,
    is_valid_position,
    is_within_court_bounds,
    is_within_extended_bounds,
)
from .neighbors import (
    Neighbors,
    are_adjacent,
    are_counterparts,
    get_all_neighbors,
    get_column_position,
    get_left_neighbor,
    get_linear_left_neighbor,
    get_linear_right_neighbor,
    get_right_neighbor,
    get_row_counterpart,
    get_row_slots,
    get_row_type,
    is_back_row,
    is_front_row,
)
from .types import (
    ALL_SLOTS,
    BACK_ROW,
    FRONT_ROW,
    PlayerState,
    Role,
    RotationMap,
    is_valid_slot,
    slot_full_name,
    slot_label,
)

__all__ = [
    "tolerance",
    "COURT_BOUNDS",
    "EXTENDED_BOUNDS",
    "TOLERANCE",
    "CoordinateBounds",
    "Point",
    "is_in_service_zone",
    "is_valid_position",
    "is_within_court_bounds",
    "is_within_extended_bounds",
    "Neighbors",
    "are_adjacent",
    "are_counterparts",
    "get_all_neighbors",
    "get_column_position",
    "get_left_neighbor",
    "get_linear_left_neighbor",
    "get_linear_right_neighbor",
    "get_right_neighbor",
    "get_row_counterpart",
    "get_row_slots",
    "get_row_type",
    "is_back_row",
    "is_front_row",
    "ALL_SLOTS",
    "BACK_ROW",
    "FRONT_ROW",
    "PlayerState",
    "Role",
    "RotationMap",
    "is_valid_slot",
    "slot_full_name",
    "slot_label",
]
