"""Overlap validation, drag bounds and result caching.

Quick Start::

    from volley_overlap.config import Config
    from volley_overlap.validate import LineupChecker, calculate_all_bounds, check_overlap

    result = check_overlap(lineup)
    print(result.is_legal)

    # Tolerance and cache taken from a loaded Config
    checker = LineupChecker.from_config(Config.load())
    print(checker.check(lineup).is_legal)

    for slot, bounds in calculate_all_bounds(lineup).items():
        print(slot, bounds.min_x, bounds.max_x)
"""

from .cache import CacheStats, LineupCache, bounds_fingerprint, lineup_fingerprint
from .checker import LineupChecker
from .constraints import (
    PositionBounds,
    calculate_valid_bounds,
    is_position_valid,
    snap_to_valid_position,
)
from .lineup import check_lineup_shape, validate_lineup
from .models import (
    Location,
    OverlapResult,
    SummarySeverity,
    Violation,
    ViolationCode,
    ViolationSummary,
)
from .optimized import (
    calculate_all_bounds,
    calculate_bounds_fast,
    constraint_dependencies,
    dependent_slots,
    slots_needing_recalculation,
)
from .overlap import (
    check_overlap,
    explain_violation,
    is_position_legal,
    is_server_exempt,
    suggest_fix,
    summarize_violations,
    user_friendly_messages,
)

__all__ = [
    # Models
    "Location",
    "OverlapResult",
    "SummarySeverity",
    "Violation",
    "ViolationCode",
    "ViolationSummary",
    # Validation
    "LineupChecker",
    "check_lineup_shape",
    "validate_lineup",
    "check_overlap",
    "explain_violation",
    "is_position_legal",
    "is_server_exempt",
    "suggest_fix",
    "summarize_violations",
    "user_friendly_messages",
    # Bounds
    "PositionBounds",
    "calculate_valid_bounds",
    "is_position_valid",
    "snap_to_valid_position",
    "calculate_all_bounds",
    "calculate_bounds_fast",
    "constraint_dependencies",
    "dependent_slots",
    "slots_needing_recalculation",
    # Cache
    "CacheStats",
    "LineupCache",
    "bounds_fingerprint",
    "lineup_fingerprint",
]
