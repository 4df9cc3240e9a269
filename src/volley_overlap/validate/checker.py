"""Configured entry point to the overlap engine.

The module-level functions take ``epsilon`` and ``cache`` on every call.
:class:`LineupChecker` binds them once, typically from a loaded
:class:`~volley_overlap.config.Config`, so a host that sets
``[tolerance] epsilon`` gets that tolerance in every check and bound.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..core import tolerance
from ..core.coordinates import Point
from ..core.types import PlayerState
from ..exceptions import ConfigurationError
from .cache import LineupCache
from .constraints import Lineup, PositionBounds, calculate_valid_bounds
from .lineup import as_player_list, validate_lineup
from .models import OverlapResult, Violation
from .optimized import calculate_all_bounds, calculate_bounds_fast
from .overlap import check_overlap, is_position_legal, suggest_fix

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)


class LineupChecker:
    """Overlap checks and drag bounds with a fixed tolerance.

    Example:
        >>> from volley_overlap.config import Config
        >>> from volley_overlap.validate import LineupChecker
        >>>
        >>> checker = LineupChecker.from_config(Config.load())
        >>> result = checker.check(lineup)
        >>> bounds = checker.all_bounds(lineup)

    Attributes:
        epsilon: Comparison tolerance in metres
        cache: Result cache, or None to compute every call
    """

    def __init__(self, epsilon: float | None = None, cache: LineupCache | None = None) -> None:
        """Initialize the checker.

        Args:
            epsilon: Comparison tolerance in metres (defaults to 0.03)
            cache: Optional cache shared by every call on this checker

        Raises:
            ConfigurationError: If ``epsilon`` is negative or not finite
        """
        eps = tolerance.get_epsilon() if epsilon is None else epsilon
        if (
            isinstance(eps, bool)
            or not isinstance(eps, (int, float))
            or not math.isfinite(eps)
            or eps < 0
        ):
            raise ConfigurationError(
                "Tolerance must be a non-negative number",
                context={"epsilon": repr(epsilon)},
                suggestions=["The official tolerance is 0.03 (metres)"],
            )
        self.epsilon = float(eps)
        self.cache = cache

    @classmethod
    def from_config(cls, config: Config, *, use_cache: bool = True) -> LineupChecker:
        """Create a checker using ``[tolerance] epsilon``.

        With ``use_cache`` the checker also gets a cache sized by
        ``[cache] max_entries``.
        """
        cache = LineupCache.from_config(config) if use_cache else None
        logger.debug(
            "Lineup checker configured: epsilon=%s cache=%s",
            config.tolerance.epsilon,
            "on" if cache is not None else "off",
        )
        return cls(epsilon=config.tolerance.epsilon, cache=cache)

    def check(self, lineup: Iterable[PlayerState]) -> OverlapResult:
        """Validate ``lineup`` against the overlap rules."""
        players = as_player_list(lineup)
        target = lineup if players is None else players
        if self.cache is None:
            return check_overlap(target, epsilon=self.epsilon)
        return self.cache.get_validation(
            target, lambda: check_overlap(target, epsilon=self.epsilon), epsilon=self.epsilon
        )

    def validate(
        self, lineup: Iterable[PlayerState], *, check_bounds: bool = True
    ) -> OverlapResult:
        """Shape checks plus the court-bounds check."""
        return validate_lineup(lineup, check_bounds=check_bounds, epsilon=self.epsilon)

    def bounds(
        self, slot: int, lineup: Lineup, *, is_server: bool | None = None
    ) -> PositionBounds:
        if self.cache is None:
            return calculate_valid_bounds(slot, lineup, is_server=is_server, epsilon=self.epsilon)
        return calculate_bounds_fast(
            slot, lineup, is_server=is_server, epsilon=self.epsilon, cache=self.cache
        )

    def all_bounds(self, lineup: Lineup) -> dict[int, PositionBounds]:
        return calculate_all_bounds(lineup, epsilon=self.epsilon, cache=self.cache)

    def is_position_valid(
        self,
        slot: int,
        position: tuple[float, float],
        lineup: Lineup,
        *,
        is_server: bool | None = None,
    ) -> bool:
        x, y = position
        return self.bounds(slot, lineup, is_server=is_server).contains(x, y)

    def snap(
        self,
        slot: int,
        position: tuple[float, float],
        lineup: Lineup,
        *,
        is_server: bool | None = None,
    ) -> Point:
        """Return ``position`` if it is valid, else the nearest point inside the bounds."""
        x, y = position
        bounds = self.bounds(slot, lineup, is_server=is_server)
        if bounds.contains(x, y):
            return Point(x, y)
        return bounds.clamp(x, y)

    def is_position_legal(
        self, slot: int, position: tuple[float, float], lineup: Iterable[PlayerState]
    ) -> bool:
        return is_position_legal(slot, position, lineup, epsilon=self.epsilon)

    def suggest_fix(self, violation: Violation, lineup: Iterable[PlayerState]) -> str | None:
        return suggest_fix(violation, lineup, epsilon=self.epsilon)
