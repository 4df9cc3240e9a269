"""
In-memory cache for validation results and drag bounds.

Interactive hosts re-validate on every drag event, usually with a lineup
that has not changed since the previous frame. :class:`LineupCache` keys
results by a SHA-256 fingerprint of the lineup's content, so a changed
lineup can never hit a stale entry, and the order of players in the input
does not matter.

The cache is an ordinary object owned by the caller; nothing in the
package keeps one globally.

Example::

    cache = LineupCache(max_entries=500)

    result = cache.get_validation(lineup, lambda: check_overlap(lineup))
    bounds = calculate_all_bounds(lineup, cache=cache)

    print(cache.stats.hit_rate)
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections import OrderedDict
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core import tolerance
from ..core.neighbors import (
    get_linear_left_neighbor,
    get_linear_right_neighbor,
    get_row_counterpart,
)
from ..core.types import PlayerState, is_valid_slot
from .constraints import Lineup, PositionBounds
from .lineup import as_player_list, index_lineup
from .models import OverlapResult

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000


def _player_record(player: object) -> dict[str, Any]:
    if not isinstance(player, PlayerState):
        return {"entry": repr(player)}
    return {
        "id": player.id,
        "display_name": player.display_name,
        "role": getattr(player.role, "value", player.role),
        "slot": player.slot,
        "x": player.x,
        "y": player.y,
        "is_server": player.is_server,
    }


def _digest(data: Any) -> str:
    payload = json.dumps(data, sort_keys=True, default=repr)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def lineup_fingerprint(lineup: Iterable[PlayerState]) -> str:
    """SHA-256 over every field of every player, independent of input order.

    Two lineups share a fingerprint only if they contain the same players
    with the same values, so any change (including a renamed player, whose
    name appears in violation messages) produces a new key.

    Malformed input is keyed by its repr, so it can be cached like any
    other lineup.
    """
    players = as_player_list(lineup)
    if players is None:
        return _digest({"lineup": repr(lineup)})
    records = sorted(json.dumps(_player_record(p), sort_keys=True, default=repr) for p in players)
    return _digest(records)


def bounds_fingerprint(
    slot: int,
    by_slot: Mapping[int, PlayerState],
    *,
    is_server: bool | None,
    epsilon: float,
) -> str:
    """SHA-256 over the inputs that determine one slot's drag bounds.

    Only the slot itself, its linear neighbours and its counterpart are
    included; moving anyone else leaves the key unchanged.
    """
    relevant = [slot]
    if is_valid_slot(slot):
        relevant.extend(
            s
            for s in (
                get_linear_left_neighbor(slot),
                get_linear_right_neighbor(slot),
                get_row_counterpart(slot),
            )
            if s is not None
        )

    entries = {}
    for s in relevant:
        player = by_slot.get(s)
        entries[str(s)] = None if player is None else [player.x, player.y, player.is_server]

    return _digest(
        {"slot": slot, "is_server": is_server, "epsilon": epsilon, "players": entries}
    )


@dataclass
class CacheStats:
    """Counters for a :class:`LineupCache`."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0
    max_entries: int = DEFAULT_MAX_ENTRIES

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from the cache."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "size": self.size,
            "max_entries": self.max_entries,
            "hit_rate": self.hit_rate,
        }


class LineupCache:
    """
    LRU cache of validation results and drag bounds.

    Entries never expire on their own; the least recently used entry is
    evicted once ``max_entries`` is reached.

    Args:
        max_entries: Upper bound on stored results (must be positive)

    Raises:
        ValueError: If ``max_entries`` is not positive
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @classmethod
    def from_config(cls, config: Config) -> LineupCache:
        """Create a cache sized by ``[cache] max_entries``."""
        return cls(max_entries=config.cache.max_entries)

    def _lookup(self, key: str, compute: Callable[[], Any]) -> Any:
        if key in self._entries:
            self._entries.move_to_end(key)
            self._hits += 1
            return self._entries[key]

        self._misses += 1
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug(f"Evicted cache entry {evicted[:24]}")
        return value

    def get_validation(
        self,
        lineup: Iterable[PlayerState],
        compute: Callable[[], OverlapResult],
        *,
        epsilon: float | None = None,
    ) -> OverlapResult:
        """Return the cached result for ``lineup`` or compute and store it.

        Args:
            lineup: Lineup being validated
            compute: Called on a miss to produce the result
            epsilon: Tolerance the result was computed with; part of the key
        """
        eps = tolerance.get_epsilon() if epsilon is None else epsilon
        key = f"validation:{eps!r}:{lineup_fingerprint(lineup)}"
        return self._lookup(key, compute)

    def get_bounds(
        self,
        slot: int,
        lineup: Lineup,
        compute: Callable[[], PositionBounds],
        *,
        is_server: bool | None = None,
        epsilon: float | None = None,
    ) -> PositionBounds:
        """Return cached drag bounds for ``slot`` or compute and store them."""
        eps = tolerance.get_epsilon() if epsilon is None else epsilon
        by_slot = index_lineup(lineup)
        key = "bounds:" + bounds_fingerprint(slot, by_slot, is_server=is_server, epsilon=eps)
        return self._lookup(key, compute)

    def clear(self) -> int:
        """Drop every entry and reset the counters.

        Returns:
            Number of entries removed
        """
        count = len(self._entries)
        self._entries.clear()
        self._hits = self._misses = self._evictions = 0
        return count

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def stats(self) -> CacheStats:
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            size=len(self._entries),
            max_entries=self.max_entries,
        )
