"""
Timeline Cache for progress queries.

Memoizes ProgressionService's history, breakthrough and PR timeline
queries. Each of those scans every set of every completed session, so the
UI path reads through this cache.

Invalidation is explicit: the application calls invalidate() after any
write to the workout log (session created, ended, edited or deleted).
There is no subscription to the log. Entries otherwise expire after the
TTL (300 seconds by default).

Not thread-safe: access must stay on a single coordination thread.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from application.ports import Clock
from backend.core.progression_service import ProgressionService
from domain.exercise_names import normalize_exercise_name
from domain.models import Breakthrough, HistoryPoint, PersonalRecordSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

CacheKey = Tuple[str, ...]

HISTORY = "history"
BREAKTHROUGHS = "breakthroughs"
TIMELINE = "timeline"


@dataclass
class CacheEntry:
    """Cache entry with TTL support."""

    value: Any
    computed_at: datetime


class TimelineCache:
    """
    TTL cache in front of ProgressionService.

    Per-exercise history and breakthroughs are cached independently, keyed
    by normalized exercise name. The PR timeline is a single shared slot.
    No size limit: keys are bounded by the distinct exercises a user logs.
    """

    DEFAULT_TTL_SECONDS = 300

    def __init__(
        self,
        progression: ProgressionService,
        clock: Clock,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
    ):
        """
        Initialize the cache.

        Args:
            progression: Service that computes uncached results
            clock: Time source for expiry checks
            ttl_seconds: Validity window for entries (default: 300)
        """
        self._progression = progression
        self._clock = clock
        self._ttl = ttl_seconds
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    # =========================================================================
    # Public API
    # =========================================================================

    def history_for(
        self, exercise_name: str, *, force_refresh: bool = False
    ) -> List[HistoryPoint]:
        """Cached ProgressionService.history_for()."""
        key = normalize_exercise_name(exercise_name)
        return self.get(
            (HISTORY, key),
            lambda: self._progression.history_for(key),
            force_refresh=force_refresh,
        )

    def breakthroughs_for(
        self, exercise_name: str, *, force_refresh: bool = False
    ) -> List[Breakthrough]:
        """
        Cached ProgressionService.breakthroughs_for(), built from cached history.

        The entry carries the computed_at of the history it was derived
        from, so it never outlives that history.
        """
        key = normalize_exercise_name(exercise_name)
        cache_key = (BREAKTHROUGHS, key)

        if not force_refresh:
            entry = self._get_valid_entry(cache_key)
            if entry is not None:
                self._hits += 1
                return entry.value

        self._misses += 1
        history = self.history_for(key, force_refresh=force_refresh)
        history_entry = self._entries[(HISTORY, key)]
        value = self._progression.breakthroughs_for(key, history=history)
        self._entries[cache_key] = CacheEntry(value=value, computed_at=history_entry.computed_at)
        return value

    def pr_timeline(self, *, force_refresh: bool = False) -> List[PersonalRecordSummary]:
        """Cached ProgressionService.pr_timeline()."""
        return self.get(
            (TIMELINE,),
            self._progression.pr_timeline,
            force_refresh=force_refresh,
        )

    def invalidate(self) -> None:
        """Drop every entry. Call after any write to the workout log."""
        count = len(self._entries)
        self._entries.clear()
        logger.debug(f"Timeline cache invalidated ({count} entries dropped)")

    def stats(self) -> Dict[str, int]:
        """Entry count and hit/miss counters."""
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
        }

    # =========================================================================
    # Core lookup
    # =========================================================================

    def get(
        self,
        key: CacheKey,
        compute: Callable[[], T],
        *,
        force_refresh: bool = False,
    ) -> T:
        """
        Return the cached value for key, computing and storing it if needed.

        Exceptions from compute propagate and nothing is stored.

        Args:
            key: Cache key
            compute: Zero-argument function producing the value
            force_refresh: Recompute even if a valid entry exists

        Returns:
            Cached or freshly computed value
        """
        if not force_refresh:
            entry = self._get_valid_entry(key)
            if entry is not None:
                self._hits += 1
                return entry.value

        self._misses += 1
        value = compute()
        self._entries[key] = CacheEntry(value=value, computed_at=self._clock.now())
        return value

    def _get_valid_entry(self, key: CacheKey) -> Optional[CacheEntry]:
        """Get an entry if present and unexpired; expired entries are removed."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = (self._clock.now() - entry.computed_at).total_seconds()
        if age >= self._ttl:
            del self._entries[key]
            return None

        return entry
