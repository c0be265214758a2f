"""In-process rewards cache with TTL, LRU eviction and single-flight computation"""

import logging
import threading
import time
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, Dict, Optional

from rewards_service.domain.engine import RewardsEngine
from rewards_service.domain.models import RewardsResult
from rewards_service.infrastructure.observability.metrics import (
    computation_duration_histogram,
    record_cache_event,
)
from rewards_service.utils.date_utils import truncate_to_day

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardsCacheKey:
    """Cache key: date bounds are kept at day granularity"""

    customer_id: int
    start_day: Optional[date]
    end_day: Optional[date]
    include_transactions: bool


def make_cache_key(
    customer_id: int,
    start_date: Optional[date],
    end_date: Optional[date],
    include_transactions: bool,
) -> RewardsCacheKey:
    """Derive the cache key; times within the same day map to the same key"""
    return RewardsCacheKey(
        customer_id=customer_id,
        start_day=truncate_to_day(start_date),
        end_day=truncate_to_day(end_date),
        include_transactions=bool(include_transactions),
    )


@dataclass
class CacheEntry:
    """Stored result with its insertion time (clock seconds)"""

    value: RewardsResult
    inserted_at: float


@dataclass
class CacheStats:
    """Cache statistics"""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0  # callers that waited on another caller's computation
    evictions: int = 0
    expirations: int = 0
    rejections: int = 0
    invalidations: int = 0

    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class RewardsCache:
    """
    Memoizes rewards computations per key.

    Entry lifecycle: ABSENT -> PENDING (computing) -> PRESENT -> EXPIRED.

    Policy:
    - PRESENT entries older than ``ttl_seconds`` are dropped on read
    - Least-recently-used entry is evicted once ``max_size`` is exceeded
    - ``None`` results and results with negative totals are never stored
    - Concurrent callers for a PENDING key share the leader's result
      (or its exception); exceptions are never cached
    - ``invalidate_all`` does not cancel PENDING computations
    """

    def __init__(
        self,
        max_size: int = 50,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
        initial_capacity: int = 10,
    ):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if initial_capacity <= 0:
            raise ValueError(f"initial_capacity must be positive, got {initial_capacity}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self.max_size = max_size
        # Advisory only; OrderedDict has no pre-sizing
        self.initial_capacity = min(initial_capacity, max_size)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[RewardsCacheKey, CacheEntry]" = OrderedDict()
        self._in_flight: Dict[RewardsCacheKey, Future] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: RewardsCacheKey) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not self._is_expired(entry)

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return replace(self._stats)

    def get_or_compute(
        self,
        key: RewardsCacheKey,
        compute_fn: Callable[[], Optional[RewardsResult]],
    ) -> Optional[RewardsResult]:
        """
        Return the cached result for ``key`` or compute it exactly once.

        The first caller for a missing key runs ``compute_fn`` outside the
        lock; callers arriving while it runs block until it resolves and get
        the same value or the same exception.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if self._is_expired(entry):
                    del self._entries[key]
                    self._stats.expirations += 1
                    record_cache_event("expiration")
                else:
                    self._entries.move_to_end(key)
                    self._stats.hits += 1
                    record_cache_event("hit")
                    return entry.value

            future = self._in_flight.get(key)
            is_leader = future is None
            if is_leader:
                future = Future()
                self._in_flight[key] = future
                self._stats.misses += 1
                record_cache_event("miss")
            else:
                self._stats.coalesced += 1

        if not is_leader:
            logger.debug("Waiting on in-flight computation for %s", key)
            return future.result()

        try:
            value = compute_fn()
        except BaseException as e:
            with self._lock:
                self._in_flight.pop(key, None)
            future.set_exception(e)
            raise

        with self._lock:
            self._in_flight.pop(key, None)
            if self._is_storable(value):
                self._store(key, value)
            else:
                self._stats.rejections += 1
                record_cache_event("rejection")
                logger.warning("Not caching faulty rewards result for %s", key)

        future.set_result(value)
        return value

    def invalidate_all(self) -> int:
        """Drop every entry regardless of age; returns the number dropped"""
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._stats.invalidations += 1
        record_cache_event("invalidation")
        return dropped

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.inserted_at > self.ttl_seconds

    @staticmethod
    def _is_storable(value: Optional[RewardsResult]) -> bool:
        return value is not None and value.total_points >= 0

    def _store(self, key: RewardsCacheKey, value: RewardsResult) -> None:
        # Caller holds the lock
        if key in self._entries:
            self._entries.move_to_end(key)
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

        while len(self._entries) > self.max_size:
            evicted_key, _ = self._entries.popitem(last=False)
            self._stats.evictions += 1
            record_cache_event("eviction")
            logger.debug("Evicted least recently used entry %s", evicted_key)


class CachedRewardsEngine:
    """Cache-aside wrapper around RewardsEngine"""

    def __init__(self, engine: RewardsEngine, cache: RewardsCache):
        self.engine = engine
        self.cache = cache

    def compute_rewards(
        self,
        customer_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        include_transactions: bool = False,
    ) -> Optional[RewardsResult]:
        key = make_cache_key(customer_id, start_date, end_date, include_transactions)

        def compute() -> RewardsResult:
            with computation_duration_histogram.time():
                return self.engine.compute_rewards(customer_id, start_date, end_date, include_transactions)

        return self.cache.get_or_compute(key, compute)
