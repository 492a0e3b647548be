"""Bounded LRU memoization for feature-subset scorers."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Hashable, Iterable, Optional

logger = logging.getLogger(__name__)

Scorer = Callable[[FrozenSet], float]


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the cache counters."""

    hits: int
    misses: int
    evictions: int
    size: int
    capacity: Optional[int]


def default_capacity(n_features: int, max_size: int) -> int:
    """Upper bound on the distinct subsets one selection run can query."""

    return max(1, n_features ** max_size)


class MemoizedScorer:
    """Score feature subsets once and keep the most recently used results.

    Keys are ``frozenset`` copies of the queried subsets, so insertion order
    never matters. Concurrent requests for a subset that is already being
    scored wait on the in-flight computation instead of starting another one.
    A scorer exception reaches every waiter and leaves nothing in the cache.
    """

    def __init__(self, scorer: Scorer, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}.")
        self.scorer = scorer
        self.capacity = capacity
        self._entries: "OrderedDict[FrozenSet, float]" = OrderedDict()
        self._pending: Dict[FrozenSet, Future] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def evaluate(self, features: Iterable[Hashable]) -> float:
        key = frozenset(features)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                return self._entries[key]
            future = self._pending.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._pending[key] = future
                self._misses += 1
            else:
                self._hits += 1

        if not owner:
            return future.result()

        try:
            score = self.scorer(key)
        except BaseException as exc:
            with self._lock:
                del self._pending[key]
            future.set_exception(exc)
            raise

        with self._lock:
            del self._pending[key]
            self._entries[key] = score
            while self.capacity is not None and len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted cached score for %s", sorted(evicted))
        future.set_result(score)
        return score

    __call__ = evaluate

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                size=len(self._entries),
                capacity=self.capacity,
            )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, features: Iterable[Hashable]) -> bool:
        with self._lock:
            return frozenset(features) in self._entries
