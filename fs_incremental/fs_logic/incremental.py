"""Incremental relevance / redundancy feature selection.

The search grows the selected set tier by tier. Tier ``i`` scores every
combination of ``i`` features not already found relevant in an earlier tier;
the members of combinations scoring strictly above the threshold form that
tier's relevant set. With redundancy removal enabled, combinations of
``i + 1`` relevant features are then probed and a member whose marginal
contribution is strictly below the threshold is dropped.
"""

from __future__ import annotations

import logging
import operator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import FrozenSet, Hashable, Iterable, Iterator, List, Optional, Set, Tuple

import pandas as pd

from fs_incremental.combinatorics import canonical_order, count_subsets, powerset
from fs_incremental.scoring.memoized import CacheStats, MemoizedScorer, Scorer, default_capacity

logger = logging.getLogger(__name__)

TIER_COLUMNS = ["tier", "candidates", "subsets_scored", "relevant", "redundant", "added"]


@dataclass
class SelectionResult:
    """Outputs from one incremental selection run."""

    selected: FrozenSet
    tiers: pd.DataFrame
    cache_stats: CacheStats


def _validate_max_size(max_size: int) -> int:
    if isinstance(max_size, bool):
        raise TypeError("max_size must be an integer, got bool.")
    try:
        size = operator.index(max_size)
    except TypeError as exc:
        raise TypeError(f"max_size must be an integer, got {type(max_size).__name__}.") from exc
    if size < 1:
        raise ValueError(f"max_size must be at least 1, got {size}.")
    return size


def _relevant_members(
    subsets: Iterator[FrozenSet],
    cache: MemoizedScorer,
    threshold: float,
    executor: Optional[ThreadPoolExecutor],
) -> Tuple[Set, int]:
    """Members of every subset scoring above ``threshold``, plus the number of subsets scored."""

    if executor is None:
        scored = ((fs, cache(fs)) for fs in subsets)
    else:
        batch = list(subsets)
        scored = zip(batch, executor.map(cache, batch))
    relevant: Set = set()
    n_scored = 0
    for fs, score in scored:
        n_scored += 1
        if score > threshold:
            logger.debug("Relevant subset %s (score %.6g)", list(canonical_order(fs)), score)
            relevant.update(fs)
    return relevant, n_scored


def _redundant_members(relevant: Set, size: int, cache: MemoizedScorer, threshold: float) -> Set:
    redundant: Set = set()
    for fs in powerset(relevant, size):
        if not redundant.isdisjoint(fs):
            continue
        full_score = cache(fs)
        for feature in canonical_order(fs):
            marginal = full_score - cache(fs - {feature})
            if marginal < threshold:
                logger.debug(
                    "Feature %r redundant within %s (marginal %.6g)",
                    feature,
                    list(canonical_order(fs)),
                    marginal,
                )
                redundant.add(feature)
                break
    return redundant


def run_incremental_selection(
    features: Iterable[Hashable],
    scorer: Scorer,
    threshold: float,
    max_size: int = 1,
    remove_redundant: bool = False,
    n_jobs: int = 1,
    cache_capacity: Optional[int] = None,
) -> SelectionResult:
    """Run the tiered search and report what each tier contributed."""

    max_size = _validate_max_size(max_size)
    if n_jobs < 1:
        raise ValueError(f"n_jobs must be at least 1, got {n_jobs}.")

    universe = frozenset(features)
    capacity = cache_capacity if cache_capacity is not None else default_capacity(len(universe), max_size)
    cache = MemoizedScorer(scorer, capacity=capacity)

    seen_relevant: Set = set()
    result: Set = set()
    rows: List[Tuple] = []

    executor = ThreadPoolExecutor(max_workers=n_jobs) if n_jobs > 1 else None
    try:
        for tier in range(1, max_size + 1):
            candidates = universe - seen_relevant
            relevant, n_subsets = _relevant_members(powerset(candidates, tier), cache, threshold, executor)

            if remove_redundant:
                redundant = _redundant_members(relevant, tier + 1, cache, threshold)
            else:
                redundant = set()
            added = relevant - redundant
            result |= added
            seen_relevant |= relevant

            logger.info(
                "Tier %d: %d candidates, %d subsets, %d relevant, %d redundant",
                tier,
                len(candidates),
                n_subsets,
                len(relevant),
                len(redundant),
            )
            if remove_redundant:
                logger.debug(
                    "Tier %d redundancy probe covers %d subsets",
                    tier,
                    count_subsets(len(relevant), tier + 1),
                )
            rows.append(
                (
                    tier,
                    len(candidates),
                    n_subsets,
                    list(canonical_order(relevant)),
                    list(canonical_order(redundant)),
                    list(canonical_order(added)),
                )
            )
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    return SelectionResult(
        selected=frozenset(result),
        tiers=pd.DataFrame(rows, columns=TIER_COLUMNS),
        cache_stats=cache.stats(),
    )


def select(
    features: Iterable[Hashable],
    scorer: Scorer,
    threshold: float,
    max_size: int = 1,
    remove_redundant: bool = False,
) -> FrozenSet:
    """Return the relevant, optionally non-redundant, subset of ``features``.

    ``scorer`` must be deterministic and accept any subset of ``features``,
    including the empty set when ``remove_redundant`` is set. Scorer
    exceptions propagate unchanged. ``max_size`` below 1 raises
    ``ValueError``.
    """

    return run_incremental_selection(
        features,
        scorer,
        threshold,
        max_size=max_size,
        remove_redundant=remove_redundant,
    ).selected
