"""Lazy enumeration of fixed-size feature subsets."""

from __future__ import annotations

from itertools import combinations
from math import comb
from typing import FrozenSet, Hashable, Iterable, Iterator, Tuple


def canonical_order(features: Iterable[Hashable]) -> Tuple[Hashable, ...]:
    """Return the features as a sorted, duplicate-free tuple."""

    return tuple(sorted(set(features)))


def powerset(features: Iterable[Hashable], k: int, exact: bool = True) -> Iterator[FrozenSet]:
    """Yield every subset of ``features`` of size ``k``.

    With ``exact=False`` every subset of size 1 through ``k`` is produced,
    smaller sizes first. Subsets come out in lexicographic order of the
    sorted members, so two calls over equal sets always agree on ordering.
    ``k = 0`` yields the empty set once (exact mode only) and ``k`` larger
    than the number of features yields nothing.
    """

    ordered = canonical_order(features)
    sizes = [k] if exact else range(1, k + 1)
    for size in sizes:
        if size < 0 or size > len(ordered):
            continue
        for members in combinations(ordered, size):
            yield frozenset(members)


def count_subsets(n_features: int, k: int, exact: bool = True) -> int:
    """Number of subsets ``powerset`` produces for ``n_features`` items."""

    if exact:
        return comb(n_features, k) if 0 <= k <= n_features else 0
    return sum(comb(n_features, size) for size in range(1, min(k, n_features) + 1))
