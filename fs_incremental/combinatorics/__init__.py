"""Subset enumeration helpers."""

from .powerset import canonical_order, count_subsets, powerset

__all__ = ["canonical_order", "count_subsets", "powerset"]
