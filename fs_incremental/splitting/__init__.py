"""Dataset splitting strategies."""

from .random_splits import DatasetSplits, RandomSplitConfig, create_random_splits

__all__ = ["DatasetSplits", "RandomSplitConfig", "create_random_splits"]
