"""Stratified TRAIN/VAL/TEST splitting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import pandas as pd
from sklearn.model_selection import train_test_split


@dataclass(frozen=True)
class RandomSplitConfig:
    test_size: float = 0.2
    val_size: float = 0.2
    random_state: int = 42

    @classmethod
    def from_dict(cls, cfg: Dict) -> "RandomSplitConfig":
        return cls(
            test_size=cfg.get("test_size", cls.test_size),
            val_size=cfg.get("val_size", cls.val_size),
            random_state=cfg.get("random_state", cls.random_state),
        )


@dataclass
class DatasetSplits:
    """TRAIN feeds subset models, VAL scores them, TEST is held out for the final report."""

    X_train: pd.DataFrame
    y_train: pd.Series
    X_val: pd.DataFrame
    y_val: pd.Series
    X_test: pd.DataFrame
    y_test: pd.Series


def create_random_splits(X: pd.DataFrame, y: pd.Series, config: RandomSplitConfig) -> DatasetSplits:
    """Split while preserving the class ratio in every part."""

    if X.empty:
        raise ValueError("Cannot create splits from an empty dataset.")
    if not 0 < config.test_size < 1 or not 0 < config.val_size < 1:
        raise ValueError("test_size and val_size must lie strictly between 0 and 1.")
    if config.test_size + config.val_size >= 1:
        raise ValueError("test_size + val_size must leave rows for training.")

    X_temp, X_test, y_temp, y_test = train_test_split(
        X,
        y,
        test_size=config.test_size,
        stratify=y,
        random_state=config.random_state,
    )
    val_fraction = config.val_size / (1.0 - config.test_size)
    X_train, X_val, y_train, y_val = train_test_split(
        X_temp,
        y_temp,
        test_size=val_fraction,
        stratify=y_temp,
        random_state=config.random_state,
    )

    return DatasetSplits(
        X_train=X_train.reset_index(drop=True),
        y_train=y_train.reset_index(drop=True),
        X_val=X_val.reset_index(drop=True),
        y_val=y_val.reset_index(drop=True),
        X_test=X_test.reset_index(drop=True),
        y_test=y_test.reset_index(drop=True),
    )
