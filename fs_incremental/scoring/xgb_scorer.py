"""XGBoost-backed scorer for feature subsets."""

from __future__ import annotations

import logging
import os
import threading
from typing import Dict, FrozenSet, Optional

import numpy as np
import pandas as pd
import xgboost as xgb

from fs_incremental.combinatorics import canonical_order

from .metrics import pr_auc_lift

logger = logging.getLogger(__name__)


def _default_n_jobs() -> int:
    return max(1, (os.cpu_count() or 2) - 1)


def train_xgb_classifier(
    X_train: pd.DataFrame,
    y_train: pd.Series,
    X_val: Optional[pd.DataFrame] = None,
    y_val: Optional[pd.Series] = None,
    params: Optional[Dict] = None,
) -> xgb.XGBClassifier:
    """Train a binary XGBoost classifier with the framework defaults."""

    params = dict(params or {})
    params.setdefault("objective", "binary:logistic")
    params.setdefault("eval_metric", "aucpr")
    params.setdefault("tree_method", "hist")
    params.setdefault("n_jobs", _default_n_jobs())
    params.setdefault("random_state", 42)
    if params.get("early_stopping_rounds") is None or X_val is None or y_val is None:
        params.pop("early_stopping_rounds", None)

    model = xgb.XGBClassifier(**params)
    fit_kwargs = {}
    if X_val is not None and y_val is not None:
        fit_kwargs["eval_set"] = [(X_val, y_val)]
    model.fit(X_train, y_train, verbose=False, **fit_kwargs)
    return model


def predict_proba(model: xgb.XGBClassifier, X: pd.DataFrame) -> np.ndarray:
    """Positive-class probabilities."""

    probs = model.predict_proba(X)
    if probs.ndim == 2 and probs.shape[1] == 2:
        return probs[:, 1]
    return probs.ravel()


class XGBSubsetScorer:
    """Score a feature subset by the validation PR-AUC lift of a model trained on it.

    The lift is measured against the positive rate of the validation target,
    so the empty subset scores exactly 0.0 and a threshold of 0.0 means
    "better than guessing". Training is seeded, which keeps the scorer
    deterministic as memoization requires.
    """

    def __init__(
        self,
        X_train: pd.DataFrame,
        y_train: pd.Series,
        X_val: pd.DataFrame,
        y_val: pd.Series,
        params: Optional[Dict] = None,
    ) -> None:
        if X_train.empty or X_val.empty:
            raise ValueError("Scorer needs non-empty train and validation matrices.")
        if y_train.nunique() != 2:
            raise ValueError("XGBSubsetScorer requires a binary target in the training split.")
        self.X_train = X_train
        self.y_train = y_train
        self.X_val = X_val
        self.y_val = y_val
        self.params = dict(params or {})
        self.calls = 0
        self._calls_lock = threading.Lock()

    def __call__(self, features: FrozenSet) -> float:
        with self._calls_lock:
            self.calls += 1
        if not features:
            return 0.0
        missing = [feat for feat in features if feat not in self.X_train.columns]
        if missing:
            raise KeyError(f"Unknown feature columns: {sorted(missing)}")
        columns = list(canonical_order(features))
        model = train_xgb_classifier(
            self.X_train[columns],
            self.y_train,
            params=self.params,
        )
        score = pr_auc_lift(self.y_val, predict_proba(model, self.X_val[columns]))
        logger.debug("Scored %s -> %.6f", columns, score)
        return score
