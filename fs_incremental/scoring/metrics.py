"""Classification metrics used by the subset scorer and final evaluation."""

from __future__ import annotations

from typing import Dict

import numpy as np
from sklearn.metrics import average_precision_score, roc_auc_score


def pr_auc_score(y_true: np.ndarray, y_score: np.ndarray) -> float:
    return float(average_precision_score(y_true, y_score))


def pr_auc_lift(y_true: np.ndarray, y_score: np.ndarray) -> float:
    """PR-AUC above the positive rate, i.e. above an uninformed predictor."""

    y_true = np.asarray(y_true)
    return pr_auc_score(y_true, y_score) - float(y_true.mean())


def roc_auc_score_safe(y_true: np.ndarray, y_score: np.ndarray) -> float:
    """ROC-AUC, or NaN when only one class is present."""

    y_true = np.asarray(y_true)
    if len(np.unique(y_true)) < 2:
        return float("nan")
    return float(roc_auc_score(y_true, y_score))


def compute_classification_metrics(y_true: np.ndarray, y_score: np.ndarray) -> Dict[str, float]:
    return {
        "pr_auc": pr_auc_score(y_true, y_score),
        "roc_auc": roc_auc_score_safe(y_true, y_score),
    }
