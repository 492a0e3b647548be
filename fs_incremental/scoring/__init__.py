"""Subset scorers and the memoization layer around them."""

from .memoized import CacheStats, MemoizedScorer, Scorer, default_capacity
from .metrics import compute_classification_metrics, pr_auc_lift, pr_auc_score, roc_auc_score_safe
from .xgb_scorer import XGBSubsetScorer, predict_proba, train_xgb_classifier

__all__ = [
    "CacheStats",
    "MemoizedScorer",
    "Scorer",
    "default_capacity",
    "compute_classification_metrics",
    "pr_auc_lift",
    "pr_auc_score",
    "roc_auc_score_safe",
    "XGBSubsetScorer",
    "predict_proba",
    "train_xgb_classifier",
]
