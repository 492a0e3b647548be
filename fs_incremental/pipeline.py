"""End-to-end experiment runner."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import yaml

from fs_incremental.data import load_dataset
from fs_incremental.fs_logic import SelectionResult, run_incremental_selection
from fs_incremental.scoring import (
    XGBSubsetScorer,
    compute_classification_metrics,
    predict_proba,
    train_xgb_classifier,
)
from fs_incremental.splitting import DatasetSplits, RandomSplitConfig, create_random_splits
from fs_incremental.types import ExperimentResult, ModelResult

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config" / "default_config.yaml"
SELECTION_KEYS = {"threshold", "max_size", "remove_redundant", "n_jobs", "cache_capacity"}


def _deep_update(base: Dict, updates: Dict) -> Dict:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[Path]) -> Dict:
    """Read the packaged defaults and merge the user file on top."""

    with DEFAULT_CONFIG_PATH.open("r", encoding="utf-8") as fh:
        config = yaml.safe_load(fh)
    if path:
        with Path(path).open("r", encoding="utf-8") as fh:
            user_config = yaml.safe_load(fh)
        config = _deep_update(config, user_config or {})
    return config


def _selection_kwargs(config: Dict) -> Dict:
    selection_cfg = dict(config.get("selection", {}))
    unknown = set(selection_cfg) - SELECTION_KEYS
    if unknown:
        raise ValueError(f"Unknown selection options: {sorted(unknown)}")
    if "threshold" not in selection_cfg:
        raise ValueError("Config is missing 'selection.threshold'.")
    return selection_cfg


def _evaluate_model(model, X_dict: Dict[str, pd.DataFrame], y_dict: Dict[str, pd.Series]) -> Dict[str, Dict[str, float]]:
    metrics = {}
    for split in ["train", "val", "test"]:
        metrics[split] = compute_classification_metrics(y_dict[split], predict_proba(model, X_dict[split]))
    return metrics


def _train_and_eval_models(config: Dict, splits: DatasetSplits, kept_features: List[str]) -> List[ModelResult]:
    params = dict(config.get("final_model", {}))
    feature_sets = [("all_features", list(splits.X_train.columns))]
    if kept_features:
        feature_sets.append(("selected_features", kept_features))
    else:
        logger.warning("Selection kept no features; only the all-features model is evaluated.")

    y_splits = {"train": splits.y_train, "val": splits.y_val, "test": splits.y_test}
    results = []
    for name, features in feature_sets:
        X_splits = {
            "train": splits.X_train[features],
            "val": splits.X_val[features],
            "test": splits.X_test[features],
        }
        model = train_xgb_classifier(
            X_splits["train"],
            splits.y_train,
            X_splits["val"],
            splits.y_val,
            params=params,
        )
        metrics = _evaluate_model(model, X_splits, y_splits)
        logger.info("%s: test PR-AUC %.4f with %d features", name, metrics["test"]["pr_auc"], len(features))
        results.append(ModelResult(name=name, feature_names=features, metrics=metrics))
    return results


def _persist_results(
    dataset: str,
    config: Dict,
    selection: SelectionResult,
    kept: List[str],
    dropped: List[str],
    models: List[ModelResult],
    results_root: Path,
) -> Path:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    run_dir = results_root / dataset / timestamp
    run_dir.mkdir(parents=True, exist_ok=False)

    with (run_dir / "config.yaml").open("w", encoding="utf-8") as fh:
        yaml.safe_dump(config, fh)

    selection.tiers.to_csv(run_dir / "tiers.csv", index=False)

    with (run_dir / "features.json").open("w", encoding="utf-8") as fh:
        json.dump({"kept_features": kept, "dropped_features": dropped}, fh, indent=2)

    stats = selection.cache_stats
    metrics_payload = {
        "cache": {
            "hits": stats.hits,
            "misses": stats.misses,
            "evictions": stats.evictions,
            "capacity": stats.capacity,
        },
        "models": [
            {"model": m.name, "feature_count": len(m.feature_names), "metrics": m.metrics}
            for m in models
        ],
    }
    with (run_dir / "metrics.json").open("w", encoding="utf-8") as fh:
        json.dump(metrics_payload, fh, indent=2)

    return run_dir


def run_experiment(config_path: Optional[Path], results_root: Path = Path("results")) -> ExperimentResult:
    config = load_config(config_path)
    dataset_name = config["dataset"]
    dataset_path = config.get("dataset_path")
    X, y, metadata = load_dataset(
        dataset_name,
        Path(dataset_path) if dataset_path else None,
        config.get("dataset_options"),
    )
    if X.empty:
        raise ValueError("Feature matrix is empty; cannot run feature selection.")
    logger.info("Loaded %s: %s rows, %d features", dataset_name, metadata.get("total_rows"), X.shape[1])

    splits = create_random_splits(X, y, RandomSplitConfig.from_dict(config.get("splits", {})))
    scorer = XGBSubsetScorer(
        splits.X_train,
        splits.y_train,
        splits.X_val,
        splits.y_val,
        params=config.get("xgb_params"),
    )
    selection = run_incremental_selection(X.columns, scorer, **_selection_kwargs(config))

    kept = [col for col in X.columns if col in selection.selected]
    dropped = [col for col in X.columns if col not in selection.selected]
    logger.info("Kept %d of %d features after %d scorer calls", len(kept), X.shape[1], scorer.calls)

    models = _train_and_eval_models(config, splits, kept)
    run_dir = _persist_results(dataset_name, config, selection, kept, dropped, models, results_root)

    return ExperimentResult(
        dataset=dataset_name,
        run_dir=run_dir,
        selection=selection,
        kept_features=kept,
        dropped_features=dropped,
        models=models,
    )
