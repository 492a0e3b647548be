"""End-to-end tests for config loading and the experiment runner."""

import json

import numpy as np
import pandas as pd
import pytest
import yaml

from fs_incremental.cli.main import main
from fs_incremental.data import list_datasets, load_dataset
from fs_incremental.pipeline import _deep_update, load_config, run_experiment
from fs_incremental.splitting import RandomSplitConfig, create_random_splits

FAST_CONFIG = {
    "dataset": "synthetic",
    "dataset_options": {"n_samples": 300, "n_informative": 2, "n_redundant": 1, "n_noise": 2},
    "selection": {"threshold": 0.02, "max_size": 2, "remove_redundant": True},
    "xgb_params": {"n_estimators": 20, "max_depth": 2},
    "final_model": {"n_estimators": 30, "early_stopping_rounds": 10},
}


def _write_config(tmp_path, config):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_deep_update_merges_nested_sections():
    base = {"selection": {"threshold": 0.1, "max_size": 1}, "dataset": "synthetic"}
    merged = _deep_update(base, {"selection": {"max_size": 3}})
    assert merged == {"selection": {"threshold": 0.1, "max_size": 3}, "dataset": "synthetic"}


def test_load_config_defaults_and_overrides(tmp_path):
    defaults = load_config(None)
    assert defaults["dataset"] == "synthetic"
    assert defaults["selection"]["max_size"] >= 1

    path = _write_config(tmp_path, {"selection": {"threshold": 0.3}})
    config = load_config(path)
    assert config["selection"]["threshold"] == 0.3
    assert config["selection"]["max_size"] == defaults["selection"]["max_size"]


def test_registry_lists_builtin_loaders():
    assert {"csv", "synthetic"} <= set(list_datasets())
    with pytest.raises(KeyError):
        load_dataset("does_not_exist")


def test_csv_loader_binarizes_target_and_drops_text(tmp_path):
    path = tmp_path / "data.csv"
    pd.DataFrame(
        {"x": [1.0, 2.0, 3.0, 4.0], "label": ["no", "yes", "no", "yes"], "name": list("abcd")}
    ).to_csv(path, index=False)
    X, y, metadata = load_dataset("csv", path, {"target": "label", "positive_label": "yes"})
    assert list(X.columns) == ["x"]
    assert y.tolist() == [0, 1, 0, 1]
    assert metadata["total_rows"] == "4"

    with pytest.raises(ValueError):
        load_dataset("csv", None, {"target": "label"})


def test_random_splits_preserve_rows_and_classes():
    X = pd.DataFrame({"a": np.arange(100)})
    y = pd.Series([0, 1] * 50)
    splits = create_random_splits(X, y, RandomSplitConfig(test_size=0.2, val_size=0.2))
    assert len(splits.X_train) + len(splits.X_val) + len(splits.X_test) == 100
    assert splits.y_test.mean() == pytest.approx(0.5)


def test_run_experiment_writes_outputs(tmp_path):
    config_path = _write_config(tmp_path, FAST_CONFIG)
    result = run_experiment(config_path, results_root=tmp_path / "results")

    assert set(result.kept_features) <= set(result.kept_features + result.dropped_features)
    assert len(result.kept_features) + len(result.dropped_features) == 5
    assert list(result.selection.tiers["tier"]) == [1, 2]

    features = json.loads((result.run_dir / "features.json").read_text(encoding="utf-8"))
    assert features["kept_features"] == result.kept_features
    metrics = json.loads((result.run_dir / "metrics.json").read_text(encoding="utf-8"))
    assert metrics["models"][0]["model"] == "all_features"
    assert (result.run_dir / "tiers.csv").exists()
    assert (result.run_dir / "config.yaml").exists()


def test_unknown_selection_option_rejected(tmp_path):
    config = dict(FAST_CONFIG, selection={"threshold": 0.1, "max_depth": 2})
    with pytest.raises(ValueError, match="max_depth"):
        run_experiment(_write_config(tmp_path, config), results_root=tmp_path / "results")


def test_cli_reports_results_location(tmp_path, capsys):
    config_path = _write_config(tmp_path, FAST_CONFIG)
    main(["--config", str(config_path), "--results-dir", str(tmp_path / "out"), "--log-level", "WARNING"])
    assert "Results stored in:" in capsys.readouterr().out
