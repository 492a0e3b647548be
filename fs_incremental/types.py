"""Shared dataclasses for experiment results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from fs_incremental.fs_logic import SelectionResult


@dataclass
class ModelResult:
    name: str
    feature_names: List[str]
    metrics: Dict[str, Dict[str, float]]


@dataclass
class ExperimentResult:
    dataset: str
    run_dir: Path
    selection: SelectionResult
    kept_features: List[str]
    dropped_features: List[str]
    models: List[ModelResult]
