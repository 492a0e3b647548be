"""Dataset registry and discovery utilities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

import pandas as pd

DatasetLoader = Callable[[Optional[Path], Dict[str, Any]], Tuple[pd.DataFrame, pd.Series, Dict[str, str]]]


@dataclass(frozen=True)
class DatasetMetadata:
    """Metadata describing a dataset that experiments can reference by name."""

    name: str
    loader: DatasetLoader
    description: str
    default_path: Optional[Path] = None
    requires_path: bool = False


_DATASETS: Dict[str, DatasetMetadata] = {}


def register_dataset(metadata: DatasetMetadata) -> None:
    """Register a dataset loader so it can be referenced by name."""

    if metadata.name in _DATASETS:
        raise ValueError(f"Dataset '{metadata.name}' already registered.")
    _DATASETS[metadata.name] = metadata


def list_datasets() -> Iterable[str]:
    return tuple(_DATASETS.keys())


def get_dataset_metadata(name: str) -> DatasetMetadata:
    try:
        return _DATASETS[name]
    except KeyError as exc:
        raise KeyError(f"Unknown dataset '{name}'. Available: {', '.join(list_datasets())}") from exc


def load_dataset(
    name: str,
    data_path: Optional[Path] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Tuple[pd.DataFrame, pd.Series, Dict[str, str]]:
    """Load a dataset by name and return feature matrix, target vector, and metadata."""

    metadata = get_dataset_metadata(name)
    effective_path = data_path or metadata.default_path
    if metadata.requires_path and effective_path is None:
        raise ValueError(f"Dataset '{name}' requires 'dataset_path' to be set.")
    return metadata.loader(effective_path, dict(options or {}))
