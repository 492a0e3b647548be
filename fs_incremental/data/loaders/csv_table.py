"""Generic loader for a numeric CSV table with a binary target column."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..datasets_registry import DatasetMetadata, register_dataset

logger = logging.getLogger(__name__)

DATASET_NAME = "csv"


def _build_target(raw: pd.Series, positive_label: Any) -> pd.Series:
    """Map the target column onto 0/1."""

    if positive_label is not None:
        return (raw == positive_label).astype(int)
    labels = sorted(raw.dropna().unique())
    if len(labels) != 2:
        raise ValueError(
            f"Target '{raw.name}' has {len(labels)} distinct values; set 'positive_label' "
            "to binarize it."
        )
    return (raw == labels[1]).astype(int)


def load_csv_table(
    csv_path: Optional[Path], options: Dict[str, Any]
) -> Tuple[pd.DataFrame, pd.Series, Dict[str, str]]:
    """Load ``csv_path`` and return (features, target, metadata).

    Options: ``target`` (required column name), ``positive_label`` and
    ``drop_columns``. Non-numeric feature columns are dropped.
    """

    target_column = options.get("target")
    if not target_column:
        raise ValueError("The csv dataset needs 'dataset_options.target'.")

    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV dataset not found at {path}.")

    df = pd.read_csv(path)
    if target_column not in df.columns:
        raise ValueError(f"Target column '{target_column}' not found in {path}.")
    df = df.dropna(subset=[target_column]).drop_duplicates().reset_index(drop=True)

    target = _build_target(df[target_column], options.get("positive_label"))
    features = df.drop(columns=[target_column, *options.get("drop_columns", [])])

    numeric = features.select_dtypes(include="number")
    skipped = [col for col in features.columns if col not in numeric.columns]
    if skipped:
        logger.warning("Dropping %d non-numeric columns: %s", len(skipped), skipped)

    metadata = {
        "task": "binary_classification",
        "source": str(path),
        "total_rows": str(len(df)),
        "positive_rate": f"{target.mean():.4f}",
    }
    return numeric, target, metadata


register_dataset(
    DatasetMetadata(
        name=DATASET_NAME,
        loader=load_csv_table,
        description="Any CSV file with numeric features and a binary target column.",
        requires_path=True,
    )
)
