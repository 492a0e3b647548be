"""Synthetic classification data with known informative and redundant columns."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd
from sklearn.datasets import make_classification

from ..datasets_registry import DatasetMetadata, register_dataset

DATASET_NAME = "synthetic"


def load_synthetic(
    _path: Optional[Path], options: Dict[str, Any]
) -> Tuple[pd.DataFrame, pd.Series, Dict[str, str]]:
    """Generate a dataset via ``make_classification``.

    Columns are named ``inf_*``, ``red_*`` and ``noise_*`` after the role
    scikit-learn gives them, which makes selections easy to eyeball.
    """

    n_informative = options.get("n_informative", 3)
    n_redundant = options.get("n_redundant", 2)
    n_noise = options.get("n_noise", 3)
    X, y = make_classification(
        n_samples=options.get("n_samples", 1000),
        n_features=n_informative + n_redundant + n_noise,
        n_informative=n_informative,
        n_redundant=n_redundant,
        n_repeated=0,
        n_classes=2,
        n_clusters_per_class=1,
        weights=options.get("weights"),
        shuffle=False,
        random_state=options.get("random_state", 42),
    )
    columns = (
        [f"inf_{i}" for i in range(n_informative)]
        + [f"red_{i}" for i in range(n_redundant)]
        + [f"noise_{i}" for i in range(n_noise)]
    )
    features = pd.DataFrame(X, columns=columns)
    target = pd.Series(y, name="target")

    metadata = {
        "task": "binary_classification",
        "source": "sklearn.datasets.make_classification",
        "total_rows": str(len(features)),
        "positive_rate": f"{target.mean():.4f}",
    }
    return features, target, metadata


register_dataset(
    DatasetMetadata(
        name=DATASET_NAME,
        loader=load_synthetic,
        description="make_classification data with informative, redundant and noise columns.",
    )
)
