"""Dataset registry; loaders register themselves on import."""

from .datasets_registry import DatasetMetadata, get_dataset_metadata, list_datasets, load_dataset

from . import loaders as _loaders  # noqa: F401

__all__ = ["DatasetMetadata", "get_dataset_metadata", "list_datasets", "load_dataset"]
