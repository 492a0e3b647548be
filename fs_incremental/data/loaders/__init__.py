"""Dataset loader implementations."""

# Import loaders to ensure they register with the dataset registry.
from . import csv_table  # noqa: F401
from . import synthetic  # noqa: F401
