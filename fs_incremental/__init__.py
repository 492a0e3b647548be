"""Incremental relevance/redundancy feature selection."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("fs-incremental")
except PackageNotFoundError:  # pragma: no cover - fallback for local usage before install
    __version__ = "0.0.0"

from fs_incremental.fs_logic import SelectionResult, run_incremental_selection, select

__all__ = ["__version__", "SelectionResult", "run_incremental_selection", "select"]
