"""Feature selection orchestration."""

from .incremental import SelectionResult, TIER_COLUMNS, run_incremental_selection, select

__all__ = [
    "SelectionResult",
    "TIER_COLUMNS",
    "run_incremental_selection",
    "select",
]
