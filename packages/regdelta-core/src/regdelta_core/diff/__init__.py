"""Snapshot comparison."""

from regdelta_core.diff.engine import (
    DiffEngine,
    compare_snapshots,
    filter_entries,
    summarize,
)
from regdelta_core.diff.models import DiffEntry, DiffKind, DiffSummary, KeyDiff, ValueDiff
from regdelta_core.diff.report import diff_to_dict, diff_to_json, entry_to_dict

__all__ = [
    "DiffEngine",
    "DiffEntry",
    "DiffKind",
    "DiffSummary",
    "KeyDiff",
    "ValueDiff",
    "compare_snapshots",
    "diff_to_dict",
    "diff_to_json",
    "entry_to_dict",
    "filter_entries",
    "summarize",
]
