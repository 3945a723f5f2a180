"""Plain-data rendering of diff results for JSON output."""

from __future__ import annotations

import json
from collections.abc import Sequence

from regdelta_core.diff.engine import summarize
from regdelta_core.diff.models import DiffEntry, KeyDiff
from regdelta_core.paths import join_path
from regdelta_core.regfile.formatting import format_value_data, format_value_type
from regdelta_core.regfile.models import ValueRecord
from regdelta_core.snapshot.models import Snapshot


def _value_to_dict(record: ValueRecord | None) -> dict | None:
    if record is None:
        return None
    return {
        "name": record.name,
        "type": int(record.type),
        "type_name": format_value_type(record.type),
        "data": record.data.hex(),
        "display": format_value_data(record.type, record.data),
        "size": len(record.data),
    }


def entry_to_dict(entry: DiffEntry, left_base: str = "", right_base: str = "") -> dict:
    if isinstance(entry, KeyDiff):
        return {
            "entry": "key",
            "relative_path": entry.relative_path,
            "left_path": join_path(left_base, entry.relative_path),
            "right_path": join_path(right_base, entry.relative_path),
            "present_left": entry.present_left,
            "present_right": entry.present_right,
        }
    return {
        "entry": "value",
        "relative_path": entry.relative_path,
        "left_path": join_path(left_base, entry.relative_path),
        "right_path": join_path(right_base, entry.relative_path),
        "value_name": entry.value_name,
        "kind": entry.kind.value,
        "left": _value_to_dict(entry.left),
        "right": _value_to_dict(entry.right),
    }


def diff_to_dict(entries: Sequence[DiffEntry], left: Snapshot, right: Snapshot) -> dict:
    summary = summarize(entries)
    return {
        "left": {"label": left.label, "base_path": left.base_path, "keys": len(left)},
        "right": {"label": right.label, "base_path": right.base_path, "keys": len(right)},
        "identical": summary.is_identical,
        "summary": {
            "keys_only_left": summary.keys_only_left,
            "keys_only_right": summary.keys_only_right,
            "missing_left": summary.missing_left,
            "missing_right": summary.missing_right,
            "type_mismatches": summary.type_mismatches,
            "data_mismatches": summary.data_mismatches,
            "total": summary.total,
        },
        "entries": [entry_to_dict(e, left.base_path, right.base_path) for e in entries],
    }


def diff_to_json(entries: Sequence[DiffEntry], left: Snapshot, right: Snapshot) -> str:
    return json.dumps(diff_to_dict(entries, left, right), indent=2)
