"""Structural comparison of two snapshots."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from regdelta_core.diff.models import DiffEntry, DiffKind, DiffSummary, KeyDiff, ValueDiff
from regdelta_core.paths import is_same_or_descendant
from regdelta_core.regfile.models import KeyRecord, ValueRecord
from regdelta_core.snapshot.models import Snapshot

logger = logging.getLogger(__name__)


class DiffEngine:
    """Compares two snapshots key by key, then value by value."""

    @staticmethod
    def compare(left: Snapshot, right: Snapshot) -> list[DiffEntry]:
        """Return the differences between *left* and *right*.

        Keys are ordered case-insensitively by their display path (the left
        side's spelling when both have it); values within a key by name.
        A key present on one side only yields a single KeyDiff and its
        values are not examined. Equal values are not reported.
        """

        def display(key_lower: str) -> str:
            record = left.keys.get(key_lower) or right.keys.get(key_lower)
            return record.path if record is not None else ""

        all_keys = sorted(
            set(left.keys) | set(right.keys),
            key=lambda k: (display(k).lower(), k),
        )

        entries: list[DiffEntry] = []
        for key_lower in all_keys:
            left_key = left.keys.get(key_lower)
            right_key = right.keys.get(key_lower)
            rel = display(key_lower)

            if left_key is None or right_key is None:
                entries.append(
                    KeyDiff(
                        relative_path=rel,
                        present_left=left_key is not None,
                        present_right=right_key is not None,
                    )
                )
                continue

            entries.extend(DiffEngine.compare_values(rel, left_key, right_key))

        logger.debug(
            "Compared %s against %s: %d difference(s)", left.label, right.label, len(entries)
        )
        return entries

    @staticmethod
    def compare_values(rel: str, left_key: KeyRecord, right_key: KeyRecord) -> list[ValueDiff]:
        """Value-level differences for a key present in both snapshots."""
        diffs: list[ValueDiff] = []
        for name_lower in sorted(set(left_key.values) | set(right_key.values)):
            left_val = left_key.values.get(name_lower)
            right_val = right_key.values.get(name_lower)
            kind = _classify(left_val, right_val)
            if kind is None:
                continue
            shown = left_val if left_val is not None else right_val
            diffs.append(
                ValueDiff(
                    relative_path=rel,
                    value_name=shown.name,
                    kind=kind,
                    left=left_val,
                    right=right_val,
                )
            )
        return diffs


def _classify(left: ValueRecord | None, right: ValueRecord | None) -> DiffKind | None:
    if left is None:
        return DiffKind.MISSING_LEFT
    if right is None:
        return DiffKind.MISSING_RIGHT
    if left.type != right.type:
        return DiffKind.TYPE_MISMATCH
    if left.data != right.data:
        return DiffKind.DATA_MISMATCH
    return None


def compare_snapshots(left: Snapshot, right: Snapshot) -> list[DiffEntry]:
    """Convenience wrapper around DiffEngine.compare()."""
    return DiffEngine.compare(left, right)


def summarize(entries: Iterable[DiffEntry]) -> DiffSummary:
    counts = {
        "keys_only_left": 0,
        "keys_only_right": 0,
        "missing_left": 0,
        "missing_right": 0,
        "type_mismatches": 0,
        "data_mismatches": 0,
    }
    field_for_kind = {
        DiffKind.MISSING_LEFT: "missing_left",
        DiffKind.MISSING_RIGHT: "missing_right",
        DiffKind.TYPE_MISMATCH: "type_mismatches",
        DiffKind.DATA_MISMATCH: "data_mismatches",
    }
    for entry in entries:
        if isinstance(entry, KeyDiff):
            counts["keys_only_left" if entry.present_left else "keys_only_right"] += 1
        else:
            counts[field_for_kind[entry.kind]] += 1
    return DiffSummary(**counts)


def filter_entries(
    entries: Iterable[DiffEntry],
    ignore_value_names: Iterable[str] = (),
    ignore_key_paths: Iterable[str] = (),
) -> list[DiffEntry]:
    """Drop entries for ignored value names or for keys under ignored paths.

    Both filters are case-insensitive; key paths are relative to the
    snapshot base and also exclude everything below them.
    """
    names = {n.lower() for n in ignore_value_names}
    prefixes = [p.strip("\\") for p in ignore_key_paths if p.strip("\\")]
    kept: list[DiffEntry] = []
    for entry in entries:
        if any(is_same_or_descendant(entry.relative_path, p) for p in prefixes):
            continue
        if isinstance(entry, ValueDiff) and entry.value_name.lower() in names:
            continue
        kept.append(entry)
    return kept
