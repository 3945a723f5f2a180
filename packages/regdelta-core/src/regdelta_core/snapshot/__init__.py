"""Snapshots: flattened, path-keyed views of a registry subtree."""

from regdelta_core.snapshot.builder import SnapshotBuilder
from regdelta_core.snapshot.models import Snapshot
from regdelta_core.snapshot.store import (
    load_snapshot,
    save_snapshot,
    snapshot_from_json,
    snapshot_to_json,
)

__all__ = [
    "Snapshot",
    "SnapshotBuilder",
    "load_snapshot",
    "save_snapshot",
    "snapshot_from_json",
    "snapshot_to_json",
]
