"""regdelta core - .reg parsing, registry snapshots and structural diffs."""

from regdelta_core.config import RegDeltaConfig, load_config
from regdelta_core.diff import DiffEngine, DiffKind, KeyDiff, ValueDiff, compare_snapshots
from regdelta_core.errors import (
    InvalidPath,
    NoMatch,
    NotFound,
    OperationCancelled,
    ReadFailure,
    RegDeltaError,
    SnapshotFormatError,
    SnapshotIOError,
)
from regdelta_core.paths import normalize_path
from regdelta_core.provider import MemoryProvider, RegistryProvider
from regdelta_core.regfile import RegFileDocument, RegFileParser, ValueRecord, ValueType
from regdelta_core.snapshot import Snapshot, SnapshotBuilder

__version__ = "0.1.0"

__all__ = [
    "DiffEngine",
    "DiffKind",
    "InvalidPath",
    "KeyDiff",
    "MemoryProvider",
    "NoMatch",
    "NotFound",
    "OperationCancelled",
    "ReadFailure",
    "RegDeltaConfig",
    "RegDeltaError",
    "RegFileDocument",
    "RegFileParser",
    "RegistryProvider",
    "Snapshot",
    "SnapshotBuilder",
    "SnapshotFormatError",
    "SnapshotIOError",
    "ValueDiff",
    "ValueRecord",
    "ValueType",
    "compare_snapshots",
    "load_config",
    "normalize_path",
]
