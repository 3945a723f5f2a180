"""Data models for snapshot comparison results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from regdelta_core.regfile.models import ValueRecord


class DiffKind(str, Enum):
    MISSING_LEFT = "missing_left"
    MISSING_RIGHT = "missing_right"
    TYPE_MISMATCH = "type_mismatch"
    DATA_MISMATCH = "data_mismatch"


@dataclass(frozen=True)
class KeyDiff:
    """A key present in only one snapshot. Its values are not compared."""

    relative_path: str
    present_left: bool
    present_right: bool


@dataclass(frozen=True)
class ValueDiff:
    """A value that is missing on one side or differs in type or data."""

    relative_path: str
    value_name: str
    kind: DiffKind
    left: ValueRecord | None = None
    right: ValueRecord | None = None


DiffEntry = KeyDiff | ValueDiff


@dataclass(frozen=True)
class DiffSummary:
    """Counts per kind of difference."""

    keys_only_left: int = 0
    keys_only_right: int = 0
    missing_left: int = 0
    missing_right: int = 0
    type_mismatches: int = 0
    data_mismatches: int = 0

    @property
    def total(self) -> int:
        return (
            self.keys_only_left
            + self.keys_only_right
            + self.missing_left
            + self.missing_right
            + self.type_mismatches
            + self.data_mismatches
        )

    @property
    def is_identical(self) -> bool:
        return self.total == 0
