"""Data models for parsed .reg documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Literal


class ValueType(IntEnum):
    """Well-known registry value type tags."""

    REG_NONE = 0
    REG_SZ = 1
    REG_EXPAND_SZ = 2
    REG_BINARY = 3
    REG_DWORD = 4
    REG_DWORD_BIG_ENDIAN = 5
    REG_LINK = 6
    REG_MULTI_SZ = 7
    REG_RESOURCE_LIST = 8
    REG_FULL_RESOURCE_DESCRIPTOR = 9
    REG_RESOURCE_REQUIREMENTS_LIST = 10
    REG_QWORD = 11


def coerce_value_type(tag: int) -> int:
    """Return a ValueType for known tags, the plain 32-bit int otherwise."""
    tag &= 0xFFFFFFFF
    try:
        return ValueType(tag)
    except ValueError:
        return tag


@dataclass(frozen=True)
class ValueRecord:
    """A single named, typed value. The empty name is the default value."""

    name: str
    type: int
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", coerce_value_type(self.type))
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def lookup_key(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class KeyRecord:
    """A key and its values, keyed by lower-cased value name."""

    path: str
    values: dict[str, ValueRecord] = field(default_factory=dict)

    def get(self, name: str) -> ValueRecord | None:
        return self.values.get(name.lower())


@dataclass(frozen=True)
class Deletion:
    """A ``[-key]`` or ``"name"=-`` marker seen while parsing."""

    kind: Literal["key", "value"]
    key_path: str
    value_name: str | None = None


@dataclass(frozen=True)
class RegFileDocument:
    """Ordered collection of key records parsed from one .reg blob.

    ``key_order`` holds each key path once, in first-seen order; ``keys`` maps
    the lower-cased path to its record.
    """

    key_order: tuple[str, ...] = ()
    keys: dict[str, KeyRecord] = field(default_factory=dict)
    deletions: tuple[Deletion, ...] = ()

    def __post_init__(self) -> None:
        ordered = {p.lower() for p in self.key_order}
        if len(ordered) != len(self.key_order) or ordered != set(self.keys):
            raise ValueError("key_order and keys must reference the same key paths")

    def __len__(self) -> int:
        return len(self.key_order)

    def get(self, path: str) -> KeyRecord | None:
        return self.keys.get(path.lower())

    def records(self) -> list[KeyRecord]:
        """Key records in document order."""
        return [self.keys[p.lower()] for p in self.key_order]

    def sorted_key_paths(self) -> list[str]:
        """Key paths sorted case-insensitively, for picking a base path."""
        return sorted(self.key_order, key=str.lower)


@dataclass(frozen=True)
class ParseIssue:
    """A logical line the parser skipped."""

    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class ParseReport:
    """A parsed document plus bookkeeping about what was skipped."""

    document: RegFileDocument
    physical_lines: int = 0
    logical_lines: int = 0
    issues: tuple[ParseIssue, ...] = ()

    @property
    def skipped(self) -> int:
        return len(self.issues)
