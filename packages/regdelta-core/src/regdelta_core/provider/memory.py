"""In-memory key tree implementing the provider interface."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from regdelta_core.errors import InvalidPath
from regdelta_core.paths import SEPARATOR, normalize_path, split_root
from regdelta_core.provider.base import RegistryProvider
from regdelta_core.regfile.models import RegFileDocument, ValueRecord

logger = logging.getLogger(__name__)


@dataclass
class MemoryKey:
    """A mutable key node; children and values are keyed by lower-cased name."""

    name: str
    values: dict[str, ValueRecord] = field(default_factory=dict)
    children: dict[str, MemoryKey] = field(default_factory=dict)

    def child(self, name: str) -> MemoryKey | None:
        return self.children.get(name.lower())


class MemoryProvider(RegistryProvider):
    """A registry-shaped tree held in memory.

    Useful for mounting a parsed .reg document as if it were a live store,
    and as a deterministic provider in tests. Lookups are case-insensitive.
    """

    def __init__(self) -> None:
        self._roots: dict[str, MemoryKey] = {}

    @classmethod
    def from_document(cls, document: RegFileDocument) -> MemoryProvider:
        """Mount every key of *document*; unusable paths are skipped."""
        provider = cls()
        for record in document.records():
            try:
                node = provider.add_key(record.path)
            except InvalidPath:
                logger.warning("Skipping key with unusable path: %s", record.path)
                continue
            node.values.update(record.values)
        return provider

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add_key(self, path: str) -> MemoryKey:
        """Create *path* (and any missing ancestors); return its node."""
        canonical = normalize_path(path)
        if canonical is None:
            raise InvalidPath(path)
        root_name, rest = split_root(canonical)
        node = self._roots.setdefault(root_name.lower(), MemoryKey(name=root_name))
        for part in rest.split(SEPARATOR) if rest else []:
            if not part:
                continue
            existing = node.child(part)
            if existing is None:
                existing = MemoryKey(name=part)
                node.children[part.lower()] = existing
            node = existing
        return node

    def set_value(self, path: str, name: str, value_type: int, data: bytes = b"") -> None:
        record = ValueRecord(name=name, type=value_type, data=data)
        self.add_key(path).values[record.lookup_key] = record

    # ------------------------------------------------------------------
    # RegistryProvider
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> MemoryKey | None:
        canonical = normalize_path(path)
        if canonical is None:
            return None
        root_name, rest = split_root(canonical)
        node = self._roots.get(root_name.lower())
        for part in rest.split(SEPARATOR) if rest else []:
            if node is None:
                return None
            if part:
                node = node.child(part)
        return node

    def enumerate_values(self, handle: MemoryKey) -> list[tuple[str, int, bytes]]:
        return [(v.name, int(v.type), v.data) for v in handle.values.values()]

    def enumerate_child_names(self, handle: MemoryKey) -> list[str]:
        return [child.name for child in handle.children.values()]

    def open_child(self, handle: MemoryKey, name: str) -> MemoryKey | None:
        return handle.child(name)
