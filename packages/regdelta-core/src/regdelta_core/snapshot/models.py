"""Data model for a flattened registry subtree."""

from __future__ import annotations

from dataclasses import dataclass, field

from regdelta_core.regfile.models import KeyRecord


@dataclass(frozen=True)
class Snapshot:
    """Path-keyed copy of a subtree, one side of a comparison.

    ``keys`` maps the lower-cased path relative to ``base_path`` (``""`` for the
    base key itself) to a KeyRecord whose ``path`` is the case-preserved
    relative path. ``label`` is for display only.
    """

    base_path: str
    label: str = ""
    keys: dict[str, KeyRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, relative_path: object) -> bool:
        return isinstance(relative_path, str) and relative_path.lower() in self.keys

    def get(self, relative_path: str) -> KeyRecord | None:
        return self.keys.get(relative_path.lower())

    def relative_paths(self) -> list[str]:
        """Case-preserved relative paths, sorted case-insensitively."""
        return sorted((k.path for k in self.keys.values()), key=str.lower)

    @property
    def value_count(self) -> int:
        return sum(len(k.values) for k in self.keys.values())
