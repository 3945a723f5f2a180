"""Builds Snapshots from parsed documents or from a live provider."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from regdelta_core.errors import InvalidPath, NoMatch, NotFound, OperationCancelled
from regdelta_core.paths import (
    SEPARATOR,
    is_same_or_descendant,
    join_path,
    normalize_path,
    relative_to,
)
from regdelta_core.provider.base import NodeHandle, RegistryProvider
from regdelta_core.regfile.models import KeyRecord, RegFileDocument, ValueRecord
from regdelta_core.regfile.parser import RegFileParser
from regdelta_core.snapshot.models import Snapshot

logger = logging.getLogger(__name__)


def _canonical_base(base_path: str) -> str:
    base = normalize_path(base_path)
    if base is None:
        raise InvalidPath(base_path)
    return base


class SnapshotBuilder:
    """Produces Snapshots with the same shape regardless of where data came from."""

    @staticmethod
    def from_document(
        document: RegFileDocument,
        base_path: str,
        recursive: bool = True,
        label: str | None = None,
        source: str = "",
    ) -> Snapshot:
        """Restrict *document* to the subtree at *base_path*.

        A key is included when its normalized path is the base itself or,
        with *recursive*, lies below it. Raises InvalidPath for an unusable
        base and NoMatch when no key qualifies.
        """
        base = _canonical_base(base_path)
        if not document.keys:
            raise NoMatch(base, source, empty_document=True)

        keys: dict[str, KeyRecord] = {}
        for original_path in document.key_order:
            normalized = normalize_path(original_path)
            if normalized is None:
                logger.debug("Ignoring key with unusable path: %s", original_path)
                continue
            if not is_same_or_descendant(normalized, base, recursive):
                continue

            rel = relative_to(normalized, base)
            record = document.keys[original_path.lower()]
            if rel.lower() in keys:
                logger.warning(
                    "Key %s appears more than once under %s; keeping the last one",
                    rel or "(base)",
                    base,
                )
            keys[rel.lower()] = KeyRecord(path=rel, values=dict(record.values))

        if not keys:
            raise NoMatch(base, source)

        if label is None:
            label = f"{source}: {base}" if source else base
        logger.info("Built snapshot of %d key(s) under %s from %s", len(keys), base, source or "document")
        return Snapshot(base_path=base, label=label, keys=keys)

    @staticmethod
    def from_file(
        path: str | Path,
        base_path: str,
        recursive: bool = True,
        parser: RegFileParser | None = None,
    ) -> Snapshot:
        """Parse a .reg file and snapshot the subtree at *base_path*."""
        parser = parser or RegFileParser()
        document = parser.parse_file(path)
        return SnapshotBuilder.from_document(
            document, base_path, recursive=recursive, source=Path(path).name
        )

    @staticmethod
    def from_provider(
        provider: RegistryProvider,
        base_path: str,
        recursive: bool = True,
        label: str | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> Snapshot:
        """Walk a live store from *base_path*.

        Uses an explicit stack rather than recursion, so tree depth never
        touches the interpreter's recursion limit. *should_cancel* is polled
        after each visited key.
        """
        base = _canonical_base(base_path)
        root = provider.resolve(base)
        if root is None:
            raise NotFound(base)

        keys: dict[str, KeyRecord] = {}
        stack: list[tuple[NodeHandle, str]] = [(root, "")]
        while stack:
            handle, rel = stack.pop()

            values: dict[str, ValueRecord] = {}
            for name, value_type, data in provider.enumerate_values(handle):
                record = ValueRecord(name=name, type=value_type, data=data)
                values[record.lookup_key] = record
            keys[rel.lower()] = KeyRecord(path=rel, values=values)

            if should_cancel is not None and should_cancel():
                raise OperationCancelled(f"Snapshot of {base}")

            if not recursive:
                continue
            for name in provider.enumerate_child_names(handle):
                child = provider.open_child(handle, name)
                if child is None:
                    logger.debug("Subkey %s vanished during walk", join_path(join_path(base, rel), name))
                    continue
                stack.append((child, rel + SEPARATOR + name if rel else name))

        if label is None:
            label = base
        logger.info("Built snapshot of %d key(s) under %s from provider", len(keys), base)
        return Snapshot(base_path=base, label=label, keys=keys)

