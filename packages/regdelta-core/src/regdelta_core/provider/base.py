"""Abstract key/value store interface consumed by the snapshot builder."""

from abc import ABC, abstractmethod
from typing import Any

# Opaque to the engine; only the provider that issued it interprets it.
NodeHandle = Any


class RegistryProvider(ABC):
    """Read-only view of a hierarchical key/value store.

    The engine never mutates a store; it resolves a base path once and then
    walks children through handles the provider hands back.
    """

    @abstractmethod
    def resolve(self, path: str) -> NodeHandle | None:
        """Open the key at a canonical *path*, or return None if it does not exist."""
        ...

    @abstractmethod
    def enumerate_values(self, handle: NodeHandle) -> list[tuple[str, int, bytes]]:
        """List ``(name, type, data)`` for every value of the key."""
        ...

    @abstractmethod
    def enumerate_child_names(self, handle: NodeHandle) -> list[str]:
        """List the names of the key's direct subkeys."""
        ...

    @abstractmethod
    def open_child(self, handle: NodeHandle, name: str) -> NodeHandle | None:
        """Open the direct subkey *name*; None if it vanished since enumeration."""
        ...
