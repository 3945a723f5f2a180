"""Key/value store providers."""

from regdelta_core.provider.base import NodeHandle, RegistryProvider
from regdelta_core.provider.memory import MemoryKey, MemoryProvider

__all__ = [
    "MemoryKey",
    "MemoryProvider",
    "NodeHandle",
    "RegistryProvider",
]
