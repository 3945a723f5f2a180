"""Registry key path normalization."""

from regdelta_core.paths.normalizer import (
    NAMESPACE_ALIAS,
    ROOT_ALIASES,
    SEPARATOR,
    is_same_or_descendant,
    join_path,
    leaf_name,
    normalize_path,
    relative_to,
    split_root,
)

__all__ = [
    "NAMESPACE_ALIAS",
    "ROOT_ALIASES",
    "SEPARATOR",
    "is_same_or_descendant",
    "join_path",
    "leaf_name",
    "normalize_path",
    "relative_to",
    "split_root",
]
