"""Canonical registry key paths.

Every component joins on the string produced here, so two spellings of the
same key (``HKCU\\Software``, ``hkey_current_user/Software``,
``\\REGISTRY\\USER\\...``) must collapse to one form.
"""

from __future__ import annotations

SEPARATOR = "\\"

# Object-manager namespace prefix used by kernel-style paths
NAMESPACE_ALIAS = "REGISTRY"

# Upper-cased alias -> canonical long-form root
ROOT_ALIASES: dict[str, str] = {
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKEY_LOCAL_MACHINE": "HKEY_LOCAL_MACHINE",
    "MACHINE": "HKEY_LOCAL_MACHINE",
    "HKCU": "HKEY_CURRENT_USER",
    "HKEY_CURRENT_USER": "HKEY_CURRENT_USER",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKEY_CLASSES_ROOT": "HKEY_CLASSES_ROOT",
    "HKU": "HKEY_USERS",
    "HKEY_USERS": "HKEY_USERS",
    "USER": "HKEY_USERS",
    "USERS": "HKEY_USERS",
    "HKCC": "HKEY_CURRENT_CONFIG",
    "HKEY_CURRENT_CONFIG": "HKEY_CURRENT_CONFIG",
    "HKPD": "HKEY_PERFORMANCE_DATA",
    "HKEY_PERFORMANCE_DATA": "HKEY_PERFORMANCE_DATA",
    "HKEY_PERFORMANCE_TEXT": "HKEY_PERFORMANCE_TEXT",
    "HKEY_PERFORMANCE_NLSTEXT": "HKEY_PERFORMANCE_NLSTEXT",
}


def normalize_path(text: str) -> str | None:
    """Return the canonical form of *text*, or None if it has no usable root.

    The root is mapped to its long ``HKEY_*`` name; the remainder keeps its
    original case.
    """
    path = text.strip().replace("/", SEPARATOR).lstrip(SEPARATOR)

    prefix = NAMESPACE_ALIAS + SEPARATOR
    if path[: len(prefix)].upper() == prefix:
        path = path[len(prefix):].lstrip(SEPARATOR)

    root, _, rest = path.partition(SEPARATOR)
    root = ROOT_ALIASES.get(root.upper(), root)
    if not root or root.upper() == NAMESPACE_ALIAS:
        return None

    rest = rest.rstrip(SEPARATOR)
    if rest:
        return root + SEPARATOR + rest
    return root


def split_root(path: str) -> tuple[str, str]:
    """Split a canonical path into ``(root, remainder)``."""
    root, _, rest = path.partition(SEPARATOR)
    return root, rest


def join_path(base: str, rel: str) -> str:
    """Combine a base path and a relative path; either may be empty."""
    if not rel:
        return base
    if not base:
        return rel
    return base + SEPARATOR + rel


def leaf_name(path: str) -> str:
    """Last component of *path* (accepts either separator)."""
    if not path:
        return ""
    cut = max(path.rfind("\\"), path.rfind("/"))
    return path[cut + 1:]


def is_same_or_descendant(path: str, base: str, recursive: bool = True) -> bool:
    """Case-insensitive test for *path* being *base* or (recursive) below it."""
    lowered = path.lower()
    base_lowered = base.lower()
    if lowered == base_lowered:
        return True
    if not recursive or len(lowered) <= len(base_lowered):
        return False
    return lowered.startswith(base_lowered) and lowered[len(base_lowered)] == SEPARATOR


def relative_to(path: str, base: str) -> str:
    """Suffix of *path* below *base* (empty when they are the same key).

    Counts separators rather than characters, since lower-casing can change
    a component's length.
    """
    parts = path.split(SEPARATOR)
    depth = base.count(SEPARATOR) + 1
    return SEPARATOR.join(parts[depth:])
