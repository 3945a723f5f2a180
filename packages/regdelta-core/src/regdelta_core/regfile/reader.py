"""Byte decoding and physical-to-logical line joining for .reg text."""

from __future__ import annotations

from pathlib import Path

from regdelta_core.errors import ReadFailure

DEFAULT_MAX_BYTES = 32 * 1024 * 1024

UTF16LE_BOM = b"\xff\xfe"
UTF8_BOM = b"\xef\xbb\xbf"


def read_reg_bytes(path: str | Path, max_bytes: int = DEFAULT_MAX_BYTES) -> bytes:
    """Read a .reg file from disk, refusing files above *max_bytes*.

    The size is checked before reading so an oversized file is never loaded.
    """
    path = Path(path)
    try:
        size = path.stat().st_size
        if size > max_bytes:
            raise ReadFailure(str(path), "too_large")
        raw = path.read_bytes()
    except OSError as e:
        raise ReadFailure(str(path), "unreadable", e) from e
    if not raw:
        raise ReadFailure(str(path), "empty")
    return raw


def decode_reg_bytes(
    raw: bytes,
    source: str = "<bytes>",
    max_bytes: int = DEFAULT_MAX_BYTES,
    errors: str = "replace",
) -> str:
    """Decode .reg bytes: UTF-16LE when BOM-marked, UTF-8 otherwise."""
    if len(raw) > max_bytes:
        raise ReadFailure(source, "too_large")
    if not raw:
        raise ReadFailure(source, "empty")

    try:
        if raw.startswith(UTF16LE_BOM):
            body = raw[len(UTF16LE_BOM):]
            # A trailing odd byte cannot form a code unit
            body = body[: len(body) - len(body) % 2]
            text = body.decode("utf-16-le", errors=errors)
        else:
            if raw.startswith(UTF8_BOM):
                raw = raw[len(UTF8_BOM):]
            text = raw.decode("utf-8", errors=errors)
    except UnicodeDecodeError as e:
        raise ReadFailure(source, "unreadable", e) from e

    if not text:
        raise ReadFailure(source, "empty")
    return text


def split_physical_lines(text: str) -> list[str]:
    """Split on ``\\n`` and drop one trailing ``\\r`` per line."""
    lines = text.split("\n")
    if lines and lines[-1] == "" and text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_logical_lines(physical: list[str]) -> list[tuple[int, str]]:
    """Merge backslash-continued lines.

    Returns ``(line_number, text)`` pairs where *line_number* is the 1-based
    physical line the logical line started on. The join point is not trimmed,
    so ``hex:01,\\`` followed by ``  02`` becomes ``hex:01,  02``.
    """
    logical: list[tuple[int, str]] = []
    current = ""
    start = 0
    continuing = False
    for number, line in enumerate(physical, start=1):
        if not continuing:
            start = number
        current += line
        trimmed = current.rstrip(" \t")
        continuing = trimmed.endswith("\\")
        if continuing:
            current = trimmed[:-1]
            continue
        logical.append((start, current))
        current = ""
    if continuing and current:
        logical.append((start, current))
    return logical
