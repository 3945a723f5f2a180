"""Exception types raised by the regdelta engine."""

from __future__ import annotations

from typing import Literal

ReadFailureReason = Literal["unreadable", "too_large", "empty"]


class RegDeltaError(Exception):
    """Base class for every error the engine raises on purpose."""


class ReadFailure(RegDeltaError):
    """A .reg source could not be turned into text.

    Fatal to the whole parse. *reason* tells callers whether the file was
    missing/unreadable, over the size ceiling, or empty after decoding.
    """

    def __init__(
        self, source: str, reason: ReadFailureReason, cause: Exception | None = None
    ) -> None:
        self.source = source
        self.reason = reason
        messages = {
            "unreadable": "could not be read",
            "too_large": "exceeds the maximum .reg file size",
            "empty": "is empty",
        }
        detail = messages[reason]
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(f"Registry file '{source}' {detail}")
        if cause is not None:
            self.__cause__ = cause


class MalformedLine(RegDeltaError):
    """One .reg line could not be understood.

    Only raised inside the parser; the line is skipped and recorded as a
    ParseIssue rather than surfaced to callers.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidPath(RegDeltaError):
    """A key path has no usable root after normalization."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid registry path: '{path}'")


class NoMatch(RegDeltaError):
    """A base path matched no keys in a parsed document."""

    def __init__(self, base_path: str, source: str = "", empty_document: bool = False) -> None:
        self.base_path = base_path
        self.source = source
        self.empty_document = empty_document
        if empty_document:
            msg = "No registry keys were found in the .reg file"
        else:
            msg = f"No matching keys were found for '{base_path}'"
        if source:
            msg = f"{msg} ({source})"
        super().__init__(msg)


class NotFound(RegDeltaError):
    """A base path does not exist in a live provider."""

    def __init__(self, base_path: str) -> None:
        self.base_path = base_path
        super().__init__(f"Registry path not found: {base_path}")


class OperationCancelled(RegDeltaError):
    """A caller-supplied cancellation check asked a long walk to stop."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} was cancelled")


class SnapshotFormatError(RegDeltaError):
    """A saved snapshot file is not valid snapshot JSON."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid snapshot in {source}: {detail}")


class SnapshotIOError(RegDeltaError):
    """A snapshot file could not be read from or written to disk."""

    def __init__(self, source: str, action: Literal["read", "written"], cause: OSError) -> None:
        self.source = source
        self.action = action
        super().__init__(f"Snapshot file '{source}' could not be {action}: {cause}")
        self.__cause__ = cause
