"""Parser for Windows registry export (.reg) text."""

from __future__ import annotations

import logging
from pathlib import Path

from regdelta_core.errors import MalformedLine
from regdelta_core.regfile.lexer import (
    DWORD_RE,
    HEX_PREFIX_RE,
    encode_reg_string,
    parse_hex_bytes,
    parse_quoted,
    starts_with_insensitive,
)
from regdelta_core.regfile.models import (
    Deletion,
    KeyRecord,
    ParseIssue,
    ParseReport,
    RegFileDocument,
    ValueRecord,
    ValueType,
)
from regdelta_core.regfile.reader import (
    DEFAULT_MAX_BYTES,
    decode_reg_bytes,
    join_logical_lines,
    read_reg_bytes,
    split_physical_lines,
)

logger = logging.getLogger(__name__)

# Type codes accepted in ``hex(<code>):``. 0x6 (link) is not exported by
# regedit and falls back to binary like any other unknown code.
HEX_TYPE_CODES: dict[int, ValueType] = {
    0x0: ValueType.REG_NONE,
    0x1: ValueType.REG_SZ,
    0x2: ValueType.REG_EXPAND_SZ,
    0x3: ValueType.REG_BINARY,
    0x4: ValueType.REG_DWORD,
    0x5: ValueType.REG_DWORD_BIG_ENDIAN,
    0x7: ValueType.REG_MULTI_SZ,
    0x8: ValueType.REG_RESOURCE_LIST,
    0x9: ValueType.REG_FULL_RESOURCE_DESCRIPTOR,
    0xA: ValueType.REG_RESOURCE_REQUIREMENTS_LIST,
    0xB: ValueType.REG_QWORD,
}

_HORIZONTAL_WS = " \t"


def parse_value_name(name_part: str) -> str:
    """``@`` selects the default value; otherwise a quoted name is required."""
    if name_part == "@":
        return ""
    if name_part.startswith('"'):
        parsed = parse_quoted(name_part)
        if parsed is None:
            raise MalformedLine("unterminated value name")
        return parsed[0]
    raise MalformedLine("value name must be @ or a quoted string")


def parse_value_data(data_part: str) -> tuple[ValueType, bytes]:
    """Decode the right-hand side of a value line into ``(type, data)``."""
    if data_part.startswith('"'):
        parsed = parse_quoted(data_part)
        if parsed is None:
            raise MalformedLine("unterminated string data")
        return ValueType.REG_SZ, encode_reg_string(parsed[0])

    if starts_with_insensitive(data_part, "dword:"):
        digits = data_part[len("dword:"):].strip(_HORIZONTAL_WS)
        if not DWORD_RE.fullmatch(digits):
            raise MalformedLine("dword data must be 1-8 hex digits")
        return ValueType.REG_DWORD, int(digits, 16).to_bytes(4, "little")

    if starts_with_insensitive(data_part, "hex"):
        match = HEX_PREFIX_RE.match(data_part)
        if match is None:
            raise MalformedLine("malformed hex prefix")
        value_type = ValueType.REG_BINARY
        if match.group(1) is not None:
            value_type = HEX_TYPE_CODES.get(int(match.group(1), 16), ValueType.REG_BINARY)
        data = parse_hex_bytes(data_part[match.end():])
        if data is None:
            raise MalformedLine("hex data has a dangling nibble")
        return value_type, data

    raise MalformedLine("unrecognized value data")


class RegFileParser:
    """Turns raw .reg bytes into a RegFileDocument.

    Lenient per line (bad lines are skipped and reported), strict per file
    (unreadable, oversized or empty input raises ReadFailure).
    """

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES, encoding_errors: str = "replace") -> None:
        self.max_bytes = max_bytes
        self.encoding_errors = encoding_errors

    def parse(self, raw: bytes, source: str = "<bytes>") -> RegFileDocument:
        return self.parse_with_report(raw, source).document

    def parse_file(self, path: str | Path) -> RegFileDocument:
        return self.parse_file_with_report(path).document

    def parse_file_with_report(self, path: str | Path) -> ParseReport:
        raw = read_reg_bytes(path, self.max_bytes)
        return self.parse_with_report(raw, str(path))

    def parse_with_report(self, raw: bytes, source: str = "<bytes>") -> ParseReport:
        text = decode_reg_bytes(raw, source, self.max_bytes, self.encoding_errors)
        physical = split_physical_lines(text)
        logical = join_logical_lines(physical)

        key_order: list[str] = []
        key_paths: dict[str, str] = {}
        key_values: dict[str, dict[str, ValueRecord]] = {}
        deletions: list[Deletion] = []
        issues: list[ParseIssue] = []

        current_key = ""
        for number, raw_line in logical:
            line = raw_line.strip(_HORIZONTAL_WS)
            if not line or line.startswith(";"):
                continue

            if line.startswith("[") and line.endswith("]") and len(line) >= 2:
                key = line[1:-1].strip(_HORIZONTAL_WS)
                if key.startswith("-"):
                    current_key = ""
                    deletions.append(Deletion(kind="key", key_path=key[1:].strip(_HORIZONTAL_WS)))
                    continue
                current_key = key
                lowered = key.lower()
                if key and lowered not in key_paths:
                    key_paths[lowered] = key
                    key_values[lowered] = {}
                    key_order.append(key)
                continue

            # Banner line, or values under a deleted key
            if not current_key:
                continue

            try:
                value = self._parse_value_line(line)
            except MalformedLine as e:
                logger.debug("%s:%d: skipping line (%s)", source, number, e.reason)
                issues.append(ParseIssue(number, raw_line, e.reason))
                continue

            if isinstance(value, str):
                deletions.append(Deletion(kind="value", key_path=current_key, value_name=value))
                continue
            key_values[current_key.lower()][value.lookup_key] = value

        document = RegFileDocument(
            key_order=tuple(key_order),
            keys={
                lowered: KeyRecord(path=key_paths[lowered], values=values)
                for lowered, values in key_values.items()
            },
            deletions=tuple(deletions),
        )
        logger.debug(
            "Parsed %d key(s) from %s, skipped %d line(s)", len(key_order), source, len(issues)
        )
        return ParseReport(
            document=document,
            physical_lines=len(physical),
            logical_lines=len(logical),
            issues=tuple(issues),
        )

    @staticmethod
    def _parse_value_line(line: str) -> ValueRecord | str:
        """Parse ``name=data``; a ``-`` data part returns just the value name."""
        name_part, eq, data_part = line.partition("=")
        if not eq:
            raise MalformedLine("missing '='")
        name_part = name_part.strip(_HORIZONTAL_WS)
        data_part = data_part.strip(_HORIZONTAL_WS)
        if not name_part or not data_part:
            raise MalformedLine("empty name or data")

        name = parse_value_name(name_part)
        if data_part == "-":
            return name
        value_type, data = parse_value_data(data_part)
        return ValueRecord(name=name, type=value_type, data=data)


def parse_reg_bytes(raw: bytes, max_bytes: int = DEFAULT_MAX_BYTES) -> RegFileDocument:
    """Parse .reg bytes with default settings."""
    return RegFileParser(max_bytes=max_bytes).parse(raw)


def parse_reg_file(path: str | Path, max_bytes: int = DEFAULT_MAX_BYTES) -> RegFileDocument:
    """Read and parse a .reg file from disk."""
    return RegFileParser(max_bytes=max_bytes).parse_file(path)
