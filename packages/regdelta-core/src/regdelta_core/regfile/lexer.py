"""Token-level helpers for .reg value lines."""

from __future__ import annotations

import re

_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
}

_HEXDIGITS = frozenset("0123456789abcdefABCDEF")

DWORD_RE = re.compile(r"[0-9a-fA-F]{1,8}")
HEX_PREFIX_RE = re.compile(r"hex\s*(?:\(\s*([0-9a-fA-F]+)\s*\))?\s*:", re.IGNORECASE)


def parse_quoted(text: str) -> tuple[str, int] | None:
    """Decode a double-quoted string at the start of *text*.

    Returns ``(decoded, end)`` where *end* is the index just past the closing
    quote, or None when *text* is not a terminated quoted string. Unknown
    escapes pass the escaped character through.
    """
    if not text.startswith('"'):
        return None
    out: list[str] = []
    escape = False
    for i in range(1, len(text)):
        ch = text[i]
        if escape:
            out.append(_ESCAPES.get(ch, ch))
            escape = False
        elif ch == "\\":
            escape = True
        elif ch == '"':
            return "".join(out), i + 1
        else:
            out.append(ch)
    return None


def parse_hex_bytes(text: str) -> bytes | None:
    """Decode hex byte pairs, ignoring commas, whitespace and other separators.

    Returns None when a nibble is left over.
    """
    digits = [ch for ch in text if ch in _HEXDIGITS]
    if len(digits) % 2:
        return None
    return bytes.fromhex("".join(digits))


def starts_with_insensitive(text: str, prefix: str) -> bool:
    return text[: len(prefix)].lower() == prefix.lower()


def encode_reg_string(text: str) -> bytes:
    """Wide-character (UTF-16LE) bytes with a terminating NUL."""
    return (text + "\0").encode("utf-16-le", errors="surrogatepass")
