"""Human-readable rendering of registry value types and data."""

from __future__ import annotations

from regdelta_core.regfile.models import ValueRecord, ValueType

_TEXT_TYPES = (ValueType.REG_SZ, ValueType.REG_EXPAND_SZ, ValueType.REG_LINK)


def normalize_value_type(tag: int) -> int:
    """Drop flag bits above the low word when the base type is well known."""
    try:
        return ValueType(tag & 0xFFFF)
    except ValueError:
        return tag


def format_value_type(tag: int) -> str:
    base = normalize_value_type(tag)
    if not isinstance(base, ValueType):
        return f"REG_UNKNOWN (0x{tag:X})"
    if base != tag:
        return f"{base.name} (0x{tag:X})"
    return base.name


def to_hex(data: bytes, max_bytes: int = 32) -> str:
    """Space-separated lowercase byte pairs, ``" ..."`` appended when cut."""
    if not data:
        return ""
    count = len(data) if max_bytes <= 0 else min(len(data), max_bytes)
    out = " ".join(f"{b:02x}" for b in data[:count])
    if count < len(data):
        out += " ..."
    return out


def _decode_wide(data: bytes) -> str:
    return data[: len(data) - len(data) % 2].decode("utf-16-le", errors="replace")


def format_value_data(tag: int, data: bytes, max_bytes: int = 32) -> str:
    if not data:
        return ""
    base = normalize_value_type(tag)

    if base in _TEXT_TYPES:
        return _decode_wide(data).rstrip("\0")

    if base == ValueType.REG_MULTI_SZ:
        parts: list[str] = []
        for part in _decode_wide(data).split("\0"):
            if not part:
                break
            parts.append(part)
        return "; ".join(parts)

    if base == ValueType.REG_DWORD and len(data) >= 4:
        number = int.from_bytes(data[:4], "little")
        return f"0x{number:08X} ({number})"

    if base == ValueType.REG_QWORD and len(data) >= 8:
        number = int.from_bytes(data[:8], "little")
        return f"0x{number:016X} ({number})"

    return to_hex(data, max_bytes)


def display_value_name(name: str) -> str:
    return name if name else "(Default)"


def describe_value(record: ValueRecord | None, max_bytes: int = 32) -> str:
    """``"<type>: <data>"`` for a value, ``"(Missing)"`` for an absent one."""
    if record is None:
        return "(Missing)"
    type_text = format_value_type(record.type)
    data_text = format_value_data(record.type, record.data, max_bytes)
    if not data_text:
        return type_text
    return f"{type_text}: {data_text}"
