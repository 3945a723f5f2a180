"""Tests for value type and data rendering."""

from __future__ import annotations

import pytest

from regdelta_core.regfile import (
    ValueRecord,
    ValueType,
    describe_value,
    display_value_name,
    format_value_data,
    format_value_type,
)
from regdelta_core.regfile.formatting import normalize_value_type, to_hex
from regdelta_core.regfile.lexer import encode_reg_string


# ── Types ────────────────────────────────────────────────────────────


def test_known_type_names():
    assert format_value_type(ValueType.REG_SZ) == "REG_SZ"
    assert format_value_type(4) == "REG_DWORD"
    assert format_value_type(11) == "REG_QWORD"


def test_flag_bits_are_shown_with_raw_tag():
    assert normalize_value_type(0x20004) == ValueType.REG_DWORD
    assert format_value_type(0x20004) == "REG_DWORD (0x20004)"


def test_unknown_type():
    assert normalize_value_type(0x99) == 0x99
    assert format_value_type(0x99) == "REG_UNKNOWN (0x99)"


def test_value_record_coerces_known_tags():
    record = ValueRecord(name="x", type=3, data=bytearray(b"\x01"))
    assert record.type is ValueType.REG_BINARY
    assert isinstance(record.data, bytes)
    assert ValueRecord(name="x", type=0x1234, data=b"").type == 0x1234


# ── Data ─────────────────────────────────────────────────────────────


def test_string_data_trims_terminator():
    assert format_value_data(ValueType.REG_SZ, encode_reg_string("hello")) == "hello"
    assert format_value_data(ValueType.REG_EXPAND_SZ, encode_reg_string("%PATH%")) == "%PATH%"


def test_multi_string_joined():
    data = "a\0b\0\0".encode("utf-16-le")
    assert format_value_data(ValueType.REG_MULTI_SZ, data) == "a; b"


def test_dword_and_qword():
    assert format_value_data(ValueType.REG_DWORD, (255).to_bytes(4, "little")) == "0x000000FF (255)"
    assert (
        format_value_data(ValueType.REG_QWORD, (1 << 40).to_bytes(8, "little"))
        == "0x0000010000000000 (1099511627776)"
    )


def test_short_dword_falls_back_to_hex():
    assert format_value_data(ValueType.REG_DWORD, b"\x01\x02") == "01 02"


def test_binary_and_unknown_as_hex():
    assert format_value_data(ValueType.REG_BINARY, b"\x01\xab") == "01 ab"
    assert format_value_data(0x99, b"\xff") == "ff"


def test_empty_data():
    assert format_value_data(ValueType.REG_SZ, b"") == ""


@pytest.mark.parametrize(
    "limit, expected",
    [
        (4, "00 01 02 03 ..."),
        (10, "00 01 02 03 04 05 06 07 08 09"),
        (0, "00 01 02 03 04 05 06 07 08 09"),
    ],
)
def test_to_hex_truncation(limit, expected):
    assert to_hex(bytes(range(10)), limit) == expected


# ── Display helpers ──────────────────────────────────────────────────


def test_display_value_name():
    assert display_value_name("") == "(Default)"
    assert display_value_name("Ver") == "Ver"


def test_describe_value():
    assert describe_value(None) == "(Missing)"
    record = ValueRecord(name="Ver", type=ValueType.REG_DWORD, data=(1).to_bytes(4, "little"))
    assert describe_value(record) == "REG_DWORD: 0x00000001 (1)"
    assert describe_value(ValueRecord(name="", type=ValueType.REG_NONE)) == "REG_NONE"
