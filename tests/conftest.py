"""Shared test fixtures for regdelta."""

from __future__ import annotations

from pathlib import Path

import pytest

from regdelta_core.config.models import RegDeltaConfig
from regdelta_core.provider import MemoryProvider
from regdelta_core.regfile import RegFileDocument, RegFileParser, ValueType
from regdelta_core.snapshot import Snapshot, SnapshotBuilder

REG_HEADER = "Windows Registry Editor Version 5.00\r\n\r\n"

LEFT_REG = (
    REG_HEADER
    + "[HKEY_CURRENT_USER\\App]\r\n"
    + '"Ver"=dword:00000001\r\n'
    + "\r\n"
    + "[HKEY_CURRENT_USER\\App\\Sub]\r\n"
    + '"Name"="old"\r\n'
)

RIGHT_REG = (
    REG_HEADER
    + "[HKEY_CURRENT_USER\\App]\r\n"
    + '"Ver"=dword:00000002\r\n'
)


def utf16_reg(text: str) -> bytes:
    """Encode *text* the way regedit writes exports: UTF-16LE with a BOM."""
    return b"\xff\xfe" + text.encode("utf-16-le")


@pytest.fixture
def sample_config():
    return RegDeltaConfig()


@pytest.fixture
def parser():
    return RegFileParser()


@pytest.fixture
def left_reg_bytes() -> bytes:
    return utf16_reg(LEFT_REG)


@pytest.fixture
def right_reg_bytes() -> bytes:
    return utf16_reg(RIGHT_REG)


@pytest.fixture
def left_document(parser, left_reg_bytes) -> RegFileDocument:
    return parser.parse(left_reg_bytes)


@pytest.fixture
def right_document(parser, right_reg_bytes) -> RegFileDocument:
    return parser.parse(right_reg_bytes)


@pytest.fixture
def left_snapshot(left_document) -> Snapshot:
    return SnapshotBuilder.from_document(left_document, "HKCU\\App")


@pytest.fixture
def right_snapshot(right_document) -> Snapshot:
    return SnapshotBuilder.from_document(right_document, "HKCU\\App")


@pytest.fixture
def reg_files(tmp_path: Path, left_reg_bytes, right_reg_bytes) -> tuple[Path, Path]:
    """The left/right sample exports written to disk."""
    left = tmp_path / "before.reg"
    right = tmp_path / "after.reg"
    left.write_bytes(left_reg_bytes)
    right.write_bytes(right_reg_bytes)
    return left, right


@pytest.fixture
def memory_provider() -> MemoryProvider:
    """A small tree under HKLM\\Software\\Vendor with one nested subkey."""
    provider = MemoryProvider()
    provider.set_value("HKLM\\Software\\Vendor", "Version", ValueType.REG_SZ, "2.1\0".encode("utf-16-le"))
    provider.set_value("HKLM\\Software\\Vendor", "", ValueType.REG_SZ, "default\0".encode("utf-16-le"))
    provider.set_value("HKLM\\Software\\Vendor\\Plugins", "Count", ValueType.REG_DWORD, (3).to_bytes(4, "little"))
    provider.add_key("HKLM\\Software\\Vendor\\Plugins\\Empty")
    provider.set_value("HKLM\\Software\\Other", "Unrelated", ValueType.REG_DWORD, (1).to_bytes(4, "little"))
    return provider
