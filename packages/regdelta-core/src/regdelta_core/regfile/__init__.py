"""Parsing of Windows registry export (.reg) files."""

from regdelta_core.regfile.formatting import (
    describe_value,
    display_value_name,
    format_value_data,
    format_value_type,
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
from regdelta_core.regfile.parser import (
    HEX_TYPE_CODES,
    RegFileParser,
    parse_reg_bytes,
    parse_reg_file,
)
from regdelta_core.regfile.reader import DEFAULT_MAX_BYTES, read_reg_bytes

__all__ = [
    "DEFAULT_MAX_BYTES",
    "Deletion",
    "HEX_TYPE_CODES",
    "KeyRecord",
    "ParseIssue",
    "ParseReport",
    "RegFileDocument",
    "RegFileParser",
    "ValueRecord",
    "ValueType",
    "describe_value",
    "display_value_name",
    "format_value_data",
    "format_value_type",
    "parse_reg_bytes",
    "parse_reg_file",
    "read_reg_bytes",
]
