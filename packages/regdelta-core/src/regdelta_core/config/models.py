from pydantic import BaseModel, Field
from typing import Literal


class ParserConfig(BaseModel):
    max_file_size_mb: int = Field(default=32, gt=0)
    encoding_errors: Literal["replace", "strict"] = "replace"

    @property
    def max_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class CompareConfig(BaseModel):
    recursive: bool = True
    ignore_value_names: list[str] = Field(default_factory=list)
    ignore_key_paths: list[str] = Field(default_factory=list)


class OutputConfig(BaseModel):
    format: Literal["table", "json"] = "table"
    max_data_bytes: int = Field(default=32, ge=0)


class RegDeltaConfig(BaseModel):
    parser: ParserConfig = Field(default_factory=ParserConfig)
    compare: CompareConfig = Field(default_factory=CompareConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "warn"
    log_format: Literal["text", "json"] = "text"
