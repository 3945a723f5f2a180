"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RegDeltaConfig


def load_config(cli_path: str | None = None) -> RegDeltaConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./regdelta.yaml"),
        Path.home() / ".regdelta" / "config.yaml",
    ]

    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ValueError(f"Invalid config in {path}: top level must be a mapping")
                raw = _expand_env_vars(raw)
                return RegDeltaConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return RegDeltaConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `regdelta config init`
DEFAULT_CONFIG_TEMPLATE = """\
# regdelta.yaml

# .reg parsing
parser:
  max_file_size_mb: 32         # larger files are rejected, never truncated
  encoding_errors: "replace"   # replace | strict

# Comparison
compare:
  recursive: true
  # ignore_value_names: ["LastUpdate"]
  # ignore_key_paths: ["Cache"]

# Output
output:
  format: "table"              # table | json
  max_data_bytes: 32           # bytes of binary data shown per value

# Logging
log_level: "warn"              # debug | info | warn | error
log_format: "text"             # text | json
"""
