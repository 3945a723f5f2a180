from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import (
    CompareConfig,
    OutputConfig,
    ParserConfig,
    RegDeltaConfig,
)

__all__ = [
    "CompareConfig",
    "DEFAULT_CONFIG_TEMPLATE",
    "OutputConfig",
    "ParserConfig",
    "RegDeltaConfig",
    "load_config",
]
