"""Config module exports."""

from sourceref.config.loader import load_config
from sourceref.config.models import (
    BackendConfig,
    LoggingConfig,
    LogOutputConfig,
    SearchConfig,
    SourceRefConfig,
)

__all__ = [
    "load_config",
    "BackendConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "SearchConfig",
    "SourceRefConfig",
]
