"""Core module exports."""

from sourceref.core.errors import (
    BackendError,
    ConfigError,
    ErrorCode,
    ResolverError,
    SessionError,
    SourceRefError,
    StaleRequestError,
)
from sourceref.core.logging import (
    configure_logging,
    get_logger,
    set_request_id,
)

__all__ = [
    # Errors
    "BackendError",
    "ConfigError",
    "ErrorCode",
    "ResolverError",
    "SessionError",
    "SourceRefError",
    "StaleRequestError",
    # Logging
    "configure_logging",
    "get_logger",
    "set_request_id",
]
