"""Core module exports."""

from scriptscope.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    ScriptScopeError,
)
from scriptscope.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ScriptScopeError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ParseError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
