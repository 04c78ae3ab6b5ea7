"""Config module exports."""

from scriptscope.config.loader import ScriptScopeSettings, load_config
from scriptscope.config.models import (
    CacheConfig,
    LoggingConfig,
    ParsingConfig,
    PoolConfig,
    ScriptScopeConfig,
    SummaryConfig,
)

__all__ = [
    "load_config",
    "ScriptScopeConfig",
    "ScriptScopeSettings",
    "CacheConfig",
    "LoggingConfig",
    "ParsingConfig",
    "PoolConfig",
    "SummaryConfig",
]
