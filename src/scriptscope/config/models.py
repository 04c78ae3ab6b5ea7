"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SCRIPTSCOPE__SECTION__KEY)
3. Repo YAML (.scriptscope/config.yaml)
4. Global YAML (~/.config/scriptscope/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SCRIPTSCOPE__<SECTION>__<KEY>=<VALUE>

Examples:
    SCRIPTSCOPE__LOGGING__LEVEL=DEBUG
    SCRIPTSCOPE__POOL__MAX_PER_DIALECT=8
    SCRIPTSCOPE__CACHE__TTL_SEC=60
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from scriptscope.config.constants import (
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_TTL_SEC,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_POOL_MAX_PER_DIALECT,
    SUPPORTED_EXTENSIONS,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SCRIPTSCOPE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped node and may be noisy.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class PoolConfig(BaseModel):
    """Parser pool configuration.

    Env vars:
        SCRIPTSCOPE__POOL__MAX_PER_DIALECT: Advisory number of cached parsers per dialect
    """

    max_per_dialect: int = Field(
        default=DEFAULT_POOL_MAX_PER_DIALECT,
        description="Advisory cache size per dialect. Callers beyond this get a "
        "temporary extra parser instead of waiting.",
    )

    @field_validator("max_per_dialect")
    @classmethod
    def validate_max(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_per_dialect must be >= 1, got {v}")
        return v


class ParsingConfig(BaseModel):
    """File parsing configuration.

    Env vars:
        SCRIPTSCOPE__PARSING__MAX_FILE_SIZE_MB: Reject files larger than this
    """

    max_file_size_mb: float = Field(
        default=DEFAULT_MAX_FILE_SIZE_MB,
        description="Reject files larger than this (MB).",
    )
    supported_extensions: list[str] = Field(
        default_factory=lambda: list(SUPPORTED_EXTENSIONS),
        description="File extensions accepted by parse_file (without dot).",
    )

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"max_file_size_mb must be positive, got {v}")
        return v

    @field_validator("supported_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext.lower().lstrip(".") for ext in v]

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)


class CacheConfig(BaseModel):
    """Parse result cache configuration.

    Env vars:
        SCRIPTSCOPE__CACHE__MAX_ENTRIES: LRU capacity
        SCRIPTSCOPE__CACHE__TTL_SEC: Entry lifetime in seconds
    """

    enabled: bool = True
    max_entries: int = Field(default=DEFAULT_CACHE_MAX_ENTRIES, description="LRU capacity.")
    ttl_sec: float = Field(default=DEFAULT_CACHE_TTL_SEC, description="Entry lifetime.")

    @field_validator("max_entries")
    @classmethod
    def validate_entries(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_entries must be >= 1, got {v}")
        return v

    @field_validator("ttl_sec")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"ttl_sec must be positive, got {v}")
        return v


class SummaryConfig(BaseModel):
    """Summary rendering options."""

    show_positions: bool = True
    show_types: bool = True
    compact: bool = False


class ScriptScopeConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
