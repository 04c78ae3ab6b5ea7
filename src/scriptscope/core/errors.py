"""ScriptScope error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004

    # Parse (3xxx)
    PARSE_INVALID_INPUT = 3001
    PARSE_UNSUPPORTED_EXTENSION = 3002
    PARSE_UNSUPPORTED_DIALECT = 3003
    PARSE_GRAMMAR_UNAVAILABLE = 3004
    PARSE_FAILED = 3005
    PARSE_FILE_NOT_FOUND = 3006
    PARSE_FILE_TOO_LARGE = 3007

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    INTERNAL_TIMEOUT = 9002


@dataclass(frozen=True, slots=True)
class ScriptScopeError(Exception):
    """Base error with structured context for tool responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/MCP responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ScriptScopeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ParseError(ScriptScopeError):
    """Errors that abort a single parse call.

    Per-node extraction problems never surface as ParseError; they are
    logged and skipped by the extractors.
    """

    @classmethod
    def invalid_input(cls, field: str, reason: str = "must be a non-empty string") -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_INVALID_INPUT,
            message=f"Invalid input '{field}': {reason}",
            details={"field": field, "reason": reason},
        )

    @classmethod
    def unsupported_extension(cls, filename: str, extension: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_EXTENSION,
            message=f"Unsupported file type: {extension or '<none>'} ({filename})",
            details={"filename": filename, "extension": extension},
        )

    @classmethod
    def unsupported_dialect(cls, dialect: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_DIALECT,
            message=f"Unsupported dialect: {dialect}",
            details={"dialect": dialect},
        )

    @classmethod
    def grammar_unavailable(cls, dialect: str, module: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_GRAMMAR_UNAVAILABLE,
            message=f"Grammar for '{dialect}' not available ({module}): {reason}",
            details={"dialect": dialect, "module": module, "reason": reason},
        )

    @classmethod
    def parse_failed(cls, filename: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_FAILED,
            message=f"Failed to parse {filename}: {reason}",
            details={"filename": filename, "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str, cwd: str | None = None) -> "ParseError":
        details: dict[str, Any] = {"path": path}
        if cwd:
            details["cwd"] = cwd
        return cls(
            code=ErrorCode.PARSE_FILE_NOT_FOUND,
            message=f"File not found: {path}",
            details=details,
        )

    @classmethod
    def file_too_large(cls, path: str, size: int, limit: int) -> "ParseError":
        size_mb = size / (1024 * 1024)
        limit_mb = limit / (1024 * 1024)
        return cls(
            code=ErrorCode.PARSE_FILE_TOO_LARGE,
            message=f"File too large: {path} ({size_mb:.2f}MB exceeds maximum of {limit_mb:.2f}MB)",
            details={"path": path, "size": size, "limit": limit},
        )


class InternalError(ScriptScopeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
