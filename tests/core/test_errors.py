"""Tests for error types and codes."""

import pytest

from scriptscope.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    ScriptScopeError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.PARSE_INVALID_INPUT, 3000),
            (ErrorCode.PARSE_FILE_TOO_LARGE, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(self, code: ErrorCode, expected_range: int) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestScriptScopeError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = ScriptScopeError(
            code=ErrorCode.PARSE_FAILED,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3005,
            "error": "PARSE_FAILED",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation includes code and name."""
        error = ScriptScopeError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")
        assert str(error) == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(ScriptScopeError):
            raise ParseError.invalid_input("code")


class TestParseError:
    """Parse error factory tests."""

    def test_invalid_input_names_field(self) -> None:
        error = ParseError.invalid_input("filename")
        assert error.code == ErrorCode.PARSE_INVALID_INPUT
        assert error.details["field"] == "filename"

    def test_unsupported_extension_carries_extension(self) -> None:
        error = ParseError.unsupported_extension("notes.txt", "txt")
        assert error.code == ErrorCode.PARSE_UNSUPPORTED_EXTENSION
        assert "txt" in error.message

    def test_unsupported_dialect(self) -> None:
        error = ParseError.unsupported_dialect("coffee")
        assert error.code == ErrorCode.PARSE_UNSUPPORTED_DIALECT
        assert "coffee" in error.message

    def test_file_too_large_reports_size_and_limit(self) -> None:
        error = ParseError.file_too_large("big.ts", 2048, 1024)
        assert error.code == ErrorCode.PARSE_FILE_TOO_LARGE
        assert error.details["size"] == 2048
        assert error.details["limit"] == 1024

    def test_file_not_found(self) -> None:
        error = ParseError.file_not_found("missing.ts", "/tmp")
        assert error.code == ErrorCode.PARSE_FILE_NOT_FOUND
        assert "missing.ts" in error.message


class TestConfigAndInternalErrors:
    """Config and internal error factory tests."""

    def test_config_parse_error(self) -> None:
        error = ConfigError.parse_error("/x/config.yaml", "bad indent")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert error.details == {"path": "/x/config.yaml", "reason": "bad indent"}

    def test_internal_unexpected(self) -> None:
        error = InternalError.unexpected("boom", exception="RuntimeError")
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {"exception": "RuntimeError"}
