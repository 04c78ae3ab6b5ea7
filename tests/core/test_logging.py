"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from scriptscope.config.models import LoggingConfig, LogOutputConfig
from scriptscope.core.logging import (
    clear_request_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_request_id,
    set_request_id,
)


class TestRequestId:
    """Request correlation ID tests."""

    def test_given_no_id_when_set_then_generates_one(self) -> None:
        rid = set_request_id()
        try:
            assert rid
            assert get_request_id() == rid
        finally:
            clear_request_id()

    def test_given_explicit_id_when_set_then_used(self) -> None:
        set_request_id("abc123")
        try:
            assert get_request_id() == "abc123"
        finally:
            clear_request_id()
        assert get_request_id() is None


class TestConfigureLogging:
    """configure_logging() tests."""

    def test_given_level_when_configured_then_root_level_set(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        configure_logging(level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_given_file_output_when_logging_then_json_lines_written(self, tmp_path: Path) -> None:
        """A JSON file output receives the event with its context."""
        # Given
        log_file = tmp_path / "logs" / "scriptscope.log"
        config = LoggingConfig(
            level="INFO",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )
        configure_logging(config=config)

        # When
        set_request_id("req-1")
        try:
            get_logger("tests").info("file_parsed", path="a.ts")
        finally:
            clear_request_id()
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        assert get_log_file_path() == log_file
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "file_parsed"
        assert record["path"] == "a.ts"
        assert record["logger"] == "tests"
        assert record["request_id"] == "req-1"
        configure_logging(level="INFO")

    def test_given_module_logger_when_reconfigured_then_new_config_applies(self, tmp_path: Path) -> None:
        """Loggers created at import time honor configuration applied afterwards."""
        # Given
        from scriptscope.service import log as service_log

        log_file = tmp_path / "service.log"
        configure_logging(
            config=LoggingConfig(
                level="WARNING",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        # When
        service_log.debug("hidden_event")
        service_log.warning("shown_event")
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        records = [json.loads(line) for line in log_file.read_text().strip().splitlines()]
        assert [r["event"] for r in records] == ["shown_event"]
        assert records[0]["logger"] == "scriptscope.service"
        configure_logging(level="INFO")
