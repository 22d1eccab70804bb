"""Unit tests for logging configuration, sanitization and error mapping."""

import json
import logging

import pytest

from chargeconsole.shared import logging as console_logging
from chargeconsole.shared.logging import (
    ContextAdapter,
    HumanReadableFormatter,
    LoggingConfig,
    LogLevel,
    StructuredFormatter,
    format_error_for_user,
    get_logger,
    get_user_friendly_error,
    log_with_context,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)


def make_record(message, context=None):
    record = logging.LogRecord(
        name="chargeconsole.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    if context is not None:
        record.context = context
    return record


class TestLoggingConfig:
    def test_from_environment_defaults(self, monkeypatch):
        monkeypatch.delenv("CHARGE_CONSOLE_LOG_LEVEL", raising=False)
        monkeypatch.delenv("CHARGE_CONSOLE_LOG_STDOUT", raising=False)
        config = LoggingConfig.from_environment()
        assert config.log_level == LogLevel.INFO
        assert config.log_to_stdout is False

    def test_from_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CHARGE_CONSOLE_LOG_LEVEL", "debug")
        monkeypatch.setenv("CHARGE_CONSOLE_LOG_STDOUT", "true")
        config = LoggingConfig.from_environment()
        assert config.log_level == LogLevel.DEBUG
        assert config.log_to_stdout is True

    def test_invalid_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("CHARGE_CONSOLE_LOG_LEVEL", "chatty")
        assert LoggingConfig.from_environment().log_level == LogLevel.INFO


class TestSanitization:
    def test_bearer_token_redacted(self):
        text = sanitize_message("Authorization: Bearer abc.def-ghi")
        assert "abc.def-ghi" not in text
        assert "[REDACTED]" in text

    def test_token_assignment_redacted(self):
        assert "s3cr3t" not in sanitize_message("api_token=s3cr3t")

    def test_jwt_redacted(self):
        text = sanitize_message("got eyJhbGciOi.eyJpZCI6IjEifQ.sig back")
        assert "[JWT_REDACTED]" in text

    def test_plain_message_untouched(self):
        message = "Start transaction on CS-01 connector 1"
        assert sanitize_message(message) == message

    def test_sanitize_dict(self):
        data = sanitize_dict(
            {"api_token": "x", "nested": {"password": "y"}, "station_id": "CS-01"}
        )
        assert data["api_token"] == "[REDACTED]"
        assert data["nested"]["password"] == "[REDACTED]"
        assert data["station_id"] == "CS-01"


class TestUserFriendlyErrors:
    @pytest.mark.parametrize(
        "error,expected",
        [
            ("Connection timed out", "timed out"),
            ("Cannot connect to server", "Unable to connect"),
            ("HTTP error 401: Unauthorized", "session"),
            ("HTTP error 403", "Access denied"),
        ],
    )
    def test_known_errors(self, error, expected):
        message, _ = get_user_friendly_error(error)
        assert expected in message

    def test_unknown_error(self):
        assert get_user_friendly_error(RuntimeError("weird")) == (
            "An unexpected error occurred.",
            None,
        )

    def test_format_error_appends_suggestion(self):
        text = format_error_for_user("timeout")
        assert text.endswith("Try again later or check your network connection.")


class TestFormatters:
    def test_structured_formatter_emits_json_with_context(self):
        formatter = StructuredFormatter()
        output = json.loads(
            formatter.format(make_record("hello", {"station_id": "CS-01", "token": "t"}))
        )
        assert output["message"] == "hello"
        assert output["context"]["station_id"] == "CS-01"
        assert output["context"]["token"] == "[REDACTED]"

    def test_human_readable_formatter_appends_context(self):
        formatter = HumanReadableFormatter()
        text = formatter.format(make_record("hello", {"connector_id": 2}))
        assert text.endswith("hello [connector_id=2]")


class TestContextAdapter:
    def test_with_context_merges(self):
        adapter = get_logger("chargeconsole.test", {"station_id": "CS-01"})
        child = adapter.with_context(connector_id=1)
        assert isinstance(child, ContextAdapter)
        assert child.extra == {"station_id": "CS-01", "connector_id": 1}

    def test_records_carry_context(self, caplog):
        adapter = get_logger("chargeconsole.test").with_context(station_id="CS-01")
        with caplog.at_level(logging.INFO, logger="chargeconsole.test"):
            adapter.info("started")
        assert caplog.records[0].context == {"station_id": "CS-01"}

    def test_log_with_context_on_plain_logger(self, caplog):
        logger = logging.getLogger("chargeconsole.test.plain")
        with caplog.at_level(logging.WARNING, logger="chargeconsole.test.plain"):
            log_with_context(logger, logging.WARNING, "failed", server_url="http://x")
        assert caplog.records[0].context == {"server_url": "http://x"}


class TestSetupLogging:
    def test_writes_to_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(console_logging, "_logging_initialized", False)
        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        saved_level = root.level
        try:
            setup_logging(LoggingConfig(log_dir=tmp_path))
            assert (tmp_path / "console.log").exists()
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
