"""
Tests for structured logging configuration.
"""

import logging

import structlog
from structlog.contextvars import get_contextvars

from apps.core.logging import (
    _add_trace_id,
    _redact_credentials,
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_json_format(self):
        configure_logging(json_format=True, log_level="INFO")

        assert structlog.is_configured()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_console_format(self):
        configure_logging(json_format=False, log_level="DEBUG")

        assert structlog.is_configured()
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(json_format=False, log_level="chatty")

        assert logging.getLogger().level == logging.INFO

    def test_replaces_root_handlers(self):
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_bound_logger(self):
        assert get_logger("test.module") is not None

    def test_get_logger_with_none_name(self):
        assert get_logger(None) is not None


class TestContextVars:
    """Tests for context variable binding."""

    def setup_method(self):
        clear_contextvars()

    def teardown_method(self):
        clear_contextvars()

    def test_bind_contextvars_with_dotted_keys(self):
        bind_contextvars(**{"usr.id": "user_123", "organization.id": "org_456"})

        ctx = get_contextvars()
        assert ctx.get("usr.id") == "user_123"
        assert ctx.get("organization.id") == "org_456"

    def test_clear_contextvars_removes_context(self):
        bind_contextvars(trace_id="abc123")
        clear_contextvars()

        assert get_contextvars().get("trace_id") is None


class TestProcessors:
    """Tests for the custom processors."""

    def test_correlation_id_renamed_to_trace_id(self):
        event = _add_trace_id(logging.getLogger(), "info", {"correlation_id": 123})

        assert event == {"trace_id": "123"}

    def test_session_token_redacted(self):
        event = _redact_credentials(
            logging.getLogger(), "info", {"event": "x", "session_token": "sess_abcdef123456"}
        )

        assert event["session_token"] == "sess_***"
        assert event["event"] == "x"

    def test_non_credential_fields_untouched(self):
        event = _redact_credentials(logging.getLogger(), "info", {"email_domain": "example.com"})

        assert event == {"email_domain": "example.com"}

    def test_empty_and_missing_values_untouched(self):
        event = _redact_credentials(logging.getLogger(), "info", {"token": "", "secret": None})

        assert event == {"token": "", "secret": None}
