"""Unit tests for structured logging framework.

Tests cover:
- get_logger returns a structlog BoundLogger
- JSON rendering with logger name and ISO timestamp
- Sanitization of sensitive fields
- Context binding
"""

import json
import logging

import pytest

from sql_upcase.utils.logging import (
    MAX_TEXT_LENGTH,
    bind_context,
    get_logger,
    sanitize_for_logging,
)


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")


@pytest.mark.unit
def test_log_record_is_json_with_name_and_timestamp(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)

    get_logger("my_test_logger").info("batch.region_completed", tokens_capitalized=3)

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "batch.region_completed"
    assert log_data["logger"] == "my_test_logger"
    assert log_data["level"] == "info"
    assert log_data["tokens_capitalized"] == 3
    assert "timestamp" in log_data


@pytest.mark.unit
class TestSanitizeForLogging:
    def test_redacts_password(self) -> None:
        sanitized = sanitize_for_logging({"password": "secret123", "dialect": "ansi"})

        assert sanitized["password"] == "[REDACTED]"
        assert sanitized["dialect"] == "ansi"

    @pytest.mark.parametrize("key", ["db_password", "client_secret", "API_KEY", "credentials"])
    def test_redacts_sensitive_key_variants(self, key) -> None:
        assert sanitize_for_logging({key: "x"})[key] == "[REDACTED]"

    def test_redacts_nested(self) -> None:
        sanitized = sanitize_for_logging({"connection": {"password": "p", "host": "h"}})

        assert sanitized["connection"] == {"password": "[REDACTED]", "host": "h"}

    def test_input_not_modified(self) -> None:
        data = {"password": "p"}
        sanitize_for_logging(data)
        assert data == {"password": "p"}


@pytest.mark.unit
def test_sensitive_field_redacted_in_output(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    get_logger("sanitize_test").info("cli.document_capitalized", password="hunter2")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["password"] == "[REDACTED]"


@pytest.mark.unit
def test_bind_context(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    logger = bind_context(document="query.sql", dialect="postgres")
    logger.info("batch.completed", tokens_capitalized=1)

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["document"] == "query.sql"
    assert log_data["dialect"] == "postgres"


@pytest.mark.unit
def test_long_text_truncated(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    get_logger("truncate_test").info("cli.document_capitalized", document="x" * 500)

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["document"] == "x" * MAX_TEXT_LENGTH + "...(+380 chars)"
    assert log_data["event"] == "cli.document_capitalized"
