"""Unit tests for the logging utilities."""

from __future__ import annotations

import json
import logging

from studiosite.core.logger import (
    JSONFormatter,
    RedactSecretsFilter,
    configure_logging,
    ensure_request_id,
)


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
    finally:
        configure_logging(logging.getLevelName(previous))


def test_json_formatter_promotes_known_extras() -> None:
    record = logging.LogRecord("studiosite.test", logging.INFO, __file__, 1, "auth.login.failed", None, None)
    record.email = "a@example.com"
    record.request_id = "req-1"
    record.unrelated = "dropped"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "auth.login.failed"
    assert payload["level"] == "INFO"
    assert payload["email"] == "a@example.com"
    assert payload["request_id"] == "req-1"
    assert "unrelated" not in payload


def test_request_id_comes_from_header(app) -> None:
    with app.test_request_context("/api/health", headers={"X-Request-ID": "abc-123"}):
        assert ensure_request_id() == "abc-123"
        assert ensure_request_id() == "abc-123"


def test_request_id_is_generated_and_stable_per_request(app) -> None:
    with app.test_request_context("/api/health"):
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first


def test_malformed_request_id_header_is_replaced(app) -> None:
    forged = "bad id " + "x" * 200
    with app.test_request_context("/api/health", headers={"X-Request-ID": forged}):
        request_id = ensure_request_id()
        assert request_id != forged
        assert " " not in request_id


def test_correlation_header_is_accepted(app) -> None:
    with app.test_request_context("/api/health", headers={"X-Correlation-ID": "corr-9"}):
        assert ensure_request_id() == "corr-9"


def test_secret_extras_are_masked() -> None:
    record = logging.LogRecord("studiosite.test", logging.INFO, __file__, 1, "x", None, None)
    record.password = "hunter22"
    record.refresh_token = "eyJ..."

    assert RedactSecretsFilter().filter(record) is True
    assert record.password == "***"
    assert record.refresh_token == "***"
