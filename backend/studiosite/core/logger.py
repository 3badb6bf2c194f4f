"""JSON logging for the API process, correlated by request id.

Every record leaving the root handler is one JSON line carrying the
request id of the request that produced it. Credentials never reach the
output: known secret-bearing ``extra=`` keys are masked before formatting.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
#: Inbound headers accepted as the correlation id, in priority order.
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

#: ``extra=`` keys copied into the JSON payload.
EXTRA_FIELDS = (
    "endpoint",
    "elapsed_ms",
    "email",
    "user_id",
    "post_id",
    "comment_id",
    "status_code",
    "path",
)
#: ``extra=`` keys whose values are always masked.
SECRET_FIELDS = frozenset({"password", "access_token", "refresh_token", "authorization"})
REDACTED = "***"

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")
_ENVIRON_KEY = "studiosite.request_id"


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, request id and whitelisted extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            {key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id`` (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


class RedactSecretsFilter(logging.Filter):
    """Mask secret-bearing attributes a caller passed through ``extra=``."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in SECRET_FIELDS:
            if getattr(record, key, None) is not None:
                setattr(record, key, REDACTED)
        return True


def _inbound_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value and _SAFE_REQUEST_ID.match(value):
            return value
    return None


def ensure_request_id() -> str:
    """
    Return the id of the current request.

    A well-formed ``X-Request-ID`` or ``X-Correlation-ID`` header is reused;
    anything else gets a fresh UUID4. The value is cached in the WSGI
    environ so every record and the response header agree. Outside a request
    a new id is returned on every call.
    """
    if not has_request_context():
        return str(uuid4())
    cached = request.environ.get(_ENVIRON_KEY)
    if cached:
        return cached
    request_id = _inbound_request_id() or str(uuid4())
    request.environ[_ENVIRON_KEY] = request_id
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Send the root logger to stdout as JSON lines at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    handler.addFilter(RedactSecretsFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)


def init_app(app: Flask) -> None:
    """Assign a request id before each request and echo it on every response."""
    app.logger.addFilter(RequestIdFilter())
    app.logger.addFilter(RedactSecretsFilter())

    @app.before_request
    def _assign_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "JSONFormatter",
    "RedactSecretsFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
