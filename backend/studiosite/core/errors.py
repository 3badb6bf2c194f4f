"""Centralized JSON error handling for the API.

Every handled error is rendered as::

    {"success": false, "error": <message>, "code": <slug>,
     "request_id": <id>, "details": <optional>}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from studiosite.core.logger import ensure_request_id
from studiosite.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        429: "too_many_requests",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def error_body(
    *,
    code: str,
    message: str,
    details: Any | None = None,
) -> dict[str, Any]:
    """
    Build the error envelope.

    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional safe, structured details.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    body: dict[str, Any] = {
        "success": False,
        "error": message,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def error_response(
    status: int,
    *,
    code: str | None = None,
    message: str | None = None,
    details: Any | None = None,
) -> tuple[Response, int]:
    """Return ``(response, status)`` carrying the error envelope."""
    status = int(status)
    body = error_body(
        code=code or _http_status_to_code(status),
        message=message or HTTPStatus(status).phrase,
        details=details,
    )
    return jsonify(body), status


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, typically snake_case. Defaults to
        ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Optional structured payload (e.g., validation messages) included in the
        response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}


# Domain conveniences
class BadRequest(APIError):
    """400 for malformed requests."""

    def __init__(self, message: str = "Bad request", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, details=details)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class Forbidden(APIError):
    """403 when authorization denies access."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


def service_error_status(err: ServiceError) -> tuple[int, str]:
    """Map a service-layer error onto ``(status, code)``."""
    if isinstance(err, ValidationError):
        return HTTPStatus.BAD_REQUEST, "validation_error"
    if isinstance(err, AuthenticationError):
        return HTTPStatus.UNAUTHORIZED, "unauthorized"
    if isinstance(err, AuthorizationError):
        return HTTPStatus.FORBIDDEN, "forbidden"
    if isinstance(err, NotFoundError):
        return HTTPStatus.NOT_FOUND, "not_found"
    if isinstance(err, ConflictError):
        return HTTPStatus.CONFLICT, "conflict"
    return HTTPStatus.BAD_REQUEST, "bad_request"


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error carries the correlation ``request_id``.
    - 5xx are logged with ``exc_info``; 4xx as warnings without traceback.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status, code = service_error_status(err)
        details = err.fields if isinstance(err, ValidationError) and err.fields else None
        if isinstance(err, NotFoundError):
            message = f"{err.entity} not found"
        else:
            message = str(err)
        log.warning("ServiceError: code=%s status=%s msg=%s", code, int(status), message)
        return error_response(status, code=code, message=message, details=details)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        level = log.error if err.status_code >= 500 else log.warning
        level("APIError: code=%s status=%s msg=%s", err.code, err.status_code, err.message)
        return error_response(
            err.status_code, code=err.code, message=err.message, details=err.details or None
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = _http_status_to_code(status)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: code=%s status=%s detail=%s", code, status, message)
        return error_response(status, code=code, message=message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        log.warning("ValidationError: fields=%s", sorted(_field_names(err.messages)))
        return error_response(
            HTTPStatus.BAD_REQUEST,
            code="validation_error",
            message="Validation error",
            details=err.messages,
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError", exc_info=True)
        return error_response(HTTPStatus.CONFLICT, code="conflict", message="Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, locked database
        log.error("OperationalError", exc_info=True)
        return error_response(
            HTTPStatus.SERVICE_UNAVAILABLE,
            code="service_unavailable",
            message="Service temporarily unavailable",
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception", exc_info=True)
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
            message="Internal server error",
        )


def _field_names(messages: Any) -> list[str]:
    return list(messages) if isinstance(messages, dict) else []
