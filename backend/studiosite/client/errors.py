"""Exceptions raised by the HTTP client."""

from __future__ import annotations

from typing import Any

import requests


class ApiError(Exception):
    """
    Non-2xx answer from the API.

    :param status: HTTP status code.
    :param message: ``error`` field of the envelope (or the reason phrase).
    :param code: ``code`` field of the envelope.
    :param request_id: Server correlation id, when present.
    :param details: ``details`` field of the envelope, when present.
    """

    def __init__(
        self,
        status: int,
        message: str,
        *,
        code: str | None = None,
        request_id: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.code = code
        self.request_id = request_id
        self.details = details

    def __str__(self) -> str:
        return f"{self.status} {self.code or 'error'}: {self.message}"


class BadRequestError(ApiError):
    """400: the payload or query failed validation."""


class UnauthorizedError(ApiError):
    """401: missing, invalid or expired credentials."""


class ForbiddenError(ApiError):
    """403: authenticated but not allowed."""


class NotFoundError(ApiError):
    """404."""


class ConflictError(ApiError):
    """409: uniqueness conflict."""


class RateLimitedError(ApiError):
    """429: too many requests; ``retry_after`` is in seconds when known."""

    retry_after: int | None = None


class ServerError(ApiError):
    """5xx."""


_BY_STATUS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitedError,
}


def error_for_response(response: requests.Response) -> ApiError:
    """Build the matching :class:`ApiError` subclass from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    status = response.status_code
    cls = _BY_STATUS.get(status) or (ServerError if status >= 500 else ApiError)
    err = cls(
        status,
        str(body.get("error") or response.reason or "Request failed"),
        code=body.get("code"),
        request_id=body.get("request_id") or response.headers.get("X-Request-ID"),
        details=body.get("details"),
    )
    if isinstance(err, RateLimitedError):
        retry_after = response.headers.get("Retry-After", "")
        err.retry_after = int(retry_after) if retry_after.isdigit() else None
    return err
