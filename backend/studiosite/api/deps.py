"""Shared API helpers: auth guards, envelopes, query parsing and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from marshmallow import Schema

from studiosite.core.errors import BadRequest, Forbidden, Unauthorized
from studiosite.core.logger import ensure_request_id
from studiosite.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from studiosite.infra.media.local_media_store import LocalMediaStore
from studiosite.schemas.common import lenient_load
from studiosite.services._shared.base import ServiceContext
from studiosite.services.tokens.dto import AuthTokenConfig
from studiosite.services.tokens.service import TokenService

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------- #
# Envelopes & parsing
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def ok(data: Any, *, status: int = 200) -> Response:
    """Wrap ``data`` in the ``{"success": true, "data": ...}`` envelope."""

    return json_response({"success": True, "data": data}, status=status)


def no_content() -> Response:
    return Response(status=204)


def load_json(schema: Schema) -> Any:
    """Validate the JSON body with ``schema``; a non-object body is a 400."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")
    return schema.load(payload)


def load_query(schema: Schema) -> Any:
    """Load ``request.args``; malformed values fall back to their defaults."""

    return lenient_load(schema, request.args.to_dict())


# --------------------------------------------------------------------------- #
# Authentication & authorization
# --------------------------------------------------------------------------- #


def _verify_access_token() -> dict[str, Any]:
    try:
        verify_jwt_in_request(optional=False)
        return get_jwt() or {}
    except (JWTExtendedException, PyJWTError) as exc:
        current_app.logger.info("auth.token.rejected", extra={"path": request.path})
        raise Unauthorized("Invalid or expired token") from exc


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        claims = _verify_access_token()
        g.auth_claims = claims
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(*roles: str) -> Callable[[F], F]:
    """Ensure the verified access token carries one of ``roles``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            claims = _verify_access_token()
            if claims.get("role") not in roles:
                raise Forbidden("Insufficient permissions")
            g.auth_claims = claims
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def service_context() -> ServiceContext:
    """Build the request-scoped :class:`ServiceContext` from verified claims."""

    claims: dict[str, Any] = getattr(g, "auth_claims", None) or {}
    subject = claims.get("sub")
    return ServiceContext(
        actor_id=int(subject) if subject is not None else None,
        actor_role=claims.get("role"),
        request_id=ensure_request_id(),
    )


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def token_service() -> TokenService:
    """Token service configured from ``JWT_*_TOKEN_EXPIRES``."""

    cfg = AuthTokenConfig(
        access_expires=current_app.config["JWT_ACCESS_TOKEN_EXPIRES"],
        refresh_expires=current_app.config["JWT_REFRESH_TOKEN_EXPIRES"],
    )
    return TokenService(provider=JWTTokenProvider(), cfg=cfg)


def media_store() -> LocalMediaStore:
    return LocalMediaStore(
        root=current_app.config["UPLOAD_FOLDER"],
        url_prefix=current_app.config.get("UPLOAD_URL_PREFIX", "/uploads/"),
    )


# --------------------------------------------------------------------------- #
# Instrumentation
# --------------------------------------------------------------------------- #


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
