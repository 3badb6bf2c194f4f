"""Authentication endpoints: login, refresh and the current user."""

from __future__ import annotations

from flask import Blueprint, current_app

from studiosite.api.deps import (
    load_json,
    ok,
    require_auth,
    service_context,
    timing,
    token_service,
)
from studiosite.core.extensions import limiter
from studiosite.schemas import (
    AccessTokenSchema,
    LoginSchema,
    RefreshSchema,
    TokenPairSchema,
    UserSchema,
)
from studiosite.services.auth.dto import LoginIn, RefreshIn
from studiosite.services.auth.service import AuthService

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
token_pair_schema = TokenPairSchema()
access_token_schema = AccessTokenSchema()
user_schema = UserSchema()

LOGIN_LIMIT_MESSAGE = "Too many login attempts. Please try again later."


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per 15 minutes"))


@bp.post("/login")
@limiter.limit(_login_rate_limit, error_message=LOGIN_LIMIT_MESSAGE)
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = load_json(login_schema)
    service = AuthService(tokens=token_service())
    result = service.login(LoginIn(**data))
    return ok(token_pair_schema.dump(result))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token."""

    data = load_json(refresh_schema)
    service = AuthService(tokens=token_service())
    result = service.refresh(RefreshIn(**data))
    return ok(access_token_schema.dump(result))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user profile."""

    ctx = service_context()
    service = AuthService(tokens=token_service(), ctx=ctx)
    return ok(user_schema.dump(service.whoami(ctx.actor_id)))
