"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import BaseSchema
from .user import UserSchema


class LoginSchema(BaseSchema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    remember_me = fields.Boolean(load_default=False, data_key="rememberMe")


class RefreshSchema(BaseSchema):
    """Input payload carrying a refresh token."""

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class TokenPairSchema(BaseSchema):
    """Login response: both tokens plus the user profile."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    user = fields.Nested(UserSchema, required=True)


class AccessTokenSchema(BaseSchema):
    """Refresh response containing a new access token."""

    access_token = fields.String(required=True, data_key="accessToken")
