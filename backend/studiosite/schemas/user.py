"""User resource schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from studiosite.models.user import ROLE_EDITOR, USER_ROLES

from .common import BaseSchema


class UserCreateSchema(BaseSchema):
    """Payload for creating a new user from the admin surface."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    name = fields.String(required=True, validate=validate.Length(min=2, max=100))
    role = fields.String(load_default=ROLE_EDITOR, validate=validate.OneOf(USER_ROLES))


class UserUpdateSchema(BaseSchema):
    """Partial user update; every key is optional."""

    email = fields.Email(validate=validate.Length(max=254))
    password = fields.String(validate=validate.Length(min=8, max=128))
    name = fields.String(validate=validate.Length(min=2, max=100))
    role = fields.String(validate=validate.OneOf(USER_ROLES))


class UserSchema(BaseSchema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    name = fields.String(required=True)
    role = fields.String(required=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")
