"""Contact form schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import BaseSchema


class ContactCreateSchema(BaseSchema):
    """Public contact form payload."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    company = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=120))
    service = fields.String(required=True, validate=validate.Length(min=1, max=80))
    message = fields.String(required=True, validate=validate.Length(min=1, max=5000))
    consent = fields.Boolean(required=True)


class ContactSchema(BaseSchema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    company = fields.String(allow_none=True)
    service = fields.String(required=True)
    message = fields.String(required=True)
    consent = fields.Boolean(required=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")

