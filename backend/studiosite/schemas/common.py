"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate


class BaseSchema(Schema):
    """Base schema ignoring unknown keys; wire names are camelCase via ``data_key``."""

    class Meta:
        unknown = EXCLUDE


def lenient_load(schema: Schema, data: Mapping[str, Any]) -> dict[str, Any]:
    """Load ``data`` treating every invalid key as if it were absent.

    Query strings are user-typed; a malformed ``page`` or unknown ``status``
    falls back to the field default instead of failing the request.
    """
    payload = dict(data)
    try:
        return schema.load(payload)
    except ValidationError as err:
        messages = err.messages if isinstance(err.messages, dict) else {}
        for key in messages:
            payload.pop(key, None)
        return schema.load(payload)


class PaginationQuerySchema(BaseSchema):
    """Validate pagination parameters with configurable defaults."""

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        return data


class LimitQuerySchema(BaseSchema):
    """Single ``limit`` query parameter with a default."""

    def __init__(self, *, default_limit: int, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["limit"] = min(data.get("limit", self._default_limit), self._max_limit)
        return data
