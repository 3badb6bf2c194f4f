"""ETag helpers for cacheable read endpoints."""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any

from flask import Response, request


def generate_etag(entity: Any) -> str | None:
    """Fingerprint ``entity`` from its ``id`` and ``updated_at``.

    Works for models and output DTOs alike; returns ``None`` without an id.
    """

    identifier = getattr(entity, "id", None)
    if identifier is None:
        return None
    updated_at: datetime | None = getattr(entity, "updated_at", None)
    payload = f"{identifier}:{updated_at.isoformat() if updated_at else ''}".encode()
    return hashlib.sha256(payload).hexdigest()


def conditional(response: Response, entity: Any) -> Response:
    """Attach an ``ETag`` and turn the response into ``304`` on a match."""

    value = generate_etag(entity)
    if value is None:
        return response
    response.set_etag(value)
    return response.make_conditional(request)
