"""CORS policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from studiosite.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Allow the configured front-end origins to call ``<API_BASE_PREFIX>/*``.

    ``CORS_ORIGINS`` is a comma-separated list; blank or ``"*"`` allows any
    origin without credentials. Bearer tokens travel in the ``Authorization``
    header, so it is listed explicitly, and the request id is exposed to
    browser code.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": "*" if wildcard else origins}},
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, "Retry-After"],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
