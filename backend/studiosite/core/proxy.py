"""Reverse-proxy header handling."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`ProxyFix` when ``USE_PROXYFIX`` is on.

    Rate limiting keys on the client address, so behind a proxy the
    ``X-Forwarded-For`` hop must be trusted. ``PROXYFIX_HOPS`` sets how many.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXYFIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)
