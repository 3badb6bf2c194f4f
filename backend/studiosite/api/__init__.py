"""API blueprint package mounting every resource under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask, g


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, typically ``"/api"``.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.

    Notes
    -----
    Empty relative prefixes mount a blueprint at the base itself. Two
    blueprints may share a relative prefix as long as their rules differ.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.rstrip("/"), rel_prefix.strip("/")] if segment
        )
        full_prefix = "/" + full_prefix if not full_prefix.startswith("/") else full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_app(app: Flask) -> None:
    """Register the API blueprints on the Flask app."""

    from studiosite.api.routes import REGISTRY

    @app.before_request
    def _reset_auth_claims() -> None:
        g.pop("auth_claims", None)

    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"), entries=REGISTRY
    )


__all__ = ["init_app", "register_blueprint_group"]
