"""API blueprint package bundling the ``/api`` routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .admin import bp as admin_bp  # noqa: E402
from .auth import bp as auth_bp  # noqa: E402
from .blog import bp as blog_bp  # noqa: E402
from .comments import bp as comments_bp  # noqa: E402
from .contact import bp as contact_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_api_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/health
    (auth_bp, "/auth"),  # -> /api/auth
    (users_bp, "/users"),
    (blog_bp, "/blog"),
    (comments_bp, "/blog"),  # -> /api/blog/posts/<id>/comments, /api/blog/comments
    (contact_bp, "/contact"),
    (admin_bp, "/admin"),
]
