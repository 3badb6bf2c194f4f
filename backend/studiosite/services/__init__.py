"""Service layer public API.

This package exposes the application services so that callers can import
from :mod:`studiosite.services` without knowing the internal structure.

Re-exports
----------
- Base primitives (from ``studiosite.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Credential store and tokens
    * :class:`IdentityService`, :class:`TokenService`, :class:`AuthService`

- Content
    * :class:`BlogPostService`, :class:`CommentService`

- Site operations
    * :class:`ContactService`, :class:`DashboardService`, :class:`MediaService`

DTOs stay in their ``<service>.dto`` modules.
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext
from .auth.service import AuthService
from .blog.service import BlogPostService
from .comments.service import CommentService
from .contact.service import ContactService
from .dashboard.service import DashboardService
from .identity.service import IdentityService
from .media.service import MediaService
from .tokens.service import TokenService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Identity & tokens
    "AuthService",
    "IdentityService",
    "TokenService",
    # Content
    "BlogPostService",
    "CommentService",
    # Site operations
    "ContactService",
    "DashboardService",
    "MediaService",
]
