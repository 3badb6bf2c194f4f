"""HTTP client for the studiosite API with managed token lifecycle."""

from __future__ import annotations

from .api import BlogClient
from .auth import BearerAuth
from .errors import (
    ApiError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    UnauthorizedError,
)
from .session import SessionManager, SessionState
from .storage import FileTokenStorage, MemoryTokenStorage, TokenStorage

__all__ = [
    "ApiError",
    "BadRequestError",
    "BearerAuth",
    "BlogClient",
    "ConflictError",
    "FileTokenStorage",
    "ForbiddenError",
    "MemoryTokenStorage",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "SessionManager",
    "SessionState",
    "TokenStorage",
    "UnauthorizedError",
]
