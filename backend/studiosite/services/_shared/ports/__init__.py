"""
studiosite.services._shared.ports
=================================

*Ports* (hexagonal interfaces) that keep services independent of the
infrastructure behind them.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, the abstraction for signing and decoding JWTs.
- :mod:`media_store`:
    :class:`~.MediaStore`, the abstraction over uploaded image files.

Concrete adapters live under ``studiosite.infra``.
"""

from __future__ import annotations

from .media_store import InMemoryMediaStore, MediaStore
from .token_provider import InvalidTokenError, StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "StubTokenProvider",
    "InvalidTokenError",
    "MediaStore",
    "InMemoryMediaStore",
]
