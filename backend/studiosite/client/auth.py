"""``requests`` auth hook that attaches the current access token."""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urlsplit

from requests import PreparedRequest
from requests.auth import AuthBase


class BearerAuth(AuthBase):
    """
    Add ``Authorization: Bearer <token>`` to requests under ``path_prefix``.

    The token is read at send time, so a refreshed token is picked up
    without re-registering the hook. Requests outside ``path_prefix`` and
    requests made while logged out are sent untouched.
    """

    def __init__(self, token_getter: Callable[[], str | None], *, path_prefix: str = "/api/") -> None:
        self.token_getter = token_getter
        self.path_prefix = path_prefix

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        path = urlsplit(request.url or "").path
        if not path.startswith(self.path_prefix):
            return request
        token = self.token_getter()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        return request
