"""Typed wrapper over the REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from studiosite.client.errors import UnauthorizedError
from studiosite.client.session import SessionManager, unwrap
from studiosite.client.storage import TokenStorage

log = logging.getLogger(__name__)


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class BlogClient:
    """
    One method per API route. Bodies and results use the server's camelCase
    keys; results are the ``data`` part of the envelope.

    A ``401`` on an authenticated call ends the local session, since the
    server no longer accepts its tokens.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: SessionManager | None = None,
        durable_storage: TokenStorage | None = None,
        http: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session or SessionManager(
            base_url, http=http, durable_storage=durable_storage, timeout=timeout
        )
        self.http = self.session.http
        self.base_url = self.session.base_url
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        response = self.http.request(
            method,
            f"{self.base_url}/api{path}",
            params=_drop_none(params or {}),
            json=json,
            timeout=self.timeout,
        )
        try:
            return unwrap(response)
        except UnauthorizedError:
            if self.session.is_authenticated:
                log.info("client.session.rejected")
                self.session.logout()
            raise

    # ------------------------------ Session ------------------------------

    def login(self, email: str, password: str, *, remember_me: bool = False) -> dict[str, Any]:
        return self.session.login(email, password, remember_me=remember_me)

    def logout(self) -> None:
        self.session.logout()

    def restore(self) -> bool:
        return self.session.restore()

    def me(self) -> dict[str, Any]:
        return self._request("GET", "/auth/me")

    # ------------------------------- Posts -------------------------------

    def list_posts(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
        category: str | None = None,
        tag: str | None = None,
    ) -> dict[str, Any]:
        """``{"posts": [...], "total", "page", "limit"}``."""
        params = {
            "page": page,
            "limit": limit,
            "status": status,
            "search": search,
            "category": category,
            "tag": tag,
        }
        return self._request("GET", "/blog/posts", params=params)

    def get_post(self, post_id: int) -> dict[str, Any]:
        return self._request("GET", f"/blog/posts/{post_id}")

    def get_post_by_slug(self, slug: str) -> dict[str, Any]:
        return self._request("GET", f"/blog/posts/slug/{slug}")

    def related_posts(self, slug: str, *, limit: int = 3) -> list[dict[str, Any]]:
        return self._request("GET", f"/blog/posts/related/{slug}", params={"limit": limit})

    def featured_posts(self, *, limit: int = 5) -> list[dict[str, Any]]:
        return self._request("GET", "/blog/featured", params={"limit": limit})

    def categories(self) -> list[str]:
        return self._request("GET", "/blog/categories")

    def tags(self) -> list[str]:
        return self._request("GET", "/blog/tags")

    def create_post(self, **fields: Any) -> dict[str, Any]:
        return self._request("POST", "/blog/posts", json=fields)

    def update_post(self, post_id: int, **fields: Any) -> dict[str, Any]:
        return self._request("PUT", f"/blog/posts/{post_id}", json=fields)

    def delete_post(self, post_id: int) -> None:
        self._request("DELETE", f"/blog/posts/{post_id}")

    # ------------------------------ Comments -----------------------------

    def list_comments(self, post_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/blog/posts/{post_id}/comments")

    def submit_comment(
        self, post_id: int, *, author_name: str, author_email: str, content: str
    ) -> dict[str, Any]:
        body = {"authorName": author_name, "authorEmail": author_email, "content": content}
        return self._request("POST", f"/blog/posts/{post_id}/comments", json=body)

    def moderation_queue(self, *, status: str | None = None) -> list[dict[str, Any]]:
        return self._request("GET", "/blog/comments", params={"status": status})

    def moderate_comment(self, comment_id: int, status: str) -> dict[str, Any]:
        return self._request("PATCH", f"/blog/comments/{comment_id}", json={"status": status})

    def delete_comment(self, comment_id: int) -> None:
        self._request("DELETE", f"/blog/comments/{comment_id}")

    # --------------------------- Contact & admin --------------------------

    def submit_contact(
        self,
        *,
        name: str,
        email: str,
        service: str,
        message: str,
        consent: bool,
        company: str | None = None,
    ) -> dict[str, Any]:
        body = _drop_none(
            {
                "name": name,
                "email": email,
                "company": company,
                "service": service,
                "message": message,
                "consent": consent,
            }
        )
        return self._request("POST", "/contact", json=body)

    def contact_submissions(self) -> list[dict[str, Any]]:
        return self._request("GET", "/contact")

    def stats(self) -> dict[str, int]:
        return self._request("GET", "/admin/stats")

    def list_users(self) -> list[dict[str, Any]]:
        return self._request("GET", "/users")

    def create_user(self, *, email: str, password: str, name: str, role: str = "editor") -> dict[str, Any]:
        body = {"email": email, "password": password, "name": name, "role": role}
        return self._request("POST", "/users", json=body)

    def update_user(self, user_id: int, **fields: Any) -> dict[str, Any]:
        return self._request("PATCH", f"/users/{user_id}", json=fields)

    def delete_user(self, user_id: int) -> None:
        self._request("DELETE", f"/users/{user_id}")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")
