"""Unit tests for client storage, error mapping and the BlogClient wrapper."""

from __future__ import annotations

import os
import stat

import pytest
import requests
import responses

from studiosite.client import (
    BlogClient,
    FileTokenStorage,
    NotFoundError,
    RateLimitedError,
    ServerError,
    UnauthorizedError,
)
from studiosite.client.errors import error_for_response

BASE = "http://studio.test"


def _response(status: int, body: bytes = b"", headers: dict[str, str] | None = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.headers.update(headers or {})
    resp.reason = "Reason"
    return resp


class TestFileTokenStorage:
    def test_save_load_clear(self, tmp_path):
        storage = FileTokenStorage(tmp_path / "nested" / "session.json")
        record = {"accessToken": "a", "refreshToken": "r", "user": {"id": 1}}

        storage.save(record)

        assert storage.load() == record
        mode = stat.S_IMODE(os.stat(storage.path).st_mode)
        assert mode == 0o600

        storage.clear()
        assert storage.load() is None
        storage.clear()

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")

        assert FileTokenStorage(path).load() is None


class TestErrorMapping:
    def test_envelope_fields_are_carried(self):
        resp = _response(
            404,
            b'{"success": false, "error": "BlogPost not found", "code": "not_found", "request_id": "abc"}',
        )

        err = error_for_response(resp)

        assert isinstance(err, NotFoundError)
        assert err.message == "BlogPost not found"
        assert err.code == "not_found"
        assert err.request_id == "abc"

    def test_rate_limit_retry_after(self):
        err = error_for_response(_response(429, b"{}", {"Retry-After": "30"}))

        assert isinstance(err, RateLimitedError)
        assert err.retry_after == 30

    def test_non_json_server_error(self):
        err = error_for_response(_response(502, b"<html>bad gateway</html>"))

        assert isinstance(err, ServerError)
        assert err.message == "Reason"


class TestBlogClient:
    @pytest.fixture()
    def api(self):
        with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            yield rsps

    def test_list_posts_drops_empty_params(self, api):
        api.get(
            f"{BASE}/api/blog/posts",
            json={"success": True, "data": {"posts": [], "total": 0, "page": 2, "limit": 5}},
        )

        data = BlogClient(BASE).list_posts(page=2, limit=5, search="flask")

        assert data["page"] == 2
        url = api.calls[0].request.url
        assert "search=flask" in url
        assert "status" not in url

    def test_unauthorized_ends_local_session(self, api):
        api.post(
            f"{BASE}/api/auth/login",
            json={
                "success": True,
                "data": {
                    "accessToken": "a",
                    "refreshToken": "r",
                    "user": {"id": 1, "email": "e@example.com", "role": "editor"},
                },
            },
        )
        api.get(
            f"{BASE}/api/auth/me",
            status=401,
            json={"success": False, "error": "Invalid or expired token", "code": "unauthorized"},
        )
        client = BlogClient(BASE)
        client.session.timer_factory = lambda *a, **k: _InertTimer()
        client.login("e@example.com", "secret")

        with pytest.raises(UnauthorizedError):
            client.me()

        assert client.session.is_authenticated is False

    def test_delete_returns_none_on_204(self, api):
        api.delete(f"{BASE}/api/blog/comments/3", status=204)

        assert BlogClient(BASE).delete_comment(3) is None


class _InertTimer:
    daemon = False

    def start(self):
        pass

    def cancel(self):
        pass
