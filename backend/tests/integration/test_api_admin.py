"""Integration tests for dashboard stats and the health probe."""

from __future__ import annotations

from tests.factories.blog import BlogPostFactory
from tests.helpers.assertions import assert_error, assert_success


def test_stats(client, editor_headers, session):
    BlogPostFactory.create_batch(2, published=True)
    BlogPostFactory()
    session.commit()

    data = assert_success(client.get("/api/admin/stats", headers=editor_headers))

    assert data == {"totalPosts": 3, "publishedPosts": 2, "draftPosts": 1, "totalUsers": 1}


def test_stats_requires_auth(client):
    assert_error(client.get("/api/admin/stats"), 401)


def test_health(client):
    data = assert_success(client.get("/api/health"))
    assert data["status"] == "ok"
    assert data["db"] == "ok"


def test_request_id_is_echoed(client):
    resp = client.get("/api/health", headers={"X-Request-ID": "trace-42"})
    assert resp.headers["X-Request-ID"] == "trace-42"


def test_cors_preflight(client):
    resp = client.options(
        "/api/blog/posts",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"
