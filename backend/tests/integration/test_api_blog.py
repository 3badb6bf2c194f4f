"""Integration tests for the blog endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tests.factories.blog import BlogPostFactory
from tests.helpers.assertions import assert_error, assert_json_keys, assert_success

POSTS = "/api/blog/posts"
T0 = datetime(2024, 4, 1, tzinfo=UTC)


@pytest.fixture()
def published_ids(session) -> list[int]:
    """Five published posts, oldest first."""
    posts = [
        BlogPostFactory(
            title=f"Published {n}",
            published=True,
            published_at=T0 + timedelta(days=n),
        )
        for n in range(5)
    ]
    ids = [p.id for p in posts]
    session.commit()
    return ids


class TestEditorial:
    def test_create_requires_auth(self, client):
        assert_error(client.post(POSTS, json={"title": "T", "content": "C"}), 401)

    def test_create_update_delete(self, client, editor_headers, editor_user):
        created = assert_success(
            client.post(
                POSTS,
                json={
                    "title": "Hello World",
                    "content": "First!",
                    "status": "published",
                    "categories": ["News"],
                    "tags": ["intro"],
                },
                headers=editor_headers,
            ),
            201,
        )
        assert_json_keys(
            created,
            {"id", "slug", "status", "publishedAt", "createdAt", "updatedAt", "authorId",
             "featuredImage", "categories", "tags"},
        )
        assert created["slug"] == "hello-world"
        assert created["publishedAt"] is not None
        assert created["categories"] == ["News"]

        duplicate = assert_success(
            client.post(POSTS, json={"title": "Hello World", "content": "Again"}, headers=editor_headers),
            201,
        )
        assert duplicate["slug"] == "hello-world-1"
        assert duplicate["publishedAt"] is None

        url = f"{POSTS}/{created['id']}"
        updated = assert_success(
            client.put(url, json={"title": "Hello Again", "status": "archived"}, headers=editor_headers)
        )
        assert updated["slug"] == "hello-again"
        assert updated["status"] == "archived"
        assert updated["publishedAt"] is not None

        assert client.delete(url, headers=editor_headers).status_code == 204
        assert_error(client.get(url), 404, code="not_found", message="BlogPost not found")

    def test_create_validation(self, client, editor_headers):
        resp = client.post(POSTS, json={"title": "", "status": "live"}, headers=editor_headers)
        body = assert_error(resp, 400, code="validation_error", message="Validation error")
        assert {"title", "content", "status"} <= set(body["details"])

    def test_update_missing_post(self, client, editor_headers):
        assert_error(client.put(f"{POSTS}/9999", json={"title": "x"}, headers=editor_headers), 404)

    def test_delete_requires_auth(self, client, published_ids):
        assert_error(client.delete(f"{POSTS}/{published_ids[0]}"), 401)


class TestListing:
    def test_default_page(self, client, published_ids):
        data = assert_success(client.get(POSTS))

        assert_json_keys(data, {"posts", "total", "page", "limit"})
        assert (data["total"], data["page"], data["limit"]) == (5, 1, 10)
        assert [p["id"] for p in data["posts"]] == list(reversed(published_ids))

    def test_paging(self, client, published_ids):
        newest_first = list(reversed(published_ids))
        seen = []
        for page in (1, 2, 3):
            data = assert_success(client.get(POSTS, query_string={"page": page, "limit": 2}))
            assert data["total"] == 5
            seen.extend(p["id"] for p in data["posts"])
        assert seen == newest_first

        beyond = assert_success(client.get(POSTS, query_string={"page": 4, "limit": 2}))
        assert beyond["posts"] == []
        assert beyond["total"] == 5

    def test_malformed_query_falls_back_to_defaults(self, client, published_ids):
        data = assert_success(client.get(POSTS, query_string={"page": "x", "limit": "-1", "status": "??"}))
        assert (data["page"], data["limit"], data["total"]) == (1, 10, 5)

    def test_limit_is_capped(self, client, published_ids):
        data = assert_success(client.get(POSTS, query_string={"limit": 1000}))
        assert data["limit"] == 100

    def test_filters(self, client, published_ids, session):
        BlogPostFactory(title="Draft about Flask", content="body")
        session.commit()

        drafts = assert_success(client.get(POSTS, query_string={"status": "draft"}))
        assert [p["title"] for p in drafts["posts"]] == ["Draft about Flask"]

        found = assert_success(client.get(POSTS, query_string={"search": "flask", "status": "published"}))
        assert found["total"] == 0


class TestPublicReads:
    def test_get_by_id_supports_etag(self, client, published_ids):
        url = f"{POSTS}/{published_ids[0]}"
        first = client.get(url)
        assert first.status_code == 200
        etag = first.headers["ETag"]

        second = client.get(url, headers={"If-None-Match": etag})
        assert second.status_code == 304

    def test_get_by_slug(self, client, session):
        BlogPostFactory(slug="a-slug", title="A slug")
        session.commit()

        assert assert_success(client.get(f"{POSTS}/slug/a-slug"))["title"] == "A slug"
        assert_error(client.get(f"{POSTS}/slug/none-such"), 404)

    def test_featured_and_related(self, client, published_ids):
        newest_first = list(reversed(published_ids))

        featured = assert_success(client.get("/api/blog/featured", query_string={"limit": 2}))
        assert [p["id"] for p in featured] == newest_first[:2]

        slug = assert_success(client.get(f"{POSTS}/{newest_first[0]}"))["slug"]
        related = assert_success(client.get(f"{POSTS}/related/{slug}"))
        assert [p["id"] for p in related] == newest_first[1:4]

    def test_categories_and_tags(self, client, editor_headers):
        client.post(
            POSTS,
            json={"title": "T", "content": "C", "categories": ["Web", "Design"], "tags": ["b", "a"]},
            headers=editor_headers,
        )

        assert assert_success(client.get("/api/blog/categories")) == ["Design", "Web"]
        assert assert_success(client.get("/api/blog/tags")) == ["a", "b"]


def test_unknown_route_uses_error_envelope(client):
    assert_error(client.get("/api/nope"), 404, code="not_found", message="Route '/api/nope' not found")
