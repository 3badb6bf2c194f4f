"""Unit tests for blog-facing marshmallow schemas."""

from __future__ import annotations

import pytest
from marshmallow import ValidationError

from studiosite.schemas import PostCreateSchema, PostListQuerySchema, PostUpdateSchema, lenient_load
from studiosite.services.blog.dto import PostCreateIn, PostListIn, PostUpdateIn


class TestPostCreateSchema:
    def test_loads_camel_case_payload_into_dto(self):
        dto = PostCreateSchema().load(
            {
                "title": "Hello",
                "content": "Body",
                "featuredImage": "/uploads/a.png",
                "metaDescription": "desc",
                "categories": ["Design"],
                "tags": ["ui", "ux"],
                "unexpected": "ignored",
            }
        )

        assert isinstance(dto, PostCreateIn)
        assert dto.status == "draft"
        assert dto.featured_image == "/uploads/a.png"
        assert dto.meta_description == "desc"
        assert dto.categories == ("Design",)
        assert dto.tags == ("ui", "ux")

    def test_requires_title_and_content(self):
        with pytest.raises(ValidationError) as exc:
            PostCreateSchema().load({"excerpt": "only"})
        assert set(exc.value.messages) == {"title", "content"}

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError) as exc:
            PostCreateSchema().load({"title": "T", "content": "C", "status": "scheduled"})
        assert "status" in exc.value.messages


def test_update_schema_leaves_omitted_keys_unset():
    dto = PostUpdateSchema().load({"title": "New", "tags": []})

    assert isinstance(dto, PostUpdateIn)
    assert dto.title == "New"
    assert dto.tags == ()
    assert dto.categories is None
    assert dto.status is None


class TestPostListQuery:
    def schema(self, **kwargs):
        return PostListQuerySchema(default_limit=10, max_limit=100, **kwargs)

    def test_defaults(self):
        query = lenient_load(self.schema(), {})
        assert query == PostListIn(page=1, limit=10)

    def test_limit_is_clamped(self):
        assert lenient_load(self.schema(), {"limit": "500"}).limit == 100

    @pytest.mark.parametrize(
        "args",
        [
            {"page": "abc", "limit": "-3"},
            {"page": "0", "limit": "0"},
            {"page": "", "limit": "ten"},
        ],
    )
    def test_malformed_paging_falls_back_to_defaults(self, args):
        query = lenient_load(self.schema(), args)
        assert (query.page, query.limit) == (1, 10)

    def test_unknown_status_is_ignored_but_other_filters_kept(self):
        query = lenient_load(
            self.schema(), {"status": "bogus", "search": "flask", "tag": "python", "page": "2"}
        )
        assert query == PostListIn(page=2, limit=10, search="flask", tag="python")
