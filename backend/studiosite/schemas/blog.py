"""Blog post schemas (payloads, listing query and representation)."""

from __future__ import annotations

from typing import Any

from marshmallow import fields, post_load, validate

from studiosite.models.blog import POST_DRAFT, POST_STATUSES
from studiosite.services.blog.dto import PostCreateIn, PostListIn, PostUpdateIn

from .common import BaseSchema, PaginationQuerySchema


class PostSchema(BaseSchema):
    """Representation of a blog post."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    slug = fields.String(required=True)
    content = fields.String(required=True)
    excerpt = fields.String(allow_none=True)
    status = fields.String(required=True)
    published_at = fields.DateTime(allow_none=True, data_key="publishedAt")
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")
    featured_image = fields.String(allow_none=True, data_key="featuredImage")
    meta_description = fields.String(allow_none=True, data_key="metaDescription")
    meta_keywords = fields.String(allow_none=True, data_key="metaKeywords")
    author_id = fields.Integer(allow_none=True, data_key="authorId")
    view_count = fields.Integer(data_key="viewCount")
    likes = fields.Integer()
    categories = fields.List(fields.String())
    tags = fields.List(fields.String())


class PostPageSchema(BaseSchema):
    posts = fields.List(fields.Nested(PostSchema))
    total = fields.Integer(required=True)
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)


class PostCreateSchema(BaseSchema):
    """Payload for creating a post."""

    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    content = fields.String(required=True, validate=validate.Length(min=1))
    slug = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=200))
    excerpt = fields.String(load_default=None, allow_none=True)
    status = fields.String(load_default=POST_DRAFT, validate=validate.OneOf(POST_STATUSES))
    featured_image = fields.String(
        load_default=None, allow_none=True, data_key="featuredImage",
        validate=validate.Length(max=255),
    )
    meta_description = fields.String(
        load_default=None, allow_none=True, data_key="metaDescription",
        validate=validate.Length(max=300),
    )
    meta_keywords = fields.String(
        load_default=None, allow_none=True, data_key="metaKeywords",
        validate=validate.Length(max=300),
    )
    categories = fields.List(fields.String(validate=validate.Length(max=80)))
    tags = fields.List(fields.String(validate=validate.Length(max=50)))

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> PostCreateIn:
        data["categories"] = tuple(data.get("categories") or ())
        data["tags"] = tuple(data.get("tags") or ())
        return PostCreateIn(**data)


class PostUpdateSchema(BaseSchema):
    """Partial update: omitted keys stay unchanged, ``""`` clears optional text."""

    title = fields.String(validate=validate.Length(min=1, max=200))
    content = fields.String(validate=validate.Length(min=1))
    slug = fields.String(validate=validate.Length(max=200))
    excerpt = fields.String()
    status = fields.String(validate=validate.OneOf(POST_STATUSES))
    featured_image = fields.String(data_key="featuredImage", validate=validate.Length(max=255))
    meta_description = fields.String(
        data_key="metaDescription", validate=validate.Length(max=300)
    )
    meta_keywords = fields.String(data_key="metaKeywords", validate=validate.Length(max=300))
    categories = fields.List(fields.String(validate=validate.Length(max=80)))
    tags = fields.List(fields.String(validate=validate.Length(max=50)))

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> PostUpdateIn:
        for key in ("categories", "tags"):
            if key in data:
                data[key] = tuple(data[key])
        return PostUpdateIn(**data)


class PostListQuerySchema(PaginationQuerySchema):
    """Listing query string: paging plus conjunctive filters."""

    status = fields.String(load_default=None, validate=validate.OneOf(POST_STATUSES))
    search = fields.String(load_default=None, validate=validate.Length(max=200))
    category = fields.String(load_default=None, validate=validate.Length(max=80))
    tag = fields.String(load_default=None, validate=validate.Length(max=50))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **kwargs: Any) -> PostListIn:
        return PostListIn(**super().apply_defaults(data, **kwargs))
