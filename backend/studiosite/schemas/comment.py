"""Comment schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from studiosite.models.blog import COMMENT_STATUSES

from .common import BaseSchema


class CommentCreateSchema(BaseSchema):
    author_name = fields.String(
        required=True, data_key="authorName", validate=validate.Length(min=1, max=100)
    )
    author_email = fields.Email(
        required=True, data_key="authorEmail", validate=validate.Length(max=254)
    )
    content = fields.String(required=True, validate=validate.Length(min=1, max=5000))


class CommentStatusSchema(BaseSchema):
    status = fields.String(required=True, validate=validate.OneOf(COMMENT_STATUSES))


class PublicCommentSchema(BaseSchema):
    """Comment as shown to readers (no email)."""

    id = fields.Integer(required=True)
    post_id = fields.Integer(required=True, data_key="postId")
    author_name = fields.String(required=True, data_key="authorName")
    content = fields.String(required=True)
    status = fields.String(required=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")


class CommentSchema(PublicCommentSchema):
    """Comment as shown to moderators."""

    author_email = fields.Email(required=True, data_key="authorEmail")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")


class CommentQuerySchema(BaseSchema):
    """Moderation queue filter."""

    status = fields.String(load_default=None, validate=validate.OneOf(COMMENT_STATUSES))
