"""Admin dashboard schemas."""

from __future__ import annotations

from marshmallow import fields

from .common import BaseSchema


class StatsSchema(BaseSchema):
    total_posts = fields.Integer(required=True, data_key="totalPosts")
    published_posts = fields.Integer(required=True, data_key="publishedPosts")
    draft_posts = fields.Integer(required=True, data_key="draftPosts")
    total_users = fields.Integer(required=True, data_key="totalUsers")
