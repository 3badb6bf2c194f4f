"""Convenience exports for application schemas."""

from __future__ import annotations

from .admin import StatsSchema
from .auth import AccessTokenSchema, LoginSchema, RefreshSchema, TokenPairSchema
from .blog import (
    PostCreateSchema,
    PostListQuerySchema,
    PostPageSchema,
    PostSchema,
    PostUpdateSchema,
)
from .comment import (
    CommentCreateSchema,
    CommentQuerySchema,
    CommentSchema,
    CommentStatusSchema,
    PublicCommentSchema,
)
from .common import LimitQuerySchema, PaginationQuerySchema, lenient_load
from .contact import ContactCreateSchema, ContactSchema
from .user import UserCreateSchema, UserSchema, UserUpdateSchema

__all__ = [
    "AccessTokenSchema",
    "CommentCreateSchema",
    "CommentQuerySchema",
    "CommentSchema",
    "CommentStatusSchema",
    "ContactCreateSchema",
    "ContactSchema",
    "LimitQuerySchema",
    "LoginSchema",
    "PaginationQuerySchema",
    "PostCreateSchema",
    "PostListQuerySchema",
    "PostPageSchema",
    "PostSchema",
    "PostUpdateSchema",
    "PublicCommentSchema",
    "RefreshSchema",
    "StatsSchema",
    "TokenPairSchema",
    "UserCreateSchema",
    "UserSchema",
    "UserUpdateSchema",
    "lenient_load",
]
