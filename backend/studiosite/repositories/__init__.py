"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from studiosite.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from studiosite.repositories.blog_comment import BlogCommentRepository
from studiosite.repositories.blog_post import BlogPostRepository
from studiosite.repositories.contact import ContactSubmissionRepository
from studiosite.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    "apply_sorting",
    # Domain
    "BlogCommentRepository",
    "BlogPostRepository",
    "ContactSubmissionRepository",
    "UserRepository",
]
