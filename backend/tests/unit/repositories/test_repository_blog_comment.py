"""Unit tests for BlogCommentRepository."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from studiosite.repositories.blog_comment import BlogCommentRepository
from tests.factories.blog import BlogCommentFactory, BlogPostFactory

T0 = datetime(2024, 3, 1, tzinfo=UTC)


def test_list_for_post_is_newest_first_and_filters_status(session):
    repo = BlogCommentRepository()
    post = BlogPostFactory()
    older = BlogCommentFactory(post=post, status="approved", created_at=T0)
    newer = BlogCommentFactory(post=post, status="approved", created_at=T0 + timedelta(hours=1))
    BlogCommentFactory(post=post, status="pending", created_at=T0 + timedelta(hours=2))
    BlogCommentFactory(status="approved")  # another post

    approved = repo.list_for_post(post.id, status="approved")
    assert [c.id for c in approved] == [newer.id, older.id]
    assert len(repo.list_for_post(post.id)) == 3
