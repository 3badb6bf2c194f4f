"""Unit tests for blog models and their relationships."""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from studiosite.models.blog import BlogComment, BlogPost
from tests.factories.blog import BlogCommentFactory, BlogPostFactory


class TestBlogPostModel:
    def test_title_and_content_are_required(self):
        with pytest.raises(ValueError):
            BlogPost(title="  ", slug="x", content="body")
        with pytest.raises(ValueError):
            BlogPost(title="Title", slug="x", content="")

    def test_defaults(self, session):
        post = BlogPostFactory()
        session.commit()
        assert post.status == "draft"
        assert post.published_at is None
        assert post.view_count == 0
        assert post.likes == 0
        assert post.categories == []
        assert post.tags == []

    def test_slug_is_unique(self, session):
        BlogPostFactory(slug="same")
        with pytest.raises(IntegrityError):
            BlogPostFactory(slug="same")
        session.rollback()

    def test_deleting_post_removes_its_comments(self, session):
        comment = BlogCommentFactory()
        post = comment.post
        post_id = post.id
        session.commit()

        session.delete(post)
        session.commit()

        remaining = session.execute(
            select(BlogComment).where(BlogComment.post_id == post_id)
        ).scalars().all()
        assert remaining == []


class TestBlogCommentModel:
    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValueError):
            BlogComment(post_id=1, author_name="A", author_email="a@example.com",
                        content="hi", status="spam")

    def test_defaults_to_pending(self, session):
        comment = BlogCommentFactory()
        assert comment.status == "pending"
        assert comment.post.comments == [comment]
