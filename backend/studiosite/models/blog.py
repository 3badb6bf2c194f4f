"""Blog models: posts, their taxonomy (categories/tags) and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from studiosite.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

POST_DRAFT = "draft"
POST_PUBLISHED = "published"
POST_ARCHIVED = "archived"
POST_STATUSES = (POST_DRAFT, POST_PUBLISHED, POST_ARCHIVED)

COMMENT_PENDING = "pending"
COMMENT_APPROVED = "approved"
COMMENT_REJECTED = "rejected"
COMMENT_STATUSES = (COMMENT_PENDING, COMMENT_APPROVED, COMMENT_REJECTED)

PostStatus = Enum(*POST_STATUSES, name="post_status")
CommentStatus = Enum(*COMMENT_STATUSES, name="comment_status")


blog_post_categories = Table(
    "blog_post_categories",
    db.metadata,
    Column("post_id", ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

blog_post_tags = Table(
    "blog_post_tags",
    db.metadata,
    Column("post_id", ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Category(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Editorial category a post can be filed under."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(80), nullable=False)

    __table_args__ = (UniqueConstraint("name", name="uq_categories_name"),)


class Tag(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Free-form keyword attached to posts."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    __table_args__ = (UniqueConstraint("name", name="uq_tags_name"),)


class BlogPost(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Blog article.

    ``published_at`` is stamped by the service layer when the status moves
    into ``published`` and is never cleared afterwards. Listings order by
    ``coalesce(published_at, created_at)``.
    """

    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(PostStatus, nullable=False, default=POST_DRAFT)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    featured_image: Mapped[str | None] = mapped_column(String(255))
    meta_description: Mapped[str | None] = mapped_column(String(300))
    meta_keywords: Mapped[str | None] = mapped_column(String(300))

    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    __table_args__ = (
        UniqueConstraint("slug", name="uq_blog_posts_slug"),
        CheckConstraint("length(slug) > 0", name="slug_not_empty"),
        Index("ix_blog_posts_status", "status"),
    )

    # Relationships
    categories: Mapped[list[Category]] = relationship(
        "Category",
        secondary=blog_post_categories,
        lazy="selectin",
        order_by="Category.name",
    )
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary=blog_post_tags,
        lazy="selectin",
        order_by="Tag.name",
    )
    comments: Mapped[list[BlogComment]] = relationship(
        "BlogComment",
        back_populates="post",
        cascade="all, delete-orphan",
    )

    @property
    def category_names(self) -> list[str]:
        return [c.name for c in self.categories]

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags]

    @validates("title", "content")
    def _require_text(self, key: str, value: str) -> str:
        v = (value or "").strip()
        if not v:
            raise ValueError(f"{key.capitalize()} is required.")
        return v


class BlogComment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Reader comment awaiting or past moderation."""

    __tablename__ = "blog_comments"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_name: Mapped[str] = mapped_column(String(100), nullable=False)
    author_email: Mapped[str] = mapped_column(String(254), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(CommentStatus, nullable=False, default=COMMENT_PENDING)

    post: Mapped[BlogPost] = relationship("BlogPost", back_populates="comments")

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        if value not in COMMENT_STATUSES:
            raise ValueError(f"Status must be one of {', '.join(COMMENT_STATUSES)}.")
        return value
