from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from studiosite.models.blog import POST_DRAFT

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO to create a blog post.

    :param title: Post title (required).
    :param content: Body, stored as-is (required).
    :param slug: Optional explicit slug; normalized and de-duplicated.
    :param status: ``draft`` (default), ``published`` or ``archived``.
    :param categories: Category names.
    :param tags: Tag names.
    """

    title: str
    content: str
    slug: str | None = None
    excerpt: str | None = None
    status: str = POST_DRAFT
    featured_image: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """
    Partial update for a blog post.

    ``None`` leaves a field unchanged. For optional text fields an empty
    string clears the stored value. ``categories``/``tags`` replace the whole
    set when given.
    """

    title: str | None = None
    content: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    status: str | None = None
    featured_image: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    categories: tuple[str, ...] | None = None
    tags: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class PostListIn:
    """
    Listing query. Blank filters are ignored; filters combine with AND.

    :param page: 1-based page number.
    :param limit: Page size, capped by the service.
    """

    page: int = 1
    limit: int = 10
    status: str | None = None
    search: str | None = None
    category: str | None = None
    tag: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class PostOut:
    id: int
    title: str
    slug: str
    content: str
    excerpt: str | None
    status: str
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    featured_image: str | None
    meta_description: str | None
    meta_keywords: str | None
    author_id: int | None
    view_count: int
    likes: int
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PostPageOut:
    """One slice of a filtered listing plus the filtered total."""

    posts: list[PostOut]
    total: int
    page: int
    limit: int
