"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from studiosite.models.base import utcnow
from studiosite.models.blog import (
    COMMENT_APPROVED,
    COMMENT_PENDING,
    POST_DRAFT,
    POST_PUBLISHED,
    BlogComment,
    BlogPost,
)
from studiosite.repositories.blog_post import BlogPostRepository

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

POST_FIXTURES: list[dict[str, Any]] = [
    {
        "slug": "designing-for-conversion",
        "title": "Designing for Conversion",
        "excerpt": "Small layout decisions that move visitors from reading to contacting.",
        "content": (
            "A landing page has one job. Every section should earn its place by "
            "answering a question the visitor already has: what you do, who it is "
            "for, and what happens after they reach out."
        ),
        "status": POST_PUBLISHED,
        "age_days": 30,
        "categories": ["Design"],
        "tags": ["ux", "landing-pages"],
    },
    {
        "slug": "a-practical-guide-to-core-web-vitals",
        "title": "A Practical Guide to Core Web Vitals",
        "excerpt": "Measure first, then fix the slowest paint.",
        "content": (
            "Largest Contentful Paint, layout shift and interaction latency are the "
            "numbers search engines watch. Start with field data, reproduce in the "
            "lab, and fix one bottleneck at a time."
        ),
        "status": POST_PUBLISHED,
        "age_days": 21,
        "categories": ["Development"],
        "tags": ["performance", "seo"],
    },
    {
        "slug": "brand-systems-that-scale",
        "title": "Brand Systems That Scale",
        "excerpt": "Tokens, not pixels.",
        "content": (
            "Design tokens give product and marketing a shared vocabulary for "
            "colour, spacing and type, so a rebrand becomes a config change."
        ),
        "status": POST_PUBLISHED,
        "age_days": 10,
        "categories": ["Design", "Branding"],
        "tags": ["design-systems"],
    },
    {
        "slug": "choosing-a-headless-cms",
        "title": "Choosing a Headless CMS",
        "excerpt": None,
        "content": (
            "Editors want previews, developers want typed content models. A short "
            "checklist for picking a CMS both sides can live with."
        ),
        "status": POST_DRAFT,
        "age_days": 2,
        "categories": ["Development"],
        "tags": ["cms"],
    },
]

COMMENT_FIXTURES: list[dict[str, str]] = [
    {
        "post_slug": "designing-for-conversion",
        "author_name": "Dana",
        "author_email": "dana@example.com",
        "content": "The section on form length was exactly what I needed.",
        "status": COMMENT_APPROVED,
    },
    {
        "post_slug": "a-practical-guide-to-core-web-vitals",
        "author_name": "Luis",
        "author_email": "luis@example.com",
        "content": "Any tips for measuring INP on single-page apps?",
        "status": COMMENT_PENDING,
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalars().first()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_posts(
    database: SQLAlchemy, *, author_id: int | None = None, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create sample posts with their categories and tags.

    Existing posts (matched by slug) are left untouched.
    """
    if verbose:
        LOGGER.info("Seeding blog posts...")
    session = _session(database)
    repo = BlogPostRepository(session=session)
    summary: dict[str, dict[str, int]] = {}
    now = utcnow()

    for fixture in POST_FIXTURES:
        stamp = now - timedelta(days=fixture["age_days"])
        defaults = {
            "title": fixture["title"],
            "excerpt": fixture["excerpt"],
            "content": fixture["content"],
            "status": fixture["status"],
            "author_id": author_id,
            "created_at": stamp,
            "updated_at": stamp,
            "published_at": stamp if fixture["status"] == POST_PUBLISHED else None,
        }
        post, created = _get_or_create(session, BlogPost, slug=fixture["slug"], defaults=defaults)
        if created:
            session.flush()
            repo.set_categories(post, fixture["categories"], flush=False)
            repo.set_tags(post, fixture["tags"])
        _touch(summary, "blog_posts", created)

    for fixture in COMMENT_FIXTURES:
        post = repo.get_by_slug(fixture["post_slug"])
        if post is None:
            continue
        _, created = _get_or_create(
            session,
            BlogComment,
            post_id=post.id,
            author_email=fixture["author_email"],
            defaults={
                "author_name": fixture["author_name"],
                "content": fixture["content"],
                "status": fixture["status"],
            },
        )
        _touch(summary, "blog_comments", created)

    session.commit()
    return summary


def run_all(
    database: SQLAlchemy, *, author_id: int | None = None, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Run all demo seeders."""
    if verbose:
        LOGGER.info("Running demo seed pipeline...")
    return seed_posts(database, author_id=author_id, verbose=verbose)


__all__ = ["seed_posts", "run_all", "POST_FIXTURES"]
