"""
BlogPostService
===============

Editorial lifecycle of blog posts:

- slug derivation and collision resolution,
- ``published_at`` stamping on the transition into ``published``,
- taxonomy (categories/tags) replacement,
- public listings (filtered page, featured, related, taxonomy names),
- featured-image cleanup through the :class:`MediaStore` port on delete.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from studiosite.models.base import utcnow
from studiosite.models.blog import POST_PUBLISHED, POST_STATUSES, BlogPost
from studiosite.repositories.blog_post import BlogPostRepository
from studiosite.services._shared.base import BaseService, ServiceContext
from studiosite.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    violates,
)
from studiosite.services._shared.ports.media_store import MediaStore
from studiosite.services.blog.dto import (
    PostCreateIn,
    PostListIn,
    PostOut,
    PostPageOut,
    PostUpdateIn,
)
from studiosite.services.blog.slugs import slugify, unique_slug

log = logging.getLogger(__name__)

DEFAULT_FEATURED_LIMIT = 5
DEFAULT_RELATED_LIMIT = 3
MAX_PAGE_SIZE = 100

_OPTIONAL_TEXT = ("excerpt", "featured_image", "meta_description", "meta_keywords")


def to_post_out(post: BlogPost) -> PostOut:
    return PostOut(
        id=post.id,
        title=post.title,
        slug=post.slug,
        content=post.content,
        excerpt=post.excerpt,
        status=post.status,
        published_at=post.published_at,
        created_at=post.created_at,
        updated_at=post.updated_at,
        featured_image=post.featured_image,
        meta_description=post.meta_description,
        meta_keywords=post.meta_keywords,
        author_id=post.author_id,
        view_count=post.view_count or 0,
        likes=post.likes or 0,
        categories=post.category_names,
        tags=post.tag_names,
    )


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _check_status(status: str) -> None:
    if status not in POST_STATUSES:
        raise ValidationError(
            f"Status must be one of {', '.join(POST_STATUSES)}.",
            fields={"status": ["Invalid status."]},
        )


class BlogPostService(BaseService):
    """
    Application service for the `BlogPost` aggregate.

    Notes
    -----
    - The author of a new post is the acting user from the context.
    - Media cleanup is best effort: storage failures are logged and never
      undo a committed delete.
    """

    def __init__(
        self,
        *,
        media_store: MediaStore | None = None,
        max_page_size: int = MAX_PAGE_SIZE,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.media_store = media_store
        self.max_page_size = max_page_size

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def create(self, dto: PostCreateIn) -> PostOut:
        """
        Create a post.

        The slug comes from ``dto.slug`` when given, otherwise from the
        title, and is suffixed ``-1``, ``-2``... on collision.
        ``published_at`` is stamped only when created as ``published``.

        :raises ValidationError: On an unknown status or blank title/content.
        :raises ConflictError: If a concurrent writer grabbed the slug.
        """
        _check_status(dto.status)
        with self.rw_uow() as uow:
            repo: BlogPostRepository = uow.posts
            base = slugify(_blank_to_none(dto.slug) or dto.title)
            try:
                post = BlogPost(
                    title=dto.title,
                    slug=unique_slug(base, repo.slugs_with_prefix(base)),
                    content=dto.content,
                    excerpt=_blank_to_none(dto.excerpt),
                    status=dto.status,
                    featured_image=_blank_to_none(dto.featured_image),
                    meta_description=_blank_to_none(dto.meta_description),
                    meta_keywords=_blank_to_none(dto.meta_keywords),
                    author_id=self.ctx.actor_id,
                )
                if dto.status == POST_PUBLISHED:
                    post.published_at = utcnow()
                repo.add(post)
                repo.set_categories(post, dto.categories, flush=False)
                repo.set_tags(post, dto.tags)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_blog_posts_slug"):
                    raise ConflictError("BlogPost", "slug already exists") from exc
                raise

            log.info("blog.post.created", extra={"post_id": post.id, "user_id": self.ctx.actor_id})
            return to_post_out(post)

    def update(self, post_id: int, dto: PostUpdateIn) -> PostOut:
        """
        Apply a partial update.

        - The slug is regenerated only when the title changes, or when an
          explicit slug is supplied.
        - Moving into ``published`` stamps ``published_at``; it is never
          cleared by later transitions.
        - ``updated_at`` is bumped even when only taxonomy changed.

        :raises NotFoundError: If the post does not exist.
        :raises ValidationError: On an unknown status or blank title/content.
        """
        if dto.status is not None:
            _check_status(dto.status)

        with self.rw_uow() as uow:
            repo: BlogPostRepository = uow.posts
            post = repo.get(post_id)
            if post is None:
                raise NotFoundError("BlogPost", post_id)

            fields: dict[str, object] = {}
            if dto.title is not None:
                fields["title"] = dto.title
            if dto.content is not None:
                fields["content"] = dto.content
            for name in _OPTIONAL_TEXT:
                value = getattr(dto, name)
                if value is not None:
                    fields[name] = _blank_to_none(value)

            slug_source = _blank_to_none(dto.slug)
            if slug_source is None and dto.title is not None and dto.title.strip() != post.title:
                slug_source = dto.title
            if slug_source is not None:
                base = slugify(slug_source)
                taken = repo.slugs_with_prefix(base, exclude_id=post.id)
                fields["slug"] = unique_slug(base, taken)

            if dto.status is not None:
                if dto.status == POST_PUBLISHED and post.status != POST_PUBLISHED:
                    fields["published_at"] = utcnow()
                fields["status"] = dto.status

            try:
                repo.assign_updates(post, fields, flush=False)
                if dto.categories is not None:
                    repo.set_categories(post, dto.categories, flush=False)
                if dto.tags is not None:
                    repo.set_tags(post, dto.tags, flush=False)
                post.updated_at = utcnow()
                repo.flush()
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_blog_posts_slug"):
                    raise ConflictError("BlogPost", "slug already exists") from exc
                raise

            return to_post_out(post)

    def delete(self, post_id: int) -> None:
        """
        Delete a post together with its comments, then drop its featured
        image from the media store when no other post references it.

        :raises NotFoundError: If the post does not exist.
        """
        with self.rw_uow() as uow:
            repo: BlogPostRepository = uow.posts
            post = repo.get(post_id)
            if post is None:
                raise NotFoundError("BlogPost", post_id)
            image = post.featured_image
            repo.delete(post)
            orphaned = bool(image) and image not in repo.featured_images()

        log.info("blog.post.deleted", extra={"post_id": post_id, "user_id": self.ctx.actor_id})
        if orphaned and self.media_store is not None:
            self._discard_image(image)

    def _discard_image(self, reference: str) -> None:
        try:
            removed = self.media_store.delete(reference)
        except OSError:
            log.exception("blog.media.delete_failed", extra={"path": reference})
            return
        if removed:
            log.info("blog.media.deleted", extra={"path": reference})

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get(self, post_id: int) -> PostOut:
        """:raises NotFoundError: If the post does not exist."""
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("BlogPost", post_id)
            return to_post_out(post)

    def get_by_slug(self, slug: str) -> PostOut:
        """:raises NotFoundError: If no post carries ``slug``."""
        with self.ro_uow() as uow:
            post = uow.posts.get_by_slug(slug)
            if post is None:
                raise NotFoundError("BlogPost", slug)
            return to_post_out(post)

    def list(self, dto: PostListIn) -> PostPageOut:
        """
        Filtered, newest-first page of posts.

        ``limit`` is clamped to ``[1, max_page_size]``; a page past the end
        returns no posts with the full filtered ``total``.
        """
        pagination = self.ensure_pagination(
            page=dto.page, limit=dto.limit, max_limit=self.max_page_size
        )
        with self.ro_uow() as uow:
            page = uow.posts.search(
                pagination,
                status=_blank_to_none(dto.status),
                search=_blank_to_none(dto.search),
                category=_blank_to_none(dto.category),
                tag=_blank_to_none(dto.tag),
            )
            return PostPageOut(
                posts=[to_post_out(p) for p in page.items],
                total=page.total,
                page=page.page,
                limit=page.limit,
            )

    def featured(self, limit: int = DEFAULT_FEATURED_LIMIT) -> list[PostOut]:
        """Most recent published posts, at most ``limit``."""
        limit = min(max(int(limit), 1), self.max_page_size)
        with self.ro_uow() as uow:
            return [to_post_out(p) for p in uow.posts.newest_published(limit=limit)]

    def related(self, slug: str, limit: int = DEFAULT_RELATED_LIMIT) -> list[PostOut]:
        """
        Other published posts, most recent first.

        :raises NotFoundError: If ``slug`` is unknown.
        """
        with self.ro_uow() as uow:
            post = uow.posts.get_by_slug(slug)
            if post is None:
                raise NotFoundError("BlogPost", slug)
            rows = uow.posts.newest_published(limit=max(int(limit), 0), exclude_id=post.id)
            return [to_post_out(p) for p in rows]

    def categories(self) -> list[str]:
        with self.ro_uow() as uow:
            return uow.posts.category_names()

    def tags(self) -> list[str]:
        with self.ro_uow() as uow:
            return uow.posts.tag_names()
