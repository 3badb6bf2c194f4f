"""Blog post repository: storage, taxonomy links and the listing query."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, cast

from sqlalchemy import ColumnElement, Select, func, or_, select, update

from studiosite.models.blog import (
    POST_PUBLISHED,
    BlogPost,
    Category,
    Tag,
    blog_post_categories,
    blog_post_tags,
)
from studiosite.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    Sortable,
    apply_sorting,
    paginate_select,
)

#: Most-recent-first ordering used by every public listing
NEWEST_FIRST = ["-effective_date"]


def effective_date() -> ColumnElement[Any]:
    """``published_at`` when set, otherwise ``created_at``."""
    return func.coalesce(BlogPost.published_at, BlogPost.created_at)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _like_pattern(term: str) -> str:
    return f"%{_escape_like(term)}%"


class BlogPostRepository(BaseRepository[BlogPost]):
    """Persistence-only repository for :class:`BlogPost`.

    Slug generation and ``published_at`` stamping are service concerns; this
    class only answers questions about stored rows and mutates what it is
    told to.
    """

    model = BlogPost

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self) -> Mapping[str, Sortable]:
        return {
            "effective_date": effective_date(),
            "created_at": BlogPost.created_at,
            "updated_at": BlogPost.updated_at,
            "title": BlogPost.title,
        }

    def _filterable_fields(self):
        return {
            "status": BlogPost.status,
            "slug": BlogPost.slug,
            "author_id": BlogPost.author_id,
        }

    def _updatable_fields(self) -> set[str]:
        return {
            "title",
            "slug",
            "content",
            "excerpt",
            "status",
            "published_at",
            "featured_image",
            "meta_description",
            "meta_keywords",
        }

    # ---------------------------- Lookups ----------------------------

    def get_by_slug(self, slug: str) -> BlogPost | None:
        stmt = select(BlogPost).where(BlogPost.slug == slug)
        return cast(BlogPost | None, self.session.execute(stmt).scalars().first())

    def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when ``slug`` is taken by a post other than ``exclude_id``."""
        stmt = select(BlogPost.id).where(BlogPost.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(BlogPost.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def slugs_with_prefix(self, base: str, *, exclude_id: int | None = None) -> set[str]:
        """Return every stored slug equal to ``base`` or shaped ``base-<n>``."""
        stmt = select(BlogPost.slug).where(
            or_(BlogPost.slug == base, BlogPost.slug.like(f"{_escape_like(base)}-%", escape="\\"))
        )
        if exclude_id is not None:
            stmt = stmt.where(BlogPost.id != exclude_id)
        return set(self.session.execute(stmt).scalars().all())

    # ---------------------------- Listing ----------------------------

    def filtered(
        self,
        *,
        status: str | None = None,
        search: str | None = None,
        category: str | None = None,
        tag: str | None = None,
    ) -> Select[Any]:
        """Build a conjunctive filter over posts.

        :param status: Exact status match.
        :param search: Case-insensitive substring over title, content and
            excerpt.
        :param category: Post must be filed under this category name.
        :param tag: Post must carry this tag name.
        """
        stmt: Select[Any] = select(BlogPost)
        if status:
            stmt = stmt.where(BlogPost.status == status)
        if search:
            pattern = _like_pattern(search)
            stmt = stmt.where(
                or_(
                    BlogPost.title.ilike(pattern, escape="\\"),
                    BlogPost.content.ilike(pattern, escape="\\"),
                    BlogPost.excerpt.ilike(pattern, escape="\\"),
                )
            )
        if category:
            stmt = stmt.where(BlogPost.categories.any(Category.name == category))
        if tag:
            stmt = stmt.where(BlogPost.tags.any(Tag.name == tag))
        return stmt

    def search(
        self,
        pagination: Pagination,
        *,
        status: str | None = None,
        search: str | None = None,
        category: str | None = None,
        tag: str | None = None,
    ) -> Page[BlogPost]:
        """Filter, order newest-first and slice.

        ``total`` is the filtered count before slicing; ties on the effective
        date keep insertion order.
        """
        stmt = self.filtered(status=status, search=search, category=category, tag=tag)
        stmt = apply_sorting(
            stmt,
            self._sortable_fields(),
            pagination.sort or NEWEST_FIRST,
            pk_attr=self._pk_attr(),
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)

    def newest_published(self, *, limit: int, exclude_id: int | None = None) -> list[BlogPost]:
        """Published posts, most recent first, at most ``limit`` rows."""
        stmt = self.filtered(status=POST_PUBLISHED)
        if exclude_id is not None:
            stmt = stmt.where(BlogPost.id != exclude_id)
        stmt = apply_sorting(stmt, self._sortable_fields(), NEWEST_FIRST, pk_attr=self._pk_attr())
        return list(self.session.execute(stmt.limit(max(int(limit), 0))).scalars().all())

    def detach_author(self, author_id: int) -> int:
        """Clear ``author_id`` on every post written by ``author_id``."""
        result = self.session.execute(
            update(BlogPost).where(BlogPost.author_id == author_id).values(author_id=None)
        )
        return int(result.rowcount or 0)

    def featured_images(self) -> set[str]:
        """Every non-empty ``featured_image`` reference currently stored."""
        stmt = select(BlogPost.featured_image).where(BlogPost.featured_image.is_not(None))
        return {ref for ref in self.session.execute(stmt).scalars().all() if ref}

    # ---------------------------- Taxonomy ----------------------------

    def category_names(self) -> list[str]:
        """Distinct category names attached to at least one post, sorted."""
        stmt = (
            select(Category.name)
            .join(blog_post_categories, blog_post_categories.c.category_id == Category.id)
            .distinct()
            .order_by(Category.name)
        )
        return list(self.session.execute(stmt).scalars().all())

    def tag_names(self) -> list[str]:
        """Distinct tag names attached to at least one post, sorted."""
        stmt = (
            select(Tag.name)
            .join(blog_post_tags, blog_post_tags.c.tag_id == Tag.id)
            .distinct()
            .order_by(Tag.name)
        )
        return list(self.session.execute(stmt).scalars().all())

    def set_categories(self, post: BlogPost, names: Iterable[str], *, flush: bool = True) -> None:
        """Replace the post's categories with ``names`` (created on demand)."""
        post.categories = [self._ensure(Category, name) for name in _clean_names(names)]
        if flush:
            self.flush()

    def set_tags(self, post: BlogPost, names: Iterable[str], *, flush: bool = True) -> None:
        """Replace the post's tags with ``names`` (created on demand)."""
        post.tags = [self._ensure(Tag, name) for name in _clean_names(names)]
        if flush:
            self.flush()

    def _ensure(self, model: type[Category] | type[Tag], name: str) -> Any:
        stmt = select(model).where(model.name == name)
        row = self.session.execute(stmt).scalars().first()
        if row is None:
            row = model(name=name)
            self.session.add(row)
            self.session.flush()
        return row


def _clean_names(names: Iterable[str]) -> list[str]:
    """Trim, drop blanks and de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        cleaned = (name or "").strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)
