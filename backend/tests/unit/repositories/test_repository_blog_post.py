"""Unit tests for BlogPostRepository: filters, ordering, paging and taxonomy."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from studiosite.repositories.base import Pagination
from studiosite.repositories.blog_post import BlogPostRepository
from tests.factories.blog import BlogPostFactory
from tests.factories.user import UserFactory

BASE = datetime(2024, 1, 1, tzinfo=UTC)


def _at(days: int) -> datetime:
    return BASE + timedelta(days=days)


class TestBlogPostRepository:
    @pytest.fixture()
    def repo(self):
        return BlogPostRepository()

    def test_get_by_slug(self, repo, session):
        post = BlogPostFactory(slug="hello-world")
        assert repo.get_by_slug("hello-world").id == post.id
        assert repo.get_by_slug("missing") is None

    def test_slugs_with_prefix_matches_base_and_numbered_variants(self, repo, session):
        BlogPostFactory(slug="hello")
        BlogPostFactory(slug="hello-1")
        BlogPostFactory(slug="hello-world")
        BlogPostFactory(slug="hellothere")
        own = BlogPostFactory(slug="hello-2")

        assert repo.slugs_with_prefix("hello") == {"hello", "hello-1", "hello-2", "hello-world"}
        assert "hello-2" not in repo.slugs_with_prefix("hello", exclude_id=own.id)

    def test_slug_exists_honours_exclusion(self, repo, session):
        post = BlogPostFactory(slug="taken")
        assert repo.slug_exists("taken")
        assert not repo.slug_exists("taken", exclude_id=post.id)

    def test_search_orders_by_effective_date_newest_first(self, repo, session):
        old_published = BlogPostFactory(
            slug="a", status="published", published_at=_at(1), created_at=_at(10)
        )
        draft = BlogPostFactory(slug="b", created_at=_at(5))
        new_published = BlogPostFactory(
            slug="c", status="published", published_at=_at(7), created_at=_at(0)
        )

        page = repo.search(Pagination(page=1, limit=10))

        assert [p.id for p in page.items] == [new_published.id, draft.id, old_published.id]
        assert page.total == 3

    def test_equal_dates_keep_insertion_order(self, repo, session):
        first = BlogPostFactory(slug="x1", created_at=_at(3))
        second = BlogPostFactory(slug="x2", created_at=_at(3))

        page = repo.search(Pagination(page=1, limit=10))
        assert [p.id for p in page.items] == [first.id, second.id]

    def test_pages_partition_the_filtered_set(self, repo, session):
        for day in range(5):
            BlogPostFactory(created_at=_at(day))

        pages = [repo.search(Pagination(page=n, limit=2)) for n in (1, 2, 3)]

        assert [len(p.items) for p in pages] == [2, 2, 1]
        assert all(p.total == 5 for p in pages)
        ids = [post.id for p in pages for post in p.items]
        assert len(set(ids)) == 5

    def test_page_past_the_end_is_empty(self, repo, session):
        BlogPostFactory()
        page = repo.search(Pagination(page=9, limit=10))
        assert page.items == []
        assert page.total == 1

    def test_filters_combine_conjunctively(self, repo, session):
        match = BlogPostFactory(title="Design systems", status="published", published_at=_at(1))
        repo.set_categories(match, ["Design"])
        repo.set_tags(match, ["ui"])
        wrong_tag = BlogPostFactory(title="Design tokens", status="published", published_at=_at(2))
        repo.set_categories(wrong_tag, ["Design"])
        repo.set_tags(wrong_tag, ["css"])
        draft = BlogPostFactory(title="Design drafts")
        repo.set_categories(draft, ["Design"])
        repo.set_tags(draft, ["ui"])

        page = repo.search(
            Pagination(page=1, limit=10),
            status="published",
            search="design",
            category="Design",
            tag="ui",
        )
        assert [p.id for p in page.items] == [match.id]
        assert page.total == 1

    def test_search_is_case_insensitive_over_title_content_and_excerpt(self, repo, session):
        by_title = BlogPostFactory(title="All about Python", content="body")
        by_content = BlogPostFactory(title="Other", content="we love PYTHON here")
        by_excerpt = BlogPostFactory(title="Third", content="body", excerpt="python tips")
        BlogPostFactory(title="Unrelated", content="body")

        page = repo.search(Pagination(page=1, limit=10), search="python")
        assert {p.id for p in page.items} == {by_title.id, by_content.id, by_excerpt.id}

    def test_search_escapes_like_wildcards(self, repo, session):
        BlogPostFactory(title="100% organic")
        BlogPostFactory(title="1000 reasons")

        page = repo.search(Pagination(page=1, limit=10), search="100%")
        assert page.total == 1

    def test_newest_published_excludes_drafts_and_given_post(self, repo, session):
        a = BlogPostFactory(published=True, published_at=_at(1))
        b = BlogPostFactory(published=True, published_at=_at(2))
        BlogPostFactory()

        assert [p.id for p in repo.newest_published(limit=5)] == [b.id, a.id]
        assert [p.id for p in repo.newest_published(limit=5, exclude_id=b.id)] == [a.id]
        assert len(repo.newest_published(limit=1)) == 1

    def test_taxonomy_names_are_distinct_and_sorted(self, repo, session):
        p1 = BlogPostFactory()
        p2 = BlogPostFactory()
        repo.set_categories(p1, ["Web", "Design", " Design ", ""])
        repo.set_categories(p2, ["Design"])
        repo.set_tags(p1, ["b", "a"])

        assert sorted(p1.category_names) == ["Design", "Web"]
        assert repo.category_names() == ["Design", "Web"]
        assert repo.tag_names() == ["a", "b"]

    def test_detach_author(self, repo, session):
        author = UserFactory()
        post = BlogPostFactory(author_id=author.id)

        assert repo.detach_author(author.id) == 1
        session.expire_all()
        assert repo.get(post.id).author_id is None

    def test_featured_images(self, repo, session):
        BlogPostFactory(featured_image="/uploads/a.png")
        BlogPostFactory(featured_image="/uploads/a.png")
        BlogPostFactory(featured_image=None)

        assert repo.featured_images() == {"/uploads/a.png"}
