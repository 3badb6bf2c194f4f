"""Unit tests for DashboardService."""

from __future__ import annotations

from studiosite.services.dashboard.service import DashboardService
from tests.factories.blog import BlogPostFactory
from tests.factories.user import UserFactory


def test_stats_counts_posts_by_status_and_users(session):
    UserFactory.create_batch(2)
    BlogPostFactory.create_batch(3, published=True)
    BlogPostFactory.create_batch(2)
    BlogPostFactory(status="archived")
    session.commit()

    stats = DashboardService().stats()

    assert stats.total_posts == 6
    assert stats.published_posts == 3
    assert stats.draft_posts == 2
    assert stats.total_users == 2
