from __future__ import annotations

from dataclasses import dataclass

from studiosite.models.blog import POST_DRAFT, POST_PUBLISHED
from studiosite.services._shared.base import BaseService


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_posts: int
    published_posts: int
    draft_posts: int
    total_users: int


class DashboardService(BaseService):
    """Counters shown on the admin dashboard."""

    def stats(self) -> DashboardStats:
        with self.ro_uow() as uow:
            return DashboardStats(
                total_posts=uow.posts.count(),
                published_posts=uow.posts.count(status=POST_PUBLISHED),
                draft_posts=uow.posts.count(status=POST_DRAFT),
                total_users=uow.users.count(),
            )
