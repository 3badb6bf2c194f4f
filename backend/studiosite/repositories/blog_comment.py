"""Comment repository for reader comments and the moderation queue."""

from __future__ import annotations

from studiosite.models.blog import BlogComment
from studiosite.repositories.base import BaseRepository


class BlogCommentRepository(BaseRepository[BlogComment]):
    """Persistence-only repository for :class:`BlogComment`."""

    model = BlogComment

    def _sortable_fields(self):
        return {"created_at": BlogComment.created_at}

    def _filterable_fields(self):
        return {
            "post_id": BlogComment.post_id,
            "status": BlogComment.status,
        }

    def _updatable_fields(self) -> set[str]:
        return {"status"}

    def list_for_post(self, post_id: int, *, status: str | None = None) -> list[BlogComment]:
        """Comments of one post, newest first, optionally narrowed by status."""
        filters: dict[str, object] = {"post_id": post_id}
        if status:
            filters["status"] = status
        return self.list(filters=filters, sort=["-created_at"])
