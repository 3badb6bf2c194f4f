from __future__ import annotations

import logging

from studiosite.models.blog import COMMENT_APPROVED, COMMENT_PENDING, COMMENT_STATUSES, BlogComment
from studiosite.services._shared.base import BaseService
from studiosite.services._shared.errors import NotFoundError, ValidationError
from studiosite.services.comments.dto import CommentCreateIn, CommentOut

log = logging.getLogger(__name__)


def to_comment_out(comment: BlogComment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        post_id=comment.post_id,
        author_name=comment.author_name,
        author_email=comment.author_email,
        content=comment.content,
        status=comment.status,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentService(BaseService):
    """
    Reader comments and their moderation.

    New comments always start ``pending``; only ``approved`` ones are listed
    publicly.
    """

    def submit(self, dto: CommentCreateIn) -> CommentOut:
        """
        Store a public comment awaiting moderation.

        :raises NotFoundError: If the post does not exist.
        """
        with self.rw_uow() as uow:
            if uow.posts.get(dto.post_id) is None:
                raise NotFoundError("BlogPost", dto.post_id)
            comment = BlogComment(
                post_id=dto.post_id,
                author_name=dto.author_name.strip(),
                author_email=dto.author_email.strip().lower(),
                content=dto.content.strip(),
                status=COMMENT_PENDING,
            )
            uow.comments.add(comment)
            log.info("blog.comment.submitted", extra={"post_id": dto.post_id})
            return to_comment_out(comment)

    def list_approved(self, post_id: int) -> list[CommentOut]:
        """
        Approved comments of a post, newest first.

        :raises NotFoundError: If the post does not exist.
        """
        with self.ro_uow() as uow:
            if uow.posts.get(post_id) is None:
                raise NotFoundError("BlogPost", post_id)
            rows = uow.comments.list_for_post(post_id, status=COMMENT_APPROVED)
            return [to_comment_out(c) for c in rows]

    def list(self, *, status: str | None = None) -> list[CommentOut]:
        """Moderation queue across all posts, newest first."""
        if status is not None and status not in COMMENT_STATUSES:
            raise ValidationError(
                f"Status must be one of {', '.join(COMMENT_STATUSES)}.",
                fields={"status": ["Invalid status."]},
            )
        filters = {"status": status} if status else None
        with self.ro_uow() as uow:
            return [to_comment_out(c) for c in uow.comments.list(filters=filters, sort=["-created_at"])]

    def set_status(self, comment_id: int, status: str) -> CommentOut:
        """
        Move a comment to ``status``.

        :raises NotFoundError: If the comment does not exist.
        :raises ValidationError: On an unknown status.
        """
        with self.rw_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("BlogComment", comment_id)
            try:
                uow.comments.assign_updates(comment, {"status": status})
            except ValueError as exc:
                raise ValidationError(str(exc), fields={"status": [str(exc)]}) from exc
            log.info(
                "blog.comment.moderated",
                extra={"post_id": comment.post_id, "user_id": self.ctx.actor_id},
            )
            return to_comment_out(comment)

    def delete(self, comment_id: int) -> None:
        """:raises NotFoundError: If the comment does not exist."""
        with self.rw_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("BlogComment", comment_id)
            uow.comments.delete(comment)
