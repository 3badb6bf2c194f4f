"""Reader comments and the moderation queue."""

from __future__ import annotations

from flask import Blueprint, current_app

from studiosite.api.deps import (
    load_json,
    load_query,
    no_content,
    ok,
    require_auth,
    service_context,
    timing,
)
from studiosite.core.extensions import limiter
from studiosite.schemas import (
    CommentCreateSchema,
    CommentQuerySchema,
    CommentSchema,
    CommentStatusSchema,
    PublicCommentSchema,
)
from studiosite.services.comments.dto import CommentCreateIn
from studiosite.services.comments.service import CommentService

bp = Blueprint("comments", __name__)

comment_create_schema = CommentCreateSchema()
comment_status_schema = CommentStatusSchema()
comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)
public_comment_schema = PublicCommentSchema()
public_comment_list_schema = PublicCommentSchema(many=True)

COMMENT_LIMIT_MESSAGE = "Too many comment submissions. Please try again later."


def _comment_rate_limit() -> str:
    return str(current_app.config.get("COMMENT_RATE_LIMIT", "10 per hour"))


@bp.get("/posts/<int:post_id>/comments")
@timing
def list_post_comments(post_id: int):
    """Approved comments of a post, newest first."""

    service = CommentService(ctx=service_context())
    return ok(public_comment_list_schema.dump(service.list_approved(post_id)))


@bp.post("/posts/<int:post_id>/comments")
@limiter.limit(_comment_rate_limit, error_message=COMMENT_LIMIT_MESSAGE)
@timing
def submit_comment(post_id: int):
    """Submit a comment; it stays hidden until approved."""

    payload = load_json(comment_create_schema)
    service = CommentService(ctx=service_context())
    comment = service.submit(CommentCreateIn(post_id=post_id, **payload))
    return ok(public_comment_schema.dump(comment), status=201)


@bp.get("/comments")
@require_auth
@timing
def moderation_queue():
    query = load_query(CommentQuerySchema())
    service = CommentService(ctx=service_context())
    return ok(comment_list_schema.dump(service.list(status=query["status"])))


@bp.patch("/comments/<int:comment_id>")
@require_auth
@timing
def moderate_comment(comment_id: int):
    payload = load_json(comment_status_schema)
    service = CommentService(ctx=service_context())
    return ok(comment_schema.dump(service.set_status(comment_id, payload["status"])))


@bp.delete("/comments/<int:comment_id>")
@require_auth
@timing
def delete_comment(comment_id: int):
    CommentService(ctx=service_context()).delete(comment_id)
    return no_content()
