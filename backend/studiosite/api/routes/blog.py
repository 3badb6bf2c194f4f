"""Blog post endpoints: public reads and authenticated editorial CRUD."""

from __future__ import annotations

from flask import Blueprint, current_app

from studiosite.api.deps import (
    load_json,
    load_query,
    media_store,
    no_content,
    ok,
    require_auth,
    service_context,
    timing,
)
from studiosite.api.etag import conditional
from studiosite.schemas import (
    LimitQuerySchema,
    PostCreateSchema,
    PostListQuerySchema,
    PostPageSchema,
    PostSchema,
    PostUpdateSchema,
)
from studiosite.services.blog.service import (
    DEFAULT_FEATURED_LIMIT,
    DEFAULT_RELATED_LIMIT,
    BlogPostService,
)

bp = Blueprint("blog", __name__)

post_schema = PostSchema()
post_list_schema = PostSchema(many=True)
post_page_schema = PostPageSchema()
post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema()


def _service(*, with_media: bool = False) -> BlogPostService:
    return BlogPostService(
        media_store=media_store() if with_media else None,
        max_page_size=int(current_app.config.get("BLOG_MAX_PAGE_SIZE", 100)),
        ctx=service_context(),
    )


# ------------------------------- Public reads --------------------------------


@bp.get("/posts")
@timing
def list_posts():
    """Filtered, paginated listing (newest first)."""

    query = load_query(
        PostListQuerySchema(
            default_limit=int(current_app.config.get("BLOG_DEFAULT_PAGE_SIZE", 10)),
            max_limit=int(current_app.config.get("BLOG_MAX_PAGE_SIZE", 100)),
        )
    )
    return ok(post_page_schema.dump(_service().list(query)))


@bp.get("/posts/<int:post_id>")
@timing
def get_post(post_id: int):
    post = _service().get(post_id)
    return conditional(ok(post_schema.dump(post)), post)


@bp.get("/posts/slug/<string:slug>")
@timing
def get_post_by_slug(slug: str):
    post = _service().get_by_slug(slug)
    return conditional(ok(post_schema.dump(post)), post)


@bp.get("/posts/related/<string:slug>")
@timing
def related_posts(slug: str):
    query = load_query(LimitQuerySchema(default_limit=DEFAULT_RELATED_LIMIT, max_limit=10))
    return ok(post_list_schema.dump(_service().related(slug, query["limit"])))


@bp.get("/featured")
@timing
def featured_posts():
    query = load_query(LimitQuerySchema(default_limit=DEFAULT_FEATURED_LIMIT, max_limit=20))
    return ok(post_list_schema.dump(_service().featured(query["limit"])))


@bp.get("/categories")
@timing
def categories():
    return ok(_service().categories())


@bp.get("/tags")
@timing
def tags():
    return ok(_service().tags())


# ---------------------------- Editorial (auth) -------------------------------


@bp.post("/posts")
@require_auth
@timing
def create_post():
    """Create a post authored by the caller."""

    dto = load_json(post_create_schema)
    return ok(post_schema.dump(_service().create(dto)), status=201)


@bp.put("/posts/<int:post_id>")
@require_auth
@timing
def update_post(post_id: int):
    """Partially update a post; omitted keys stay unchanged."""

    dto = load_json(post_update_schema)
    return ok(post_schema.dump(_service().update(post_id, dto)))


@bp.delete("/posts/<int:post_id>")
@require_auth
@timing
def delete_post(post_id: int):
    _service(with_media=True).delete(post_id)
    return no_content()
