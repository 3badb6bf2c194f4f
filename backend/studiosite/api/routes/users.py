"""User administration endpoints (admin only)."""

from __future__ import annotations

from flask import Blueprint

from studiosite.api.deps import load_json, no_content, ok, require_role, service_context, timing
from studiosite.models.user import ROLE_ADMIN
from studiosite.schemas import UserCreateSchema, UserSchema, UserUpdateSchema
from studiosite.services.identity.dto import UserCreateIn, UserUpdateIn
from studiosite.services.identity.service import IdentityService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()


@bp.get("")
@require_role(ROLE_ADMIN)
@timing
def list_users():
    service = IdentityService(ctx=service_context())
    return ok(user_list_schema.dump(service.list_users()))


@bp.post("")
@require_role(ROLE_ADMIN)
@timing
def create_user():
    """Provision a new user."""

    payload = load_json(user_create_schema)
    service = IdentityService(ctx=service_context())
    user = service.create(UserCreateIn(**payload))
    return ok(user_schema.dump(user), status=201)


@bp.get("/<int:user_id>")
@require_role(ROLE_ADMIN)
@timing
def get_user(user_id: int):
    service = IdentityService(ctx=service_context())
    return ok(user_schema.dump(service.get_user(user_id)))


@bp.patch("/<int:user_id>")
@require_role(ROLE_ADMIN)
@timing
def update_user(user_id: int):
    """Partially update a user; a ``password`` key resets the password."""

    payload = load_json(user_update_schema)
    service = IdentityService(ctx=service_context())
    user = service.update(user_id, UserUpdateIn(**payload))
    return ok(user_schema.dump(user))


@bp.delete("/<int:user_id>")
@require_role(ROLE_ADMIN)
@timing
def delete_user(user_id: int):
    service = IdentityService(ctx=service_context())
    service.delete(user_id)
    return no_content()
