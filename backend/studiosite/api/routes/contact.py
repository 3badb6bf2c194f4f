"""Contact form intake."""

from __future__ import annotations

from flask import Blueprint, current_app

from studiosite.api.deps import load_json, ok, require_auth, service_context, timing
from studiosite.core.extensions import limiter
from studiosite.schemas import ContactCreateSchema, ContactSchema
from studiosite.services.contact.dto import ContactIn
from studiosite.services.contact.service import ContactService

bp = Blueprint("contact", __name__)

contact_create_schema = ContactCreateSchema()
contact_schema = ContactSchema()
contact_list_schema = ContactSchema(many=True)

CONTACT_LIMIT_MESSAGE = "Too many contact form submissions. Please try again later."


def _contact_rate_limit() -> str:
    return str(current_app.config.get("CONTACT_RATE_LIMIT", "3 per hour"))


@bp.post("")
@limiter.limit(_contact_rate_limit, error_message=CONTACT_LIMIT_MESSAGE)
@timing
def submit():
    payload = load_json(contact_create_schema)
    submission = ContactService().submit(ContactIn(**payload))
    return ok(contact_schema.dump(submission), status=201)


@bp.get("")
@require_auth
@timing
def list_submissions():
    """All submissions, newest first (admins only)."""

    service = ContactService(ctx=service_context())
    return ok(contact_list_schema.dump(service.list_submissions()))
