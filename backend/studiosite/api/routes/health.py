"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from studiosite.api.deps import json_response, timing
from studiosite.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application and database health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    finally:
        db.session.rollback()
    version = current_app.config.get("APP_VERSION", "dev")
    payload = {"status": "ok" if db_status == "ok" else "degraded", "db": db_status, "version": version}
    return json_response(
        {"success": db_status == "ok", "data": payload},
        status=200 if db_status == "ok" else 503,
    )
