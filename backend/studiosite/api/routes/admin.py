"""Admin dashboard endpoints."""

from __future__ import annotations

from flask import Blueprint

from studiosite.api.deps import ok, require_auth, service_context, timing
from studiosite.schemas import StatsSchema
from studiosite.services.dashboard.service import DashboardService

bp = Blueprint("admin", __name__)

stats_schema = StatsSchema()


@bp.get("/stats")
@require_auth
@timing
def stats():
    service = DashboardService(ctx=service_context())
    return ok(stats_schema.dump(service.stats()))
