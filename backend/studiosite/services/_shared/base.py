from __future__ import annotations

from dataclasses import dataclass

from studiosite.repositories.base import Pagination
from studiosite.services._shared.errors import AuthorizationError
from studiosite.services._shared.policies.common import has_role
from studiosite.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated user identifier.
    :param actor_role: Role claim of the authenticated user.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    actor_role: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (pagination, role checks).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    Services never touch the global session; they always go through a Unit
    of Work.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, isolation: str | None = None) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(self, *, page: int, limit: int, max_limit: int = 100) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :type page: int
        :param limit: Page size.
        :type limit: int
        :param max_limit: Upper bound applied to ``limit``.
        :type max_limit: int
        :returns: Pagination instance.
        :rtype: Pagination
        """
        page = max(1, int(page))
        limit = min(max(1, int(limit)), max_limit)
        return Pagination(page=page, limit=limit)

    # --------------------------- AuthZ --------------------------------------

    def ensure_role(self, *allowed: str, msg: str | None = None) -> None:
        """
        Ensure the acting user holds one of ``allowed`` roles.

        :raises AuthorizationError: If the context role is not allowed.
        """
        if not has_role(actor_role=self.ctx.actor_role, allowed=allowed):
            raise AuthorizationError(msg or "Insufficient permissions")
