"""Generic repository base and query utilities for SQLAlchemy 2.x.

Persistence-only concerns shared by all repositories:

- Pagination value objects and a counting paginator.
- Whitelisted sorting where public keys map to columns *or* SQL expressions
  (e.g. ``coalesce(published_at, created_at)``).
- Deterministic ordering: the primary key is always the final tiebreaker.
- Safe update helpers with per-repository updatable-field whitelists.

Repositories never commit or roll back; services own the Unit of Work.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from studiosite.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


# ------------------------------- Pagination ----------------------------------


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param sort: Public sort tokens (e.g., ``["-created_at", "email"]``).
    :type sort: list[str]
    """

    page: int
    limit: int
    sort: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param items: Entities in the current slice.
    :param total: Count of rows matching the filters, before slicing.
    :param page: 1-based current page number.
    :param limit: Page size.
    """

    items: Sequence[E]
    total: int
    page: int
    limit: int


# ----------------------------- Sorting utilities -----------------------------

Sortable = InstrumentedAttribute[Any] | ColumnElement[Any]


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples.

    :param raw: Public tokens like ``["-created_at", "name"]``.
    :returns: List of ``(field_name, is_desc)`` tokens; blanks are dropped.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        name = (token[1:] if is_desc else token).strip()
        if name:
            parsed.append((name, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, Sortable],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply safe ``ORDER BY`` clauses based on a whitelist mapping.

    Unknown sort tokens are ignored. The primary key is appended as a final
    ascending tiebreaker so equal sort keys keep insertion order.

    :param stmt: Base selectable.
    :param sortable_fields: Public key -> column or SQL expression.
    :param tokens: Public sort tokens (e.g., ``["-created_at"]``).
    :param pk_attr: Primary-key attribute used as a tiebreaker.
    :returns: Select with ``ORDER BY`` clauses.
    """
    orders: list[Any] = []
    for name, is_desc in parse_sort_tokens(tokens):
        col = sortable_fields.get(name)
        if col is not None:
            orders.append(col.desc() if is_desc else col.asc())

    if orders:
        stmt = stmt.order_by(*orders)
    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())
    return stmt


# --------------------------- Pagination execution ----------------------------


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
) -> tuple[list[Any], int]:
    """Execute a filtered, ordered select as ``(slice, total)``.

    ``total`` counts every row of ``stmt`` (its ``ORDER BY`` stripped); the
    slice is ``[(page - 1) * limit, page * limit)``. A page past the end
    yields an empty slice.

    :param session: Active SQLAlchemy session.
    :param stmt: Base select to paginate (already filtered/sorted).
    :param page: 1-based page number (clamped to ``>= 1``).
    :param limit: Page size (clamped to ``>= 1``).
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    if (page - 1) * limit >= total:
        return [], total

    sliced = stmt.limit(limit).offset((page - 1) * limit)
    items = list(session.execute(sliced).scalars().all())
    return items, total


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``. They MAY override
    ``_sortable_fields``, ``_filterable_fields`` and ``_updatable_fields``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        Without an explicit session the Flask-scoped ``db.session`` is used.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, Sortable]:
        """Whitelist mapping of public sort keys to columns or expressions."""
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist of equality-filterable fields; unknown keys are ignored."""
        return {}

    def _updatable_fields(self) -> set[str]:
        """Whitelist of keys that can be assigned on update."""
        return set()

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self,
        stmt: Select[Any],
        filters: Mapping[str, Any] | None,
    ) -> Select[Any]:
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        clauses = [allowed[k] == v for k, v in filters.items() if k in allowed]
        return stmt.where(and_(*clauses)) if clauses else stmt

    def _sanitize_update_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Return only whitelisted update keys.

        :raises ValueError: On keys outside ``_updatable_fields()``.
        """
        allowed = self._updatable_fields()
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return dict(fields)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = select(self.model).where(pk_attr == entity_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        """Find a single entity by whitelisted equality filters."""
        stmt = self._apply_equality_filters(select(self.model), filters)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when at least one row matches the filters."""
        stmt = self._apply_equality_filters(select(self.model), filters)
        return self.session.execute(stmt.limit(1)).first() is not None

    def count(self, **filters: Any) -> int:
        """Count rows matching whitelisted equality filters."""
        stmt = self._apply_equality_filters(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one())

    def delete(self, instance: E) -> None:
        """Delete an entity and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def assign_updates(self, instance: E, fields: Mapping[str, Any], *, flush: bool = True) -> E:
        """Assign whitelisted keys via ``setattr`` so ``@validates`` hooks run."""
        for key, value in self._sanitize_update_fields(fields).items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> list[E]:
        """List entities with whitelisted filters and deterministic sorting."""
        stmt = self._apply_equality_filters(select(self.model), filters)
        stmt = apply_sorting(stmt, self._sortable_fields(), sort or [], pk_attr=self._pk_attr())
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    def paginate(
        self,
        pagination: Pagination,
        *,
        filters: Mapping[str, Any] | None = None,
    ) -> Page[E]:
        """Paginate entities with stable sorting and a total count."""
        stmt = self._apply_equality_filters(select(self.model), filters)
        stmt = apply_sorting(
            stmt, self._sortable_fields(), pagination.sort, pk_attr=self._pk_attr()
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)
