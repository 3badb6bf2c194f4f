"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from studiosite.core.extensions import db
from studiosite.repositories import (
    BlogCommentRepository,
    BlogPostRepository,
    ContactSubmissionRepository,
    UserRepository,
)
from studiosite.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.posts = BlogPostRepository(session=self.session)
        self.comments = BlogCommentRepository(session=self.session)
        self.contacts = ContactSubmissionRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    Commits on a clean exit, rolls back when the block raises.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    - Applies ``SET TRANSACTION`` isolation/read-only directives on
      PostgreSQL and MySQL when it owns the transaction.
    - Installs write guards (ORM flush and raw DML) on every dialect.
    - Rolls back on exit when it began the transaction; ``commit()`` is
      refused.

    Results must be copied out (e.g. into DTOs) before the block ends, since
    the closing rollback expires loaded instances. When an outer transaction
    is already open the scope attaches to it and inherits its permissions.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
        "grant",
        "revoke",
    )
    _TXN_DIRECTIVE_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(self, *, isolation_level: str | None = "READ COMMITTED") -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self._conn: Connection | None = None
        self._owns_txn = False
        self._listeners_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # scoped_session does not proxy in_transaction(); ask the Session itself
        orm_session = self._orm_session()
        self._owns_txn = not orm_session.in_transaction()
        if self._owns_txn:
            orm_session.begin()

        self._conn = self.session.connection()
        self._install_listeners()

        if self._owns_txn and self._conn.dialect.name in self._TXN_DIRECTIVE_DIALECTS:
            try:
                if self.isolation_level:
                    iso = self.isolation_level.upper().strip()
                    self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))
                self.session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                current_app.logger.warning(
                    "SET TRANSACTION directives failed (%s). Falling back to guards-only.", exc
                )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Remove the guards; roll back only a transaction this scope began."""
        try:
            if self._owns_txn:
                self.session.rollback()
        finally:
            self._remove_listeners()
            self._conn = None
            self._owns_txn = False

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards & Listeners --------------------------

    def _before_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _before_cursor_execute(self, conn, cursor, statement, parameters, context, executemany):
        first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
        if first_token.startswith(self._WRITE_PREFIXES):
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}")

    def _orm_session(self) -> Session:
        # Listen on the concrete session, not the scoped registry (which would
        # register on the Session class globally).
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _install_listeners(self) -> None:
        if self._listeners_installed:
            return
        event.listen(self._orm_session(), "before_flush", self._before_flush)
        event.listen(self._conn, "before_cursor_execute", self._before_cursor_execute)
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        if not self._listeners_installed:
            return
        event.remove(self._orm_session(), "before_flush", self._before_flush)
        event.remove(self._conn, "before_cursor_execute", self._before_cursor_execute)
        self._listeners_installed = False
