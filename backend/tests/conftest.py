"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction on one shared connection to an
in-memory SQLite database. The ORM session joins it through SAVEPOINTs, so
service-level ``commit()`` calls work normally and everything is rolled back
when the test ends.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from studiosite.core.config import TestingConfig
from studiosite.core.extensions import db as _db  # Flask-SQLAlchemy instance
from studiosite.core.extensions import limiter
from studiosite.factory import create_app  # application factory under test
from studiosite.models.user import ROLE_ADMIN, ROLE_EDITOR


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Keeps JWT secrets fixed so tokens are reproducible.
    - Pins rate limits and CORS origins regardless of the local environment.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test-jwt-secret"
    SECRET_KEY = "test-secret"
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = "http://localhost:5173"
    AUTH_LOGIN_RATE_LIMIT = "5 per 15 minutes"
    CONTACT_RATE_LIMIT = "3 per hour"
    COMMENT_RATE_LIMIT = "10 per hour"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


def _enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite emit BEGIN itself so SAVEPOINTs behave."""

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):  # pragma: no cover
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Parameters
    ----------
    app: flask.Flask
        Application fixture ensuring the Flask context is available.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        if _db.engine.url.get_backend_name() == "sqlite":
            _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by the per-test outer transaction.
    """
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a rolled-back transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection. ``commit()`` only
        releases a SAVEPOINT; the outer transaction is rolled back after each
        test.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(
            bind=connection,
            join_transaction_mode="create_savepoint",
            autoflush=False,
        )
    )

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


@pytest.fixture(autouse=True)
def _reset_rate_limits(app):
    """Start every test with empty rate-limit windows."""
    with app.app_context():
        limiter.reset()
    yield


# -- HTTP helpers ---------------------------------------------------------------
@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def admin_user(session):
    from tests.factories.user import UserFactory

    user = UserFactory(email="admin@example.com", role=ROLE_ADMIN, password="AdminPass123")
    session.commit()
    return user


@pytest.fixture()
def editor_user(session):
    from tests.factories.user import UserFactory

    user = UserFactory(email="editor@example.com", role=ROLE_EDITOR, password="EditorPass123")
    session.commit()
    return user


def _bearer_for(user) -> dict[str, str]:
    from flask_jwt_extended import create_access_token

    token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(admin_user):
    """``Authorization`` header carrying an admin access token."""
    return _bearer_for(admin_user)


@pytest.fixture()
def editor_headers(editor_user):
    """``Authorization`` header carrying an editor access token."""
    return _bearer_for(editor_user)
