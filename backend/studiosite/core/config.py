"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

DEV_SECRET_KEY: Final[str] = "CHANGE_ME"
DEV_JWT_SECRET_KEY: Final[str] = "CHANGE_ME_JWT"


# Load .env during development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, ignoring junk values."""
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return int(val.strip())
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    ENV_NAME: str
        Short environment label, exposed for health checks and CLI guards.
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing. Defaults to a development-safe
        placeholder and must be overridden in production.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` for signing access and refresh
        tokens.
    JWT_ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Lifetime of access tokens (15 minutes).
    JWT_REFRESH_TOKEN_EXPIRES: datetime.timedelta
        Lifetime of refresh tokens (7 days).
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    BCRYPT_LOG_ROUNDS: int
        bcrypt cost factor for password hashes. Values below 10 are raised to
        10 when hashing.
    RATELIMIT_STORAGE_URI: str
        Flask-Limiter storage backend (``memory://`` or a ``redis://`` URL).
    AUTH_LOGIN_RATE_LIMIT, CONTACT_RATE_LIMIT, COMMENT_RATE_LIMIT: str
        Flask-Limiter expressions applied to public write endpoints.
    BLOG_DEFAULT_PAGE_SIZE, BLOG_MAX_PAGE_SIZE: int
        Paging defaults for post listings.
    UPLOAD_FOLDER: str
        Directory holding uploaded media (featured images).
    UPLOAD_URL_PREFIX: str
        Public URL prefix under which uploaded media is referenced by posts.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    ENV_NAME = "base"
    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", DEV_SECRET_KEY)
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", DEV_JWT_SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("JWT_ACCESS_MINUTES", 15))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("JWT_REFRESH_DAYS", 7))
    JWT_TOKEN_LOCATION = ["headers"]
    BCRYPT_LOG_ROUNDS = env_int("BCRYPT_LOG_ROUNDS", 12)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Rate limiting
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_HEADERS_ENABLED = True
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per 15 minutes")
    CONTACT_RATE_LIMIT = os.getenv("CONTACT_RATE_LIMIT", "3 per hour")
    COMMENT_RATE_LIMIT = os.getenv("COMMENT_RATE_LIMIT", "10 per hour")

    # Blog
    BLOG_DEFAULT_PAGE_SIZE = 10
    BLOG_MAX_PAGE_SIZE = 100
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.abspath("./public/uploads"))
    UPLOAD_URL_PREFIX = "/uploads/"

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    ENV_NAME = "development"
    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Keeps bcrypt at its minimum accepted cost so suites stay quick.
    """

    ENV_NAME = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    BCRYPT_LOG_ROUNDS = 10
    RATELIMIT_STORAGE_URI = "memory://"
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control. :func:`ensure_production_secrets` is run
    by the application factory for this environment.
    """

    ENV_NAME = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def ensure_production_secrets(config: Mapping[str, Any]) -> None:
    """Raise :class:`RuntimeError` when placeholder secrets reach production."""
    placeholders = {
        "SECRET_KEY": DEV_SECRET_KEY,
        "JWT_SECRET_KEY": DEV_JWT_SECRET_KEY,
    }
    leaked = [key for key, value in placeholders.items() if config.get(key) == value]
    if leaked:
        raise RuntimeError(
            "Refusing to start with development secrets: " + ", ".join(sorted(leaked))
        )
