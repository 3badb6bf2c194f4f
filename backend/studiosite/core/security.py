"""Password hashing helpers built on bcrypt."""

from __future__ import annotations

import bcrypt
from flask import current_app, has_app_context

MIN_LOG_ROUNDS = 10
DEFAULT_LOG_ROUNDS = 12


def _log_rounds() -> int:
    rounds = DEFAULT_LOG_ROUNDS
    if has_app_context():
        rounds = int(current_app.config.get("BCRYPT_LOG_ROUNDS", DEFAULT_LOG_ROUNDS))
    return max(rounds, MIN_LOG_ROUNDS)


def hash_password(raw: str) -> str:
    """Return a salted bcrypt hash of ``raw`` (cost factor >= 10)."""
    salt = bcrypt.gensalt(rounds=_log_rounds())
    return bcrypt.hashpw(raw.encode("utf-8"), salt).decode("utf-8")


def check_password(raw: str, hashed: str) -> bool:
    """Constant-time comparison of ``raw`` against a bcrypt hash.

    Malformed hashes are reported as a mismatch rather than an error.
    """
    if not raw or not hashed:
        return False
    try:
        return bcrypt.checkpw(raw.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
