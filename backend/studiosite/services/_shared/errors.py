"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. They are the stable contract between repositories, services and the
HTTP boundary, which maps each type onto a status code in
``studiosite/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError mentions the given constraint. SQLite
        reports the offending columns instead of the name, so ``users.email``
        style fragments are matched as well.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    # uq_<table>_<column> -> "<table>.<column>" as reported by SQLite
    if constraint_name.startswith("uq_"):
        for idx in range(3, len(constraint_name)):
            if constraint_name[idx] == "_":
                table, column = constraint_name[3:idx], constraint_name[idx + 1 :]
                if f"{table}.{column}" in message:
                    return True
    return False


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    """


@dataclass(slots=True)
class ValidationError(ServiceError):
    """
    Raised when input is well-formed JSON but violates a domain rule.

    :param message: Human readable summary.
    :param fields: Optional per-field messages.
    """

    message: str
    fields: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class AuthenticationError(ServiceError):
    """Raised when credentials or tokens are missing, invalid or expired."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when an authenticated caller lacks the required role."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message)


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "BlogPost").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"
