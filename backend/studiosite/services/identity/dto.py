"""
DTOs for IdentityService.

Data Transfer Objects isolate the service layer from ORM models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for provisioning a user.

    :param email: Login email (normalized to lowercase).
    :param password: Raw password to be hashed by the model.
    :param name: Display name.
    :param role: ``admin`` or ``editor``.
    """

    email: str
    password: str
    name: str
    role: str = "editor"


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Partial update; ``None`` leaves a field untouched.

    :param email: New email.
    :param name: New display name.
    :param role: New role.
    :param password: New raw password (password reset).
    """

    email: str | None = None
    name: str | None = None
    role: str | None = None
    password: str | None = None


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public-safe user representation (no hash)."""

    id: int
    email: str
    name: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
