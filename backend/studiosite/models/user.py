"""User model: the accounts that can sign in to the admin panel."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Enum, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from studiosite.core.extensions import db
from studiosite.core.security import check_password, hash_password

from .base import PKMixin, ReprMixin, TimestampMixin

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
USER_ROLES = (ROLE_ADMIN, ROLE_EDITOR)

UserRole = Enum(*USER_ROLES, name="user_role")


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Admin panel account.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    password_hash : str
        bcrypt hash (write-only setter via ``password``).
    name : str
        Display name.
    role : str
        ``admin`` or ``editor``.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(UserRole, nullable=False, default=ROLE_EDITOR)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = hash_password(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :returns: ``True`` if it matches; otherwise ``False``.
        """
        return check_password(raw, self.password_hash)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("role")
    def _validate_role(self, key: str, value: str) -> str:
        if value not in USER_ROLES:
            raise ValueError(f"Role must be one of {', '.join(USER_ROLES)}.")
        return value

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        v = (value or "").strip()
        if not v:
            raise ValueError("Name is required.")
        return v
