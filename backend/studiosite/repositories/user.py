"""User repository: the persistence half of the credential store."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from studiosite.models.user import User
from studiosite.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookup, filtering and password operations. It never issues tokens.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "name": User.name,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "role": User.role,
        }

    def _updatable_fields(self):
        """Publicly allowed updatable fields (password goes through its own op)."""
        return {"email", "name", "role"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :returns: User instance or ``None`` when not found.
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when another user already holds ``email``."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Hash and assign a new password, then flush."""
        user.password = new_password  # invokes setter -> hash
        self.flush()

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when ``email``/``password`` match, else ``None``."""
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
