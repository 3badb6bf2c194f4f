"""
IdentityService
===============

Credential store for the `User` aggregate:

- lookup by email and password validation (bcrypt),
- provisioning, partial updates (including password reset) and deletion.

Token issuance lives in :mod:`studiosite.services.auth`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from studiosite.models.user import User
from studiosite.repositories.user import UserRepository
from studiosite.services._shared.base import BaseService
from studiosite.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    violates,
)
from studiosite.services.identity.dto import UserCreateIn, UserOut, UserUpdateIn

log = logging.getLogger(__name__)


def to_user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    Responsibilities
    ----------------
    - Find users and validate credentials.
    - Create users ensuring email uniqueness.
    - Update and delete users by id.
    """

    # --------------------------------------------------------------------- #
    # Lookup & credentials
    # --------------------------------------------------------------------- #

    def find_by_email(self, email: str) -> UserOut | None:
        """Return the user registered under ``email`` (case-insensitive), or ``None``."""
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(email)
            return to_user_out(user) if user else None

    def validate_password(self, user_id: int, plaintext: str) -> bool:
        """
        Check ``plaintext`` against the stored hash of ``user_id``.

        Unknown users simply fail validation. The plaintext is never logged.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            return bool(user and user.verify_password(plaintext))

    def authenticate(self, email: str, plaintext: str) -> UserOut | None:
        """Return the user when the credentials match, else ``None``."""
        with self.ro_uow() as uow:
            user = uow.users.authenticate(email, plaintext)
            return to_user_out(user) if user else None

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: int) -> UserOut:
        """
        Retrieve a user by identifier.

        :raises NotFoundError: If user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_user_out(user)

    def list_users(self) -> list[UserOut]:
        with self.ro_uow() as uow:
            return [to_user_out(u) for u in uow.users.list(sort=["email"])]

    # --------------------------------------------------------------------- #
    # Mutations
    # --------------------------------------------------------------------- #

    def create(self, dto: UserCreateIn) -> UserOut:
        """
        Provision a new user.

        :raises ConflictError: If the email is already registered.
        :raises ValidationError: If the model rejects a field.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")

            try:
                user = repo.model(
                    email=dto.email,
                    password=dto.password,  # model hashes via setter
                    name=dto.name,
                    role=dto.role,
                )
                repo.add(user)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise

            log.info("user.created", extra={"user_id": user.id})
            return to_user_out(user)

    def update(self, user_id: int, dto: UserUpdateIn) -> UserOut:
        """
        Apply a partial update.

        :raises NotFoundError: If the user does not exist.
        :raises ConflictError: If the new email belongs to another user.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            if dto.email is not None and repo.exists_by_email(dto.email, exclude_id=user_id):
                raise ConflictError("User", "email already in use")

            fields = {
                key: value
                for key, value in (("email", dto.email), ("name", dto.name), ("role", dto.role))
                if value is not None
            }
            try:
                repo.assign_updates(user, fields, flush=False)
                if dto.password is not None:
                    repo.update_password(user, dto.password)
                repo.flush()
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise

            return to_user_out(user)

    def delete(self, user_id: int) -> None:
        """
        Delete a user. Posts they authored keep existing with no author.

        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.posts.detach_author(user_id)
            uow.users.delete(user)
        log.info("user.deleted", extra={"user_id": user_id})
