"""Factory Boy definition for :class:`studiosite.models.user.User`."""

from __future__ import annotations

import factory

from studiosite.models.user import ROLE_EDITOR, User
from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """
    Build persisted :class:`studiosite.models.user.User` instances.

    Pass ``password=...`` to choose the plaintext; it is hashed through the
    model setter.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Faker("name")
    role = ROLE_EDITOR
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        value = extracted or "Passw0rd!"
        obj.password = value
