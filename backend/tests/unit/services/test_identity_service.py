"""Unit tests for IdentityService (credential store)."""

from __future__ import annotations

import pytest

from studiosite.models.blog import BlogPost
from studiosite.services._shared.errors import ConflictError, NotFoundError, ValidationError
from studiosite.services.identity.dto import UserCreateIn, UserUpdateIn
from studiosite.services.identity.service import IdentityService
from tests.factories.blog import BlogPostFactory
from tests.factories.user import UserFactory


class TestIdentityService:
    @pytest.fixture()
    def service(self) -> IdentityService:
        return IdentityService()

    def test_create_hashes_password_and_normalizes_email(self, service, session):
        out = service.create(
            UserCreateIn(email="New@Example.com", password="longenough", name=" Ada ", role="admin")
        )

        assert out.email == "new@example.com"
        assert out.name == "Ada"
        assert out.role == "admin"
        assert service.authenticate("new@example.com", "longenough").id == out.id
        assert service.authenticate("new@example.com", "nope") is None

    def test_create_duplicate_email_conflicts(self, service, session):
        UserFactory(email="dup@example.com")
        session.commit()

        with pytest.raises(ConflictError):
            service.create(UserCreateIn(email="DUP@example.com", password="longenough", name="X"))

    def test_create_rejects_unknown_role(self, service, session):
        with pytest.raises(ValidationError):
            service.create(
                UserCreateIn(email="r@example.com", password="longenough", name="R", role="root")
            )

    def test_find_by_email(self, service, session):
        user = UserFactory(email="find@example.com")
        session.commit()

        assert service.find_by_email("FIND@example.com").id == user.id
        assert service.find_by_email("missing@example.com") is None

    def test_validate_password(self, service, session):
        user = UserFactory(password="Correct-Horse")
        session.commit()

        assert service.validate_password(user.id, "Correct-Horse")
        assert not service.validate_password(user.id, "wrong")
        assert not service.validate_password(99999, "Correct-Horse")

    def test_get_user_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_user(12345)

    def test_list_users_sorted_by_email(self, service, session):
        UserFactory(email="zed@example.com")
        UserFactory(email="amy@example.com")
        session.commit()

        assert [u.email for u in service.list_users()] == ["amy@example.com", "zed@example.com"]

    def test_update_partial_and_password_reset(self, service, session):
        user = UserFactory(email="old@example.com", name="Old", password="first-pass")
        session.commit()
        user_id = user.id

        out = service.update(user_id, UserUpdateIn(name="New Name", password="second-pass"))

        assert out.name == "New Name"
        assert out.email == "old@example.com"
        assert service.validate_password(user_id, "second-pass")
        assert not service.validate_password(user_id, "first-pass")

    def test_update_email_taken_by_other_user_conflicts(self, service, session):
        UserFactory(email="taken@example.com")
        user = UserFactory(email="mine@example.com")
        session.commit()

        with pytest.raises(ConflictError):
            service.update(user.id, UserUpdateIn(email="taken@example.com"))

    def test_update_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.update(4242, UserUpdateIn(name="x"))

    def test_delete_keeps_posts_without_author(self, service, session):
        author = UserFactory()
        post = BlogPostFactory(author_id=author.id)
        session.commit()
        author_id, post_id = author.id, post.id

        service.delete(author_id)

        with pytest.raises(NotFoundError):
            service.get_user(author_id)
        assert session.get(BlogPost, post_id).author_id is None

    def test_delete_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.delete(999)
