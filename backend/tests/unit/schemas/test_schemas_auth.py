"""Unit tests for auth, user, comment and contact payload schemas."""

from __future__ import annotations

import pytest
from marshmallow import ValidationError

from studiosite.schemas import (
    CommentCreateSchema,
    ContactCreateSchema,
    LoginSchema,
    RefreshSchema,
    UserCreateSchema,
)


def test_login_schema_reads_remember_me():
    data = LoginSchema().load({"email": "a@example.com", "password": "x", "rememberMe": True})
    assert data == {"email": "a@example.com", "password": "x", "remember_me": True}


def test_login_schema_rejects_bad_email():
    with pytest.raises(ValidationError) as exc:
        LoginSchema().load({"email": "nope", "password": "x"})
    assert "email" in exc.value.messages


def test_refresh_schema_uses_camel_case_key():
    assert RefreshSchema().load({"refreshToken": "abc"}) == {"refresh_token": "abc"}
    with pytest.raises(ValidationError):
        RefreshSchema().load({"refresh_token": "abc"})


def test_user_create_schema_enforces_password_length_and_role():
    with pytest.raises(ValidationError) as exc:
        UserCreateSchema().load(
            {"email": "u@example.com", "password": "short", "name": "Al", "role": "root"}
        )
    assert set(exc.value.messages) == {"password", "role"}

    data = UserCreateSchema().load({"email": "u@example.com", "password": "longenough", "name": "Al"})
    assert data["role"] == "editor"


def test_comment_schema():
    data = CommentCreateSchema().load(
        {"authorName": "Ann", "authorEmail": "ann@example.com", "content": "Great"}
    )
    assert data == {"author_name": "Ann", "author_email": "ann@example.com", "content": "Great"}


def test_contact_schema_requires_consent_flag():
    payload = {
        "name": "Jane",
        "email": "jane@example.com",
        "service": "branding",
        "message": "Hello",
    }
    with pytest.raises(ValidationError) as exc:
        ContactCreateSchema().load(payload)
    assert "consent" in exc.value.messages

    data = ContactCreateSchema().load({**payload, "consent": False})
    assert data["company"] is None
