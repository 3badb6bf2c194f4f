"""Integration tests for admin user management."""

from __future__ import annotations

from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_error, assert_success

USERS = "/api/users"


def test_editor_is_forbidden(client, editor_headers):
    assert_error(client.get(USERS, headers=editor_headers), 403, code="forbidden")


def test_anonymous_is_unauthorized(client):
    assert_error(client.get(USERS), 401)


def test_admin_crud_round(client, admin_headers):
    created = assert_success(
        client.post(
            USERS,
            json={"email": "new@example.com", "password": "longenough", "name": "Newbie"},
            headers=admin_headers,
        ),
        201,
    )
    assert created["role"] == "editor"
    user_url = f"{USERS}/{created['id']}"

    listed = assert_success(client.get(USERS, headers=admin_headers))
    assert {u["email"] for u in listed} == {"admin@example.com", "new@example.com"}

    updated = assert_success(
        client.patch(user_url, json={"role": "admin", "name": "Promoted"}, headers=admin_headers)
    )
    assert (updated["role"], updated["name"]) == ("admin", "Promoted")

    assert client.delete(user_url, headers=admin_headers).status_code == 204
    assert_error(client.get(user_url, headers=admin_headers), 404, message="User not found")


def test_duplicate_email_conflicts(client, admin_headers, session):
    UserFactory(email="taken@example.com")
    session.commit()

    resp = client.post(
        USERS,
        json={"email": "taken@example.com", "password": "longenough", "name": "Dup"},
        headers=admin_headers,
    )
    assert_error(resp, 409, code="conflict")


def test_password_reset_through_update(client, admin_headers, session):
    user = UserFactory(email="reset@example.com", password="old-password")
    user_id = user.id
    session.commit()

    assert_success(
        client.patch(f"{USERS}/{user_id}", json={"password": "brand-new-pass"}, headers=admin_headers)
    )

    login = client.post("/api/auth/login", json={"email": "reset@example.com", "password": "brand-new-pass"})
    assert login.status_code == 200


def test_create_validation(client, admin_headers):
    resp = client.post(USERS, json={"email": "x@example.com", "password": "short"}, headers=admin_headers)
    body = assert_error(resp, 400, code="validation_error")
    assert {"password", "name"} <= set(body["details"])
