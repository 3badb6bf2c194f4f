from __future__ import annotations

from dataclasses import dataclass

from studiosite.services.identity.dto import UserOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :param password: Raw password (to be verified, never logged).
    :param remember_me: Client hint for durable token storage; the server
        issues the same tokens either way.
    """

    email: str
    password: str
    remember_me: bool = False


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Token pair plus the authenticated user."""

    access_token: str
    refresh_token: str
    user: UserOut


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    access_token: str
