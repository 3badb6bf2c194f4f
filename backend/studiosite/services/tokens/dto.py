from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

ACCESS = "access"
REFRESH = "refresh"
TOKEN_KINDS = (ACCESS, REFRESH)


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified token payload.

    :param user_id: Subject of the token.
    :param kind: ``access`` or ``refresh``.
    :param role: Role snapshot (access tokens only).
    :param issued_at: ``iat`` as an aware datetime.
    :param expires_at: ``exp`` as an aware datetime.
    """

    user_id: int
    kind: str
    role: str | None
    issued_at: datetime | None
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime; must exceed access.
    """

    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)

    def __post_init__(self) -> None:
        if self.refresh_expires <= self.access_expires:
            raise ValueError("Refresh tokens must outlive access tokens.")
