from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class InvalidTokenError(Exception):
    """Raised by providers when a token cannot be decoded or has expired."""


class TokenProvider(Protocol):
    """Port for issuing and decoding signed tokens."""

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings mapped to their payloads; ``now`` may be moved
    forward to simulate expiry.
    """

    def __init__(self) -> None:
        self.now = datetime.now(tz=UTC)
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(
        self,
        *,
        identity: str,
        ttype: str,
        exp_delta: timedelta,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        self._seq += 1
        token = f"{ttype}.{identity}.{self._seq}"
        payload: dict[str, Any] = {
            "sub": identity,
            "type": ttype,
            "jti": f"jti-{self._seq}",
            "iat": int(self.now.timestamp()),
            "exp": int((self.now + exp_delta).timestamp()),
        }
        if additional_claims:
            payload.update(additional_claims)
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="access",
            exp_delta=expires_delta or timedelta(minutes=15),
            additional_claims=additional_claims,
        )

    def create_refresh_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="refresh",
            exp_delta=expires_delta or timedelta(days=7),
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            payload = self._issued[token]
        except KeyError as exc:
            raise InvalidTokenError("Unknown token") from exc
        if payload["exp"] <= int(self.now.timestamp()):
            raise InvalidTokenError("Token has expired")
        return dict(payload)
