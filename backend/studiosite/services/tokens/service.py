"""
TokenService
============

Access and refresh token issuance and verification over the
:class:`TokenProvider` port (flask-jwt-extended in production).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from studiosite.services._shared.errors import AuthenticationError
from studiosite.services._shared.ports.token_provider import InvalidTokenError, TokenProvider
from studiosite.services.tokens.dto import (
    ACCESS,
    REFRESH,
    TOKEN_KINDS,
    AuthTokenConfig,
    TokenClaims,
)

log = logging.getLogger(__name__)


class TokenService:
    """
    Issue and verify access/refresh tokens.

    Both kinds are stateless signed JWTs. The ``type`` claim separates them,
    so a refresh token is never accepted where an access token is expected.
    Verification failures surface only as :class:`AuthenticationError`.
    """

    def __init__(self, *, provider: TokenProvider, cfg: AuthTokenConfig | None = None) -> None:
        self.provider = provider
        self.cfg = cfg or AuthTokenConfig()

    def issue_access_token(self, user_id: int, role: str) -> str:
        """Sign ``{sub, role, type=access}`` valid for ``cfg.access_expires``."""
        return self.provider.create_access_token(
            identity=str(user_id),
            additional_claims={"role": role},
            expires_delta=self.cfg.access_expires,
        )

    def issue_refresh_token(self, user_id: int) -> str:
        """Sign ``{sub, type=refresh}`` valid for ``cfg.refresh_expires``."""
        return self.provider.create_refresh_token(
            identity=str(user_id),
            expires_delta=self.cfg.refresh_expires,
        )

    def verify(self, token: str, expected_kind: str) -> TokenClaims:
        """
        Decode ``token`` and check it is an unexpired token of ``expected_kind``.

        :raises AuthenticationError: On bad signature, expiry, malformed
            payload or kind mismatch.
        """
        if expected_kind not in TOKEN_KINDS:
            raise ValueError(f"Unknown token kind: {expected_kind!r}")
        if not token or not isinstance(token, str):
            raise AuthenticationError("Token is required")

        try:
            payload = self.provider.decode(token)
        except InvalidTokenError as exc:
            log.info("token.rejected kind=%s", expected_kind)
            raise AuthenticationError(f"Invalid {expected_kind} token") from exc

        kind = payload.get("type")
        if kind != expected_kind:
            raise AuthenticationError(f"Invalid {expected_kind} token")
        return self._to_claims(payload, expected_kind)

    @staticmethod
    def _to_claims(payload: dict[str, Any], kind: str) -> TokenClaims:
        try:
            user_id = int(payload["sub"])
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError(f"Invalid {kind} token") from exc
        iat = payload.get("iat")
        return TokenClaims(
            user_id=user_id,
            kind=kind,
            role=payload.get("role") if kind == ACCESS else None,
            issued_at=datetime.fromtimestamp(int(iat), tz=UTC) if iat is not None else None,
            expires_at=expires_at,
        )


__all__ = ["TokenService", "ACCESS", "REFRESH"]
