from __future__ import annotations

import logging

from studiosite.services._shared.base import BaseService, ServiceContext
from studiosite.services._shared.errors import AuthenticationError
from studiosite.services.auth.dto import AccessTokenOut, LoginIn, LoginOut, RefreshIn
from studiosite.services.identity.dto import UserOut
from studiosite.services.identity.service import to_user_out
from studiosite.services.tokens.dto import REFRESH
from studiosite.services.tokens.service import TokenService

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / whoami).

    Tokens are stateless: refreshing issues a new access token and leaves
    earlier access tokens valid until they expire.
    """

    def __init__(self, *, tokens: TokenService, ctx: ServiceContext | None = None) -> None:
        """
        :param tokens: Token service used to sign and verify JWTs.
        """
        super().__init__(ctx=ctx)
        self.tokens = tokens

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a token pair.

        :raises AuthenticationError: If the email is unknown or the password
            does not match. Both cases share one message.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                log.warning("auth.login.failed", extra={"email": dto.email})
                raise AuthenticationError(INVALID_CREDENTIALS)
            user_out = to_user_out(user)

        access = self.tokens.issue_access_token(user_out.id, user_out.role)
        refresh = self.tokens.issue_refresh_token(user_out.id)
        log.info("auth.login.succeeded", extra={"email": user_out.email, "user_id": user_out.id})
        return LoginOut(access_token=access, refresh_token=refresh, user=user_out)

    def refresh(self, dto: RefreshIn) -> AccessTokenOut:
        """
        Exchange a refresh token for a new access token.

        The role claim is re-read from the store so role changes take effect
        on the next refresh.

        :raises AuthenticationError: If the token is invalid, expired, not a
            refresh token, or its user no longer exists.
        """
        claims = self.tokens.verify(dto.refresh_token, REFRESH)
        with self.ro_uow() as uow:
            user = uow.users.get(claims.user_id)
            if user is None:
                raise AuthenticationError("Invalid refresh token")
            user_id, role = user.id, user.role

        return AccessTokenOut(access_token=self.tokens.issue_access_token(user_id, role))

    def whoami(self, user_id: int) -> UserOut:
        """
        Return the authenticated user.

        :raises AuthenticationError: If the token subject no longer exists.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise AuthenticationError("User no longer exists")
            return to_user_out(user)
