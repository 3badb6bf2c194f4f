"""Unit tests for TokenService (access/refresh issuance and verification)."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from studiosite.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from studiosite.services._shared.errors import AuthenticationError
from studiosite.services._shared.ports.token_provider import StubTokenProvider
from studiosite.services.tokens.dto import ACCESS, REFRESH, AuthTokenConfig
from studiosite.services.tokens.service import TokenService


@pytest.fixture()
def provider() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def service(provider) -> TokenService:
    return TokenService(provider=provider)


class TestTokenService:
    def test_access_token_round_trip(self, service):
        token = service.issue_access_token(7, "admin")
        claims = service.verify(token, ACCESS)

        assert claims.user_id == 7
        assert claims.kind == ACCESS
        assert claims.role == "admin"
        assert claims.expires_at - claims.issued_at == timedelta(minutes=15)

    def test_refresh_token_has_no_role_and_lives_seven_days(self, service):
        claims = service.verify(service.issue_refresh_token(7), REFRESH)

        assert claims.role is None
        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_kinds_are_not_interchangeable(self, service):
        access = service.issue_access_token(1, "editor")
        refresh = service.issue_refresh_token(1)

        with pytest.raises(AuthenticationError):
            service.verify(access, REFRESH)
        with pytest.raises(AuthenticationError):
            service.verify(refresh, ACCESS)

    def test_expired_token_is_rejected(self, service, provider):
        token = service.issue_access_token(1, "editor")
        provider.now += timedelta(minutes=16)

        with pytest.raises(AuthenticationError, match="Invalid access token"):
            service.verify(token, ACCESS)

    @pytest.mark.parametrize("token", ["", "garbage", None])
    def test_malformed_tokens_are_rejected(self, service, token):
        with pytest.raises(AuthenticationError):
            service.verify(token, ACCESS)

    def test_unknown_kind_is_a_programming_error(self, service):
        with pytest.raises(ValueError):
            service.verify("x", "session")

    def test_refresh_must_outlive_access(self):
        with pytest.raises(ValueError):
            AuthTokenConfig(access_expires=timedelta(hours=1), refresh_expires=timedelta(minutes=5))


class TestTokenServiceWithJWT:
    """Same contract against real signed JWTs."""

    @pytest.fixture()
    def jwt_service(self, app):
        return TokenService(provider=JWTTokenProvider())

    def test_signed_access_token_round_trip(self, jwt_service):
        token = jwt_service.issue_access_token(42, "editor")
        claims = jwt_service.verify(token, ACCESS)
        assert (claims.user_id, claims.role) == (42, "editor")

    def test_signed_token_expires(self, jwt_service):
        with freeze_time("2024-05-01 12:00:00") as frozen:
            token = jwt_service.issue_access_token(42, "editor")
            frozen.tick(timedelta(minutes=15, seconds=1))
            with pytest.raises(AuthenticationError):
                jwt_service.verify(token, ACCESS)

    def test_tampered_token_is_rejected(self, jwt_service):
        token = jwt_service.issue_access_token(42, "admin")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(AuthenticationError):
            jwt_service.verify(tampered, ACCESS)

    def test_refresh_token_rejected_as_access(self, jwt_service):
        token = jwt_service.issue_refresh_token(42)
        with pytest.raises(AuthenticationError):
            jwt_service.verify(token, ACCESS)
        assert jwt_service.verify(token, REFRESH).user_id == 42


def test_service_module_is_documented():
    from studiosite.services.tokens import service as module

    assert module.__doc__ and "TokenService" in module.__doc__
