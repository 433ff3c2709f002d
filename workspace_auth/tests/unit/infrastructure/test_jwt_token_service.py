"""JwtTokenService 테스트."""

from __future__ import annotations

import pytest
from jose import jwt

from workspace_auth.application.token.exceptions import InvalidTokenError
from workspace_auth.infrastructure.security import JwtTokenService
from workspace_auth.tests.fakes import FakeClock

SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def token_service(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(secret_key=SECRET, access_token_expire_minutes=60, clock=clock)


class TestJwtTokenService:
    """JwtTokenService 테스트."""

    def test_issue_and_decode(self, token_service: JwtTokenService, clock: FakeClock) -> None:
        issued = token_service.issue(user_id=7, company_id=3, email="kim@example.com", role="admin")

        claims = token_service.decode(issued.access_token)

        assert claims.user_id == 7
        assert claims.company_id == 3
        assert claims.email == "kim@example.com"
        assert claims.role == "admin"
        assert claims.jti == issued.jti
        assert claims.iat == int(clock())
        assert claims.exp == int(clock()) + 3600
        assert issued.expires_at == claims.exp

    def test_jti_is_unique(self, token_service: JwtTokenService) -> None:
        first = token_service.issue(user_id=1, company_id=None, email="a@example.com", role="user")
        second = token_service.issue(user_id=1, company_id=None, email="a@example.com", role="user")

        assert first.jti != second.jti
        assert first.access_token != second.access_token

    def test_expired_token_rejected(self, token_service: JwtTokenService, clock: FakeClock) -> None:
        issued = token_service.issue(user_id=1, company_id=None, email="a@example.com", role="user")

        clock.advance(3600)

        with pytest.raises(InvalidTokenError, match="expired"):
            token_service.decode(issued.access_token)

    def test_wrong_secret_rejected(self, token_service: JwtTokenService, clock: FakeClock) -> None:
        other = JwtTokenService(secret_key="another-secret", clock=clock)
        issued = other.issue(user_id=1, company_id=None, email="a@example.com", role="user")

        with pytest.raises(InvalidTokenError):
            token_service.decode(issued.access_token)

    def test_garbage_rejected(self, token_service: JwtTokenService) -> None:
        with pytest.raises(InvalidTokenError):
            token_service.decode("not-a-jwt")

    def test_missing_claims_rejected(self, token_service: JwtTokenService, clock: FakeClock) -> None:
        token = jwt.encode(
            {"sub": "1", "exp": int(clock()) + 60, "iat": int(clock())},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="Missing claims"):
            token_service.decode(token)

    def test_malformed_subject_rejected(
        self, token_service: JwtTokenService, clock: FakeClock
    ) -> None:
        token = jwt.encode(
            {
                "sub": "not-a-number",
                "jti": "jti-1",
                "exp": int(clock()) + 60,
                "iat": int(clock()),
                "email": "a@example.com",
                "role": "user",
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="Malformed"):
            token_service.decode(token)
