"""TokenIssuer Port.

JWT 토큰 발급/검증을 위한 Gateway 인터페이스입니다.
"""

from typing import Protocol

from workspace_auth.application.token.dto import IssuedToken, TokenClaims


class TokenIssuer(Protocol):
    """토큰 발급자 인터페이스.

    구현체:
        - JwtTokenService (infrastructure/security/)
    """

    def issue(self, *, user_id: int, company_id: int | None, email: str, role: str) -> IssuedToken:
        """액세스 토큰 발급."""
        ...

    def decode(self, token: str) -> TokenClaims:
        """토큰 디코딩 및 검증.

        Raises:
            InvalidTokenError: 서명 불일치, 만료, 필수 클레임 누락
        """
        ...
