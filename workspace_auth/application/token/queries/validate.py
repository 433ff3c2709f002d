"""ValidateToken Query.

요청마다 액세스 토큰을 검증하고 폐기 여부를 확인합니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from workspace_auth.application.token.exceptions import MissingTokenError, TokenRevokedError

if TYPE_CHECKING:
    from workspace_auth.application.blacklist.services import TokenBlacklistService
    from workspace_auth.application.token.dto import TokenClaims
    from workspace_auth.application.token.ports import TokenIssuer


class ValidateTokenQueryService:
    """토큰 검증 Query Service."""

    def __init__(
        self,
        token_issuer: "TokenIssuer",
        blacklist_service: "TokenBlacklistService",
    ) -> None:
        self._token_issuer = token_issuer
        self._blacklist_service = blacklist_service

    async def execute(self, access_token: str | None) -> "TokenClaims":
        """토큰을 검증하고 클레임을 반환합니다.

        Raises:
            MissingTokenError: 토큰 없음
            InvalidTokenError: 유효하지 않은 토큰
            TokenRevokedError: 폐기된 토큰
        """
        if not access_token:
            raise MissingTokenError()

        claims = self._token_issuer.decode(access_token)

        if await self._blacklist_service.is_token_blacklisted(access_token):
            raise TokenRevokedError(claims.jti)

        return claims
