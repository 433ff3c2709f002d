"""Logout Command.

로그아웃 Use Case입니다.

Workflow:
    1. 토큰 검증 (만료 시각 확인용)
    2. 남은 유효 시간 계산 (이미 지났으면 fallback TTL)
    3. 블랙리스트 등록
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from workspace_auth.application.token.dto import LogoutRequest, LogoutResult
from workspace_auth.application.token.exceptions import (
    MissingTokenError,
    TokenRevocationUnavailableError,
)

if TYPE_CHECKING:
    from workspace_auth.application.blacklist.services import TokenBlacklistService
    from workspace_auth.application.token.ports import TokenIssuer

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_TTL_SECONDS = 3600


class LogoutInteractor:
    """로그아웃 Interactor.

    Dependencies:
        - token_issuer: 토큰 검증
        - blacklist_service: 블랙리스트 등록
    """

    def __init__(
        self,
        token_issuer: "TokenIssuer",
        blacklist_service: "TokenBlacklistService",
        *,
        fallback_ttl_seconds: int = DEFAULT_FALLBACK_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._token_issuer = token_issuer
        self._blacklist_service = blacklist_service
        self._fallback_ttl_seconds = fallback_ttl_seconds
        self._clock = clock

    async def execute(self, request: LogoutRequest) -> LogoutResult:
        """로그아웃을 처리합니다.

        Raises:
            MissingTokenError: 토큰 없음
            InvalidTokenError: 유효하지 않은 토큰
            TokenRevocationUnavailableError: 블랙리스트 저장 실패
        """
        if not request.access_token:
            raise MissingTokenError()

        claims = self._token_issuer.decode(request.access_token)

        remaining = claims.exp - int(self._clock())
        ttl = remaining if remaining > 0 else self._fallback_ttl_seconds

        if not await self._blacklist_service.blacklist_token(request.access_token, ttl):
            raise TokenRevocationUnavailableError()

        logger.info("User logged out", extra={"user_id": claims.user_id, "ttl": ttl})
        return LogoutResult(user_id=claims.user_id, blacklisted_for_seconds=ttl)
