"""Blacklist Store Port.

블랙리스트 저장소 인터페이스입니다.
"""

from __future__ import annotations

from typing import Protocol

from workspace_auth.application.blacklist.policies import WriteMode


class BlacklistStore(Protocol):
    """블랙리스트 저장소 인터페이스.

    구현체:
        - RedisBlacklistStore (infrastructure/persistence_redis/)

    연결 실패는 CacheConnectionError, 그 외 명령 실패는 CacheCommandError로 던집니다.
    """

    async def add(self, token: str, expiry_seconds: int, *, write_mode: WriteMode) -> None:
        """토큰을 블랙리스트에 추가.

        Args:
            token: 인증 토큰 원문
            expiry_seconds: 만료까지 남은 시간 (초)
            write_mode: 쓰기 방식
        """
        ...

    async def contains(self, token: str) -> bool:
        """토큰이 블랙리스트에 있는지 확인.

        Args:
            token: 인증 토큰 원문

        Returns:
            마커 값이 저장되어 있으면 True
        """
        ...
