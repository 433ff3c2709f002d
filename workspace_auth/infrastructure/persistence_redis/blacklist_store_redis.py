"""Redis Blacklist Store.

BlacklistStore 포트의 구현체입니다.
연결 핸들은 호출 시점마다 RedisConnectionManager에서 가져옵니다 (재연결 시 교체됨).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import ConnectionError, RedisError, TimeoutError

from workspace_auth.application.blacklist.exceptions import (
    CacheCommandError,
    CacheConnectionError,
)
from workspace_auth.application.blacklist.policies import WriteMode

if TYPE_CHECKING:
    import redis.asyncio as aioredis

    from workspace_auth.application.blacklist.ports import CacheConnection

logger = logging.getLogger(__name__)

BLACKLIST_KEY_PREFIX = "bl_"
BLACKLIST_MARKER = "true"


class RedisBlacklistStore:
    """Redis 기반 블랙리스트 저장소."""

    def __init__(self, connection: "CacheConnection") -> None:
        """Initialize.

        Args:
            connection: 연결 관리자 (DI)
        """
        self._connection = connection

    async def add(self, token: str, expiry_seconds: int, *, write_mode: WriteMode) -> None:
        """마커 저장 후 만료 시간 설정."""
        key = self.key_for(token)
        client = self._client()

        if write_mode is WriteMode.ATOMIC:
            await self._run("SET", client.set(key, BLACKLIST_MARKER, ex=expiry_seconds))
        else:
            # SET과 EXPIRE 사이에 프로세스가 죽으면 TTL 없는 키가 남음
            await self._run("SET", client.set(key, BLACKLIST_MARKER))
            await self._run("EXPIRE", client.expire(key, expiry_seconds))

        logger.debug(
            "Token added to blacklist",
            extra={"token": token[:8], "ttl": expiry_seconds, "write_mode": write_mode.value},
        )

    async def contains(self, token: str) -> bool:
        """마커 값과 정확히 일치할 때만 True."""
        value = await self._run("GET", self._client().get(self.key_for(token)))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value == BLACKLIST_MARKER

    @staticmethod
    def key_for(token: str) -> str:
        return f"{BLACKLIST_KEY_PREFIX}{token}"

    def _client(self) -> "aioredis.Redis":
        client = self._connection.client
        if client is None:
            raise CacheConnectionError("Redis client not initialized")
        return client

    @staticmethod
    async def _run(command: str, awaitable):
        try:
            return await awaitable
        except (ConnectionError, TimeoutError) as exc:
            raise CacheConnectionError(f"{command}: {exc}") from exc
        except RedisError as exc:
            raise CacheCommandError(command, str(exc)) from exc
