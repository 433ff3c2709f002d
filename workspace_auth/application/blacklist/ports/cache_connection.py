"""CacheConnection Port.

블랙리스트 서비스가 사용하는 캐시 연결 인터페이스입니다.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import redis.asyncio as aioredis


class ConnectionState(str, Enum):
    """연결 핸들 상태."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


class CacheConnection(Protocol):
    """캐시 연결 관리자 인터페이스.

    구현체:
        - RedisConnectionManager (infrastructure/persistence_redis/)
    """

    @property
    def state(self) -> ConnectionState:
        """현재 연결 상태."""
        ...

    @property
    def is_open(self) -> bool:
        """명령을 보낼 수 있는 상태인지 여부."""
        ...

    @property
    def client(self) -> "aioredis.Redis | None":
        """현재 연결 핸들 (없으면 None)."""
        ...

    async def initialize(self) -> None:
        """연결 시도. 실패해도 예외를 던지지 않고 재연결을 예약합니다."""
        ...

    def ensure_connecting(self) -> None:
        """기다리지 않고 백그라운드에서 연결을 시작합니다."""
        ...

    def on_error(self, error: BaseException) -> None:
        """연결 오류 통지. 재연결을 예약합니다."""
        ...
