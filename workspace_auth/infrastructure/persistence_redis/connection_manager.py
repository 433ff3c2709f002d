"""Redis Connection Manager.

CacheConnection 포트의 구현체입니다.
연결 핸들을 단독으로 소유하고, 실패 시 ReconnectPolicy에 따라 재연결을 예약합니다.

State:
    DISCONNECTED ─initialize()─▶ CONNECTING ─ping ok─▶ CONNECTED
                                     │                    │
                                     └──── ping 실패 ─▶ ERROR ◀── on_error()
                                                          │
                                          delay 후 재연결 ─┘
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

import redis.asyncio as aioredis

from workspace_auth.application.blacklist.policies import ReconnectPolicy
from workspace_auth.application.blacklist.ports import ConnectionState

logger = logging.getLogger(__name__)

# Redis connection settings
HEALTH_CHECK_INTERVAL = 30  # seconds
MAX_CONNECTIONS = 50
SOCKET_CONNECT_TIMEOUT = 5.0  # seconds
SOCKET_TIMEOUT = 5.0  # seconds

ClientFactory = Callable[[str], "aioredis.Redis"]


def build_async_client(
    redis_url: str,
    *,
    socket_timeout: float = SOCKET_TIMEOUT,
    socket_connect_timeout: float = SOCKET_CONNECT_TIMEOUT,
) -> "aioredis.Redis":
    """비동기 Redis 클라이언트 생성.

    재시도는 RedisConnectionManager의 ReconnectPolicy가 담당하므로
    클라이언트 자체 retry는 설정하지 않습니다.
    """
    return aioredis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
        # Health & Keepalive
        health_check_interval=HEALTH_CHECK_INTERVAL,
        socket_keepalive=True,
        # Timeouts
        socket_connect_timeout=socket_connect_timeout,
        socket_timeout=socket_timeout,
        # Connection Pool
        max_connections=MAX_CONNECTIONS,
    )


class RedisConnectionManager:
    """Redis 연결 관리자.

    프로세스 전역 변수 대신 Container가 소유하고 서비스에 주입합니다.
    모든 연결 실패는 호출자에게 전파되지 않고 재연결 예약으로 처리됩니다.
    """

    def __init__(
        self,
        redis_url: str,
        *,
        policy: ReconnectPolicy | None = None,
        client_factory: ClientFactory | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize.

        Args:
            redis_url: Redis 연결 URL
            policy: 재연결 정책 (None이면 5초 고정 무제한)
            client_factory: URL → 클라이언트 생성 함수 (테스트 더블 주입용)
            sleep: 재연결 대기 함수
        """
        self._redis_url = redis_url
        self._policy = policy or ReconnectPolicy.fixed()
        self._client_factory = client_factory or build_async_client
        self._sleep = sleep

        self._client: aioredis.Redis | None = None
        self._state = ConnectionState.DISCONNECTED
        self._attempts = 0
        self._reconnect_task: asyncio.Task[None] | None = None
        self._connect_task: asyncio.Task[None] | None = None
        self._closed = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.CONNECTED and self._client is not None

    @property
    def client(self) -> "aioredis.Redis | None":
        return self._client

    @property
    def attempts(self) -> int:
        """연속 재연결 시도 횟수."""
        return self._attempts

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_task is not None and not self._reconnect_task.done()

    @property
    def policy(self) -> ReconnectPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """연결 시도.

        이미 연결되어 있으면 아무것도 하지 않고, 진행 중인 연결 시도가 있으면
        그 결과를 함께 기다립니다.
        실패 시 로그를 남기고 재연결을 예약하며, 예외를 던지지 않습니다.
        """
        if self._closed:
            logger.debug("Redis connection manager closed, skipping initialize")
            return
        if self.is_open:
            return

        if not self._connect_in_flight:
            # 재시도 한도를 소진한 뒤의 on-demand 호출은 카운터를 초기화
            if not self._policy.allows(self._attempts):
                self._attempts = 0

        # 호출자가 취소되어도 공유 중인 연결 시도는 계속 진행
        await asyncio.wait({self._start_connect()})

    def ensure_connecting(self) -> None:
        """기다리지 않고 백그라운드에서 연결을 시작합니다.

        재연결이 예약되어 있거나 재시도 한도를 소진했으면 정책에 맡기고 아무것도 하지 않습니다.
        """
        if self._closed or self.is_open or self._connect_in_flight or self.reconnect_pending:
            return
        if not self._policy.allows(self._attempts):
            return

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, Redis connect not started")
            return

        self._start_connect()

    async def close(self) -> None:
        """재연결 예약과 진행 중인 연결 시도를 취소하고 연결을 종료합니다."""
        self._closed = True
        current = asyncio.current_task()
        pending = [
            task
            for task in (self._reconnect_task, self._connect_task)
            if task is not None and not task.done() and task is not current
        ]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._reconnect_task = None
        self._connect_task = None

        if self._client is not None:
            await self._close_quietly(self._client)
            self._client = None
        self._state = ConnectionState.DISCONNECTED
        logger.info("Redis connection closed")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_connect(self) -> None:
        """연결 성공."""
        self._state = ConnectionState.CONNECTED
        self._attempts = 0
        logger.info("Connected to Redis", extra={"redis_url": self._redis_url})

    def on_reconnecting(self, attempt: int) -> None:
        """재연결 시도 시작."""
        logger.info(
            "Reconnecting to Redis",
            extra={"attempt": attempt, "max_attempts": self._policy.max_attempts},
        )

    def on_error(self, error: BaseException) -> None:
        """연결 오류.

        로그를 남기고 ERROR 상태로 전환한 뒤 재연결을 예약합니다.
        """
        logger.error(
            "Redis connection error",
            extra={
                "error_type": type(error).__name__,
                "error": str(error),
                "attempt": self._attempts,
            },
        )
        self._state = ConnectionState.ERROR
        self._schedule_reconnect()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @property
    def _connect_in_flight(self) -> bool:
        return self._connect_task is not None and not self._connect_task.done()

    def _start_connect(self) -> asyncio.Task[None]:
        """연결 시도 태스크를 시작하거나 진행 중인 태스크를 반환."""
        if not self._connect_in_flight:
            self._state = ConnectionState.CONNECTING
            self._connect_task = asyncio.get_running_loop().create_task(self._connect())
        return self._connect_task

    async def _connect(self) -> None:
        self._state = ConnectionState.CONNECTING
        client: aioredis.Redis | None = None
        try:
            client = self._client_factory(self._redis_url)
            await client.ping()
        except asyncio.CancelledError:
            if client is not None:
                await asyncio.shield(self._close_quietly(client))
            self._state = ConnectionState.DISCONNECTED
            raise
        except Exception as exc:
            if client is not None:
                await self._close_quietly(client)
            self.on_error(exc)
            return

        previous = self._client
        self._client = client
        if previous is not None and previous is not client:
            await self._close_quietly(previous)

        # on-demand 연결이 먼저 성공하면 남은 재연결 예약은 불필요
        if self._reconnect_task is not None and not self._reconnect_task.done():
            self._reconnect_task.cancel()
        self._reconnect_task = None

        self.on_connect()

    def _schedule_reconnect(self) -> None:
        if self._closed or self.reconnect_pending:
            return

        if not self._policy.allows(self._attempts):
            logger.error(
                "Redis reconnect attempts exhausted",
                extra={"attempts": self._attempts, "max_attempts": self._policy.max_attempts},
            )
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, Redis reconnect not scheduled")
            return

        delay = self._policy.delay_for(self._attempts)
        self._attempts += 1
        logger.info(
            "Redis reconnect scheduled",
            extra={"attempt": self._attempts, "delay_seconds": round(delay, 2)},
        )
        self._reconnect_task = loop.create_task(self._reconnect_after(delay, self._attempts))

    async def _reconnect_after(self, delay: float, attempt: int) -> None:
        await self._sleep(delay)
        # 이 시점부터 새 예약이 가능하도록 참조 해제
        self._reconnect_task = None
        if self._closed or self.is_open or self._connect_in_flight:
            return
        self.on_reconnecting(attempt)
        await asyncio.wait({self._start_connect()})

    @staticmethod
    async def _close_quietly(client: "aioredis.Redis") -> None:
        try:
            await client.aclose()
        except Exception as exc:
            logger.debug("Ignoring error while closing Redis client", extra={"error": str(exc)})
