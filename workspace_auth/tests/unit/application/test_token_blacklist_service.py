"""TokenBlacklistService 테스트.

RedisConnectionManager + RedisBlacklistStore를 FakeRedisServer에 붙여
연결/만료/장애 시나리오를 검증합니다.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from workspace_auth.application.blacklist.policies import FailurePolicy, WriteMode
from workspace_auth.application.blacklist.ports import ConnectionState
from workspace_auth.application.blacklist.services import TokenBlacklistService
from workspace_auth.infrastructure.persistence_redis import (
    BLACKLIST_KEY_PREFIX,
    RedisBlacklistStore,
    RedisConnectionManager,
)
from workspace_auth.tests.fakes import (
    ControlledSleep,
    FakeClock,
    FakeRedisServer,
    command_names,
)


class TestBlacklistConnected:
    """연결된 세션에서의 동작."""

    @pytest.mark.asyncio
    async def test_blacklisted_token_is_reported(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
    ) -> None:
        """추가 직후 조회하면 True."""
        await connection.initialize()

        assert await blacklist_service.blacklist_token("abc123", 2) is True
        assert await blacklist_service.is_token_blacklisted("abc123") is True

    @pytest.mark.asyncio
    async def test_entry_expires(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        clock: FakeClock,
    ) -> None:
        """2초 만료 → 3초 후 조회하면 False."""
        await connection.initialize()

        assert await blacklist_service.blacklist_token("abc123", 2) is True
        assert await blacklist_service.is_token_blacklisted("abc123") is True

        clock.advance(3)

        assert await blacklist_service.is_token_blacklisted("abc123") is False

    @pytest.mark.asyncio
    async def test_unknown_token_is_not_blacklisted(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
    ) -> None:
        await connection.initialize()

        assert await blacklist_service.is_token_blacklisted("never-seen") is False

    @pytest.mark.asyncio
    async def test_value_must_match_marker(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """마커와 다른 값은 블랙리스트로 보지 않음."""
        await connection.initialize()
        redis_server.data[f"{BLACKLIST_KEY_PREFIX}tampered"] = "false"

        assert await blacklist_service.is_token_blacklisted("tampered") is False

    @pytest.mark.asyncio
    async def test_atomic_write_sets_expiry_in_one_command(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """ATOMIC: SET ... EX 한 번."""
        await connection.initialize()

        await blacklist_service.blacklist_token("atomic-token", 60)

        assert command_names(redis_server) == ["PING", "SET"]
        assert redis_server.commands[-1] == ("SET", "bl_atomic-token", "true", 60)
        assert redis_server.ttl("bl_atomic-token") == 60

    @pytest.mark.asyncio
    async def test_legacy_write_uses_set_then_expire(
        self,
        connection: RedisConnectionManager,
        redis_server: FakeRedisServer,
    ) -> None:
        """LEGACY: SET 후 EXPIRE."""
        service = TokenBlacklistService(
            connection,
            RedisBlacklistStore(connection),
            write_mode=WriteMode.LEGACY,
        )
        await connection.initialize()

        assert await service.blacklist_token("legacy-token", 60) is True

        assert command_names(redis_server) == ["PING", "SET", "EXPIRE"]
        assert redis_server.ttl("bl_legacy-token") == 60

    @pytest.mark.asyncio
    async def test_legacy_write_failure_leaves_key_without_expiry(
        self,
        connection: RedisConnectionManager,
        redis_server: FakeRedisServer,
    ) -> None:
        """EXPIRE 실패 시 TTL 없는 키가 남음 (보상 트랜잭션 없음)."""
        service = TokenBlacklistService(
            connection,
            RedisBlacklistStore(connection),
            write_mode=WriteMode.LEGACY,
        )
        await connection.initialize()
        redis_server.fail_commands["EXPIRE"] = ResponseError("EXPIRE failed")

        assert await service.blacklist_token("half-written", 60) is False
        assert redis_server.ttl("bl_half-written") == -1

    @pytest.mark.asyncio
    async def test_command_error_keeps_connection(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """연결 오류가 아닌 명령 오류는 재연결을 예약하지 않음."""
        await connection.initialize()
        redis_server.fail_commands["GET"] = ResponseError("WRONGTYPE")

        assert await blacklist_service.is_token_blacklisted("abc123") is False
        assert connection.state is ConnectionState.CONNECTED
        assert connection.reconnect_pending is False

    @pytest.mark.asyncio
    async def test_connection_lost_during_command(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """명령 도중 연결이 끊기면 False 반환 후 재연결 예약."""
        await connection.initialize()
        redis_server.available = False

        assert await blacklist_service.is_token_blacklisted("abc123") is False
        assert connection.state is ConnectionState.ERROR
        assert connection.reconnect_pending is True

        await connection.close()

    @pytest.mark.parametrize(
        ("token", "expiry"),
        [
            ("", 10),
            (None, 10),
            ("abc123", 0),
            ("abc123", -5),
            ("abc123", 1.5),
            ("abc123", True),
            ("abc123", "10"),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_arguments_return_false(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
        token,
        expiry,
    ) -> None:
        """전제조건 위반은 명령 없이 False."""
        await connection.initialize()

        assert await blacklist_service.blacklist_token(token, expiry) is False
        assert command_names(redis_server) == ["PING"]

    @pytest.mark.asyncio
    async def test_empty_token_check_returns_false(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
    ) -> None:
        await connection.initialize()

        assert await blacklist_service.is_token_blacklisted("") is False


class TestBlacklistDisconnected:
    """연결이 끊긴 상태에서의 동작 (fail-open 기본)."""

    @pytest.mark.asyncio
    async def test_check_fails_open_without_waiting(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """이미 블랙리스트에 있어도 연결이 없으면 False."""
        await connection.initialize()
        assert await blacklist_service.blacklist_token("abc123", 60) is True

        redis_server.available = False
        connection.on_error(RedisConnectionError("Connection reset by peer"))

        assert await blacklist_service.is_token_blacklisted("abc123") is False

        await connection.close()

    @pytest.mark.asyncio
    async def test_check_triggers_background_connect(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """조회는 재연결을 시작만 하고 기다리지 않음."""
        assert connection.state is ConnectionState.DISCONNECTED

        assert await blacklist_service.is_token_blacklisted("abc123") is False
        assert redis_server.clients == []  # 아직 연결 시도 전

        await asyncio.sleep(0)

        assert len(redis_server.clients) == 1
        assert connection.is_open is True

    @pytest.mark.asyncio
    async def test_blacklist_waits_for_reconnect(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
    ) -> None:
        """쓰기는 연결을 먼저 시도한 뒤 진행."""
        assert connection.state is ConnectionState.DISCONNECTED

        assert await blacklist_service.blacklist_token("abc123", 60) is True
        assert connection.is_open is True

    @pytest.mark.asyncio
    async def test_blacklist_joins_in_flight_connect(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        """조회가 시작한 연결이 진행 중이면 쓰기는 그 결과를 기다린 뒤 진행."""
        redis_server.ping_gate = asyncio.Event()

        assert await blacklist_service.is_token_blacklisted("abc123") is False
        write = asyncio.create_task(blacklist_service.blacklist_token("abc123", 60))
        await asyncio.sleep(0)
        assert connection.state is ConnectionState.CONNECTING
        assert write.done() is False

        redis_server.ping_gate.set()

        assert await write is True
        assert connection.is_open is True
        assert len(redis_server.clients) == 1
        assert await blacklist_service.is_token_blacklisted("abc123") is True

    @pytest.mark.asyncio
    async def test_blacklist_returns_false_when_unavailable(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
    ) -> None:
        redis_server.available = False

        assert await blacklist_service.blacklist_token("abc123", 60) is False
        assert connection.state is ConnectionState.ERROR

        await connection.close()

    @pytest.mark.asyncio
    async def test_error_callback_schedules_reconnect(
        self,
        connection: RedisConnectionManager,
        blacklist_service: TokenBlacklistService,
        redis_server: FakeRedisServer,
        controlled_sleep: ControlledSleep,
    ) -> None:
        """오류 콜백 → 재연결 예약, 그 사이 쓰기는 예외 없이 False, 복구 후 정상."""
        await connection.initialize()
        assert await blacklist_service.blacklist_token("before-outage", 60) is True

        redis_server.available = False
        connection.on_error(RedisConnectionError("Connection reset by peer"))

        assert connection.reconnect_pending is True
        await asyncio.sleep(0)
        assert controlled_sleep.delays == [5.0]

        assert await blacklist_service.blacklist_token("during-outage", 60) is False

        # 복구
        redis_server.available = True
        reconnect = connection._reconnect_task
        assert reconnect is not None
        controlled_sleep.release()
        await reconnect

        assert connection.is_open is True
        assert await blacklist_service.is_token_blacklisted("before-outage") is True
        assert await blacklist_service.is_token_blacklisted("during-outage") is False

        await connection.close()

    @pytest.mark.asyncio
    async def test_fail_closed_policy(
        self,
        connection: RedisConnectionManager,
        redis_server: FakeRedisServer,
    ) -> None:
        """FAIL_CLOSED: 판정 불가 시 폐기된 것으로 취급."""
        service = TokenBlacklistService(
            connection,
            RedisBlacklistStore(connection),
            failure_policy=FailurePolicy.FAIL_CLOSED,
        )
        redis_server.available = False

        assert await service.is_token_blacklisted("abc123") is True

        await connection.close()

    @pytest.mark.asyncio
    async def test_fail_closed_on_command_error(
        self,
        connection: RedisConnectionManager,
        redis_server: FakeRedisServer,
    ) -> None:
        service = TokenBlacklistService(
            connection,
            RedisBlacklistStore(connection),
            failure_policy=FailurePolicy.FAIL_CLOSED,
        )
        await connection.initialize()
        redis_server.fail_commands["GET"] = ResponseError("WRONGTYPE")

        assert await service.is_token_blacklisted("abc123") is True


class TestBlacklistNeverRaises:
    """예상치 못한 예외도 bool로 변환."""

    @pytest.fixture
    def open_connection(self) -> MagicMock:
        connection = MagicMock()
        connection.is_open = True
        return connection

    @pytest.mark.asyncio
    async def test_blacklist_unexpected_error(self, open_connection: MagicMock) -> None:
        store = AsyncMock()
        store.add.side_effect = RuntimeError("boom")
        service = TokenBlacklistService(open_connection, store)

        assert await service.blacklist_token("abc123", 60) is False
        open_connection.on_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_check_unexpected_error(self, open_connection: MagicMock) -> None:
        store = AsyncMock()
        store.contains.side_effect = RuntimeError("boom")
        service = TokenBlacklistService(open_connection, store)

        assert await service.is_token_blacklisted("abc123") is False

    @pytest.mark.asyncio
    async def test_store_receives_write_mode(self, open_connection: MagicMock) -> None:
        store = AsyncMock()
        service = TokenBlacklistService(open_connection, store, write_mode=WriteMode.LEGACY)

        assert await service.blacklist_token("abc123", 60) is True
        store.add.assert_awaited_once_with("abc123", 60, write_mode=WriteMode.LEGACY)
