"""workspace_auth 테스트 공통 Fixtures."""

from __future__ import annotations

import pytest

from workspace_auth.application.blacklist.policies import (
    FailurePolicy,
    ReconnectPolicy,
    WriteMode,
)
from workspace_auth.application.blacklist.services import TokenBlacklistService
from workspace_auth.infrastructure.persistence_redis import (
    RedisBlacklistStore,
    RedisConnectionManager,
)
from workspace_auth.setup.config import Settings, get_settings
from workspace_auth.tests.fakes import (
    ControlledSleep,
    FakeClock,
    FakeRedisServer,
    YieldingSleep,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def redis_server(clock: FakeClock) -> FakeRedisServer:
    return FakeRedisServer(clock)


@pytest.fixture
def yielding_sleep() -> YieldingSleep:
    """대기 시간을 기록하고 바로 양보하는 sleep."""
    return YieldingSleep()


@pytest.fixture
def controlled_sleep() -> ControlledSleep:
    return ControlledSleep()


@pytest.fixture
def connection(redis_server: FakeRedisServer, controlled_sleep: ControlledSleep) -> RedisConnectionManager:
    """FakeRedis에 붙는 연결 관리자 (초기화 전)."""
    return RedisConnectionManager(
        "redis://fake:6379",
        policy=ReconnectPolicy.fixed(5.0),
        client_factory=redis_server.client,
        sleep=controlled_sleep,
    )


@pytest.fixture
def blacklist_service(connection: RedisConnectionManager) -> TokenBlacklistService:
    return TokenBlacklistService(
        connection,
        RedisBlacklistStore(connection),
        write_mode=WriteMode.ATOMIC,
        failure_policy=FailurePolicy.FAIL_OPEN,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        redis_url="redis://fake:6379",
        jwt_secret_key="test-secret-key-for-testing-only",
        environment="test",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
