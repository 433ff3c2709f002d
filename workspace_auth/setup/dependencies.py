"""Dependency Injection.

Clean Architecture의 Composition Root입니다.
모든 의존성을 여기서 조립하고, FastAPI Depends 제공자를 정의합니다.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Awaitable, Callable

from fastapi import Depends, Request

from workspace_auth.application.blacklist.policies import (
    FailurePolicy,
    ReconnectPolicy,
    WriteMode,
)
from workspace_auth.application.blacklist.services import TokenBlacklistService
from workspace_auth.application.token.commands import LogoutInteractor
from workspace_auth.application.token.queries import ValidateTokenQueryService
from workspace_auth.infrastructure.persistence_redis import (
    RedisBlacklistStore,
    RedisConnectionManager,
    build_async_client,
)
from workspace_auth.infrastructure.persistence_redis.connection_manager import ClientFactory
from workspace_auth.infrastructure.security import JwtTokenService
from workspace_auth.setup.config import Settings, get_settings


def build_reconnect_policy(settings: Settings) -> ReconnectPolicy:
    """설정값으로 재연결 정책 생성."""
    return ReconnectPolicy(
        base_delay=settings.redis_reconnect_delay_seconds,
        multiplier=settings.redis_reconnect_multiplier,
        max_delay=settings.redis_reconnect_max_delay_seconds,
        max_attempts=settings.redis_reconnect_max_attempts,
    )


class Container:
    """의존성 컨테이너.

    연결 관리자를 단독으로 소유하며, 애플리케이션 lifespan 동안 유지됩니다.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client_factory: ClientFactory | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings or get_settings()

        # Infrastructure
        self._connection = RedisConnectionManager(
            self._settings.redis_url,
            policy=build_reconnect_policy(self._settings),
            client_factory=client_factory
            or partial(
                build_async_client,
                socket_timeout=self._settings.redis_socket_timeout_seconds,
                socket_connect_timeout=self._settings.redis_socket_connect_timeout_seconds,
            ),
            sleep=sleep,
        )
        self._blacklist_store = RedisBlacklistStore(self._connection)
        self._token_service = JwtTokenService(
            secret_key=self._settings.jwt_secret_key,
            algorithm=self._settings.jwt_algorithm,
            access_token_expire_minutes=self._settings.access_token_exp_minutes,
        )

        # Application
        self._blacklist_service = TokenBlacklistService(
            self._connection,
            self._blacklist_store,
            write_mode=WriteMode(self._settings.blacklist_write_mode),
            failure_policy=FailurePolicy(self._settings.blacklist_failure_policy),
        )
        self._logout_interactor = LogoutInteractor(
            self._token_service,
            self._blacklist_service,
            fallback_ttl_seconds=self._settings.logout_fallback_ttl_seconds,
        )
        self._validate_token_service = ValidateTokenQueryService(
            self._token_service,
            self._blacklist_service,
        )

    async def init(self) -> None:
        """의존성 초기화.

        Redis 연결 실패는 치명적이지 않으며 재연결이 예약됩니다.
        """
        await self._connection.initialize()

    async def close(self) -> None:
        """리소스 정리."""
        await self._connection.close()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def connection(self) -> RedisConnectionManager:
        return self._connection

    @property
    def token_service(self) -> JwtTokenService:
        return self._token_service

    @property
    def blacklist_service(self) -> TokenBlacklistService:
        return self._blacklist_service

    @property
    def logout_interactor(self) -> LogoutInteractor:
        return self._logout_interactor

    @property
    def validate_token_service(self) -> ValidateTokenQueryService:
        return self._validate_token_service


# ============================================================
# FastAPI Dependencies
# ============================================================


def get_container(request: Request) -> Container:
    """애플리케이션에 등록된 Container 제공자."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Container not initialized")
    return container


def get_connection(container: Container = Depends(get_container)) -> RedisConnectionManager:
    return container.connection


def get_blacklist_service(
    container: Container = Depends(get_container),
) -> TokenBlacklistService:
    return container.blacklist_service


def get_logout_interactor(container: Container = Depends(get_container)) -> LogoutInteractor:
    return container.logout_interactor


def get_validate_token_service(
    container: Container = Depends(get_container),
) -> ValidateTokenQueryService:
    return container.validate_token_service
