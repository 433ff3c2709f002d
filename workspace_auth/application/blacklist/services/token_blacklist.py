"""Token Blacklist Service.

로그아웃 등으로 명시적으로 무효화된 토큰을 관리합니다.

Contract:
    - 공개 연산은 예외를 던지지 않고 bool을 반환합니다.
    - blacklist_token: 연결이 없으면 재연결을 기다린 뒤 진행, 실패 시 False
    - is_token_blacklisted: 연결이 없으면 백그라운드 재연결만 시작하고
      FailurePolicy에 따른 값을 즉시 반환 (기본 fail-open → False)
    - 블랙리스트에 없다는 것은 "의견 없음"일 뿐, 서명/만료 검증은 호출자 책임입니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from workspace_auth.application.blacklist.exceptions import (
    BlacklistError,
    CacheConnectionError,
)
from workspace_auth.application.blacklist.policies import FailurePolicy, WriteMode

if TYPE_CHECKING:
    from workspace_auth.application.blacklist.ports import BlacklistStore, CacheConnection

logger = logging.getLogger(__name__)


class TokenBlacklistService:
    """토큰 블랙리스트 서비스."""

    def __init__(
        self,
        connection: "CacheConnection",
        store: "BlacklistStore",
        *,
        write_mode: WriteMode = WriteMode.ATOMIC,
        failure_policy: FailurePolicy = FailurePolicy.FAIL_OPEN,
    ) -> None:
        """Initialize.

        Args:
            connection: 캐시 연결 관리자 (DI)
            store: 블랙리스트 저장소 (DI)
            write_mode: 쓰기 방식
            failure_policy: 캐시 장애 시 조회 결과 정책
        """
        self._connection = connection
        self._store = store
        self._write_mode = write_mode
        self._failure_policy = failure_policy

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    @property
    def write_mode(self) -> WriteMode:
        return self._write_mode

    async def blacklist_token(self, token: str, expiry_seconds: int) -> bool:
        """토큰을 블랙리스트에 추가.

        Args:
            token: 인증 토큰 원문 (빈 문자열 불가)
            expiry_seconds: 만료 시간 (양의 정수, 초)

        Returns:
            저장 성공 여부
        """
        if not _is_valid_token(token):
            logger.warning("Refusing to blacklist empty or non-string token")
            return False
        if not _is_positive_int(expiry_seconds):
            logger.warning(
                "Refusing to blacklist token with invalid expiry",
                extra={"token": token[:8], "expiry_seconds": repr(expiry_seconds)},
            )
            return False

        try:
            if not self._connection.is_open:
                logger.warning("Redis not connected, reconnecting before blacklist write")
                await self._connection.initialize()
                if not self._connection.is_open:
                    logger.error(
                        "Failed to blacklist token, Redis unavailable",
                        extra={"token": token[:8], "state": self._connection.state.value},
                    )
                    return False

            await self._store.add(token, expiry_seconds, write_mode=self._write_mode)
        except CacheConnectionError as exc:
            logger.error("Failed to blacklist token", extra={"token": token[:8], "error": str(exc)})
            self._connection.on_error(exc)
            return False
        except BlacklistError as exc:
            logger.error("Failed to blacklist token", extra={"token": token[:8], "error": str(exc)})
            return False
        except Exception:
            logger.exception("Unexpected error while blacklisting token", extra={"token": token[:8]})
            return False

        logger.info(
            "Token blacklisted",
            extra={"token": token[:8], "expiry_seconds": expiry_seconds},
        )
        return True

    async def is_token_blacklisted(self, token: str) -> bool:
        """토큰이 블랙리스트에 있는지 확인.

        Args:
            token: 인증 토큰 원문

        Returns:
            블랙리스트에 있으면 True. 판정 불가 시 FailurePolicy에 따름.
        """
        if not _is_valid_token(token):
            return False

        if not self._connection.is_open:
            logger.warning(
                "Redis not connected, blacklist check skipped",
                extra={"policy": self._failure_policy.value},
            )
            self._connection.ensure_connecting()
            return self._failure_policy.unknown_result

        try:
            return await self._store.contains(token)
        except CacheConnectionError as exc:
            logger.error("Failed to check token blacklist", extra={"token": token[:8], "error": str(exc)})
            self._connection.on_error(exc)
        except BlacklistError as exc:
            logger.error("Failed to check token blacklist", extra={"token": token[:8], "error": str(exc)})
        except Exception:
            logger.exception("Unexpected error while checking token blacklist", extra={"token": token[:8]})
        return self._failure_policy.unknown_result


def _is_valid_token(token: object) -> bool:
    return isinstance(token, str) and bool(token)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
