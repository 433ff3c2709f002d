"""Blacklist Exceptions.

캐시 연결/명령 실패 분류입니다.
공개 블랙리스트 연산 경계에서 모두 잡혀 bool 반환 또는 재연결 예약으로 변환됩니다.
"""

from __future__ import annotations

from workspace_auth.application.common.exceptions.base import ApplicationError


class BlacklistError(ApplicationError):
    """블랙리스트 기본 예외."""


class CacheConnectionError(BlacklistError):
    """캐시 서버 연결 실패."""

    def __init__(self, reason: str = "Cache connection failed") -> None:
        super().__init__(reason)


class CacheCommandError(BlacklistError):
    """캐시 명령 실행 실패."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"{command} failed: {reason}")
