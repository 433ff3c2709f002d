"""Blacklist Policies.

재연결 정책과 장애 시 판정 정책입니다.

재연결 알고리즘:
- delay(n) = min(base_delay * multiplier**n, max_delay)
- multiplier=1.0 이면 고정 간격 (기본 5초)
- max_attempts=None 이면 무제한 재시도
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailurePolicy(str, Enum):
    """캐시 장애 시 블랙리스트 조회 결과 정책.

    - FAIL_OPEN: 폐기 여부를 확인할 수 없으면 유효한 토큰으로 취급 (False)
    - FAIL_CLOSED: 폐기 여부를 확인할 수 없으면 폐기된 토큰으로 취급 (True)
    """

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"

    @property
    def unknown_result(self) -> bool:
        """판정 불가 상황에서 is_token_blacklisted가 반환할 값."""
        return self is FailurePolicy.FAIL_CLOSED


class WriteMode(str, Enum):
    """블랙리스트 쓰기 방식.

    - ATOMIC: SET key value EX ttl (단일 명령)
    - LEGACY: SET 후 EXPIRE (두 명령 사이에 프로세스가 죽으면 TTL 없는 키가 남음)
    """

    ATOMIC = "atomic"
    LEGACY = "legacy"


@dataclass(frozen=True)
class ReconnectPolicy:
    """재연결 정책 설정."""

    base_delay: float = 5.0  # 초
    multiplier: float = 1.0
    max_delay: float = 60.0  # 초
    max_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be >= 0")
        if self.multiplier < 1.0:
            raise ValueError("multiplier must be >= 1.0")
        if self.max_attempts is not None and self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0 or None")

    def delay_for(self, attempt: int) -> float:
        """재연결 지연 시간 계산.

        Args:
            attempt: 현재까지 연속 실패 횟수 (0부터 시작)

        Returns:
            지연 시간 (초)
        """
        delay = self.base_delay * (self.multiplier**attempt)
        if self.multiplier > 1.0:
            delay = min(delay, self.max_delay)
        return max(0.0, delay)

    def allows(self, attempt: int) -> bool:
        """attempt 번째 재연결 예약이 허용되는지 여부."""
        return self.max_attempts is None or attempt < self.max_attempts

    @classmethod
    def fixed(cls, delay: float = 5.0) -> ReconnectPolicy:
        """고정 간격 무제한 재시도."""
        return cls(base_delay=delay, multiplier=1.0, max_attempts=None)
