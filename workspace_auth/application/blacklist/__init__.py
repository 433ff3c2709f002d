"""Blacklist Bounded Context.

토큰 블랙리스트 관리 관련 애플리케이션 컴포넌트입니다.
"""

from workspace_auth.application.blacklist.policies import (
    FailurePolicy,
    ReconnectPolicy,
    WriteMode,
)
from workspace_auth.application.blacklist.services.token_blacklist import TokenBlacklistService

__all__ = ["FailurePolicy", "ReconnectPolicy", "TokenBlacklistService", "WriteMode"]
