"""Authentication Exceptions."""

from __future__ import annotations

from workspace_auth.application.common.exceptions.base import ApplicationError


class AuthenticationError(ApplicationError):
    """인증 실패."""

    def __init__(self, reason: str = "Authentication failed") -> None:
        super().__init__(reason)


class MissingTokenError(AuthenticationError):
    """인증 토큰 누락."""

    def __init__(self) -> None:
        super().__init__("Authentication token is required")


class InvalidTokenError(AuthenticationError):
    """서명 불일치 또는 만료된 토큰."""

    def __init__(self, reason: str = "Invalid or expired token") -> None:
        super().__init__(reason)


class TokenRevokedError(AuthenticationError):
    """블랙리스트에 등록된 토큰."""

    def __init__(self, jti: str | None = None) -> None:
        self.jti = jti
        super().__init__("Token has been revoked")


class PermissionDeniedError(ApplicationError):
    """권한 부족."""

    def __init__(self, role: str | None = None) -> None:
        self.role = role
        super().__init__("Insufficient permissions for this action")


class TokenRevocationUnavailableError(ApplicationError):
    """블랙리스트 저장 실패 (캐시 장애)."""

    def __init__(self) -> None:
        super().__init__("Token revocation is temporarily unavailable")


class LogoutRejectedError(ApplicationError):
    """토큰 누락/검증 실패로 로그아웃 요청 거부."""

    def __init__(self, reason: str = "Invalid logout request") -> None:
        super().__init__(reason)
