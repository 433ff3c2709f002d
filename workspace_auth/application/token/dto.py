"""Token DTOs."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """검증된 액세스 토큰 클레임."""

    user_id: int
    company_id: int | None
    email: str
    role: str
    jti: str
    iat: int
    exp: int


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """발급된 액세스 토큰."""

    access_token: str
    jti: str
    expires_at: int


@dataclass(frozen=True, slots=True)
class LogoutRequest:
    """로그아웃 요청."""

    access_token: str | None = None


@dataclass(frozen=True, slots=True)
class LogoutResult:
    """로그아웃 결과."""

    user_id: int
    blacklisted_for_seconds: int
