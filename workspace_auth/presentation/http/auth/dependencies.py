"""Auth Dependencies.

FastAPI Depends용 인증 의존성입니다.
"""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Header

from workspace_auth.application.token.dto import TokenClaims
from workspace_auth.application.token.exceptions import PermissionDeniedError
from workspace_auth.application.token.queries import ValidateTokenQueryService
from workspace_auth.setup.dependencies import get_validate_token_service


def parse_bearer(header_value: Optional[str]) -> Optional[str]:
    """Bearer 토큰에서 실제 토큰 값을 추출합니다."""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_access_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[str]:
    return parse_bearer(authorization)


async def get_current_user(
    access_token: Optional[str] = Depends(get_access_token),
    validate_token_service: ValidateTokenQueryService = Depends(get_validate_token_service),
) -> TokenClaims:
    """현재 인증된 사용자 조회.

    Raises:
        MissingTokenError: 401
        InvalidTokenError: 403
        TokenRevokedError: 401
    """
    return await validate_token_service.execute(access_token)


def require_roles(*roles: str) -> Callable[..., TokenClaims]:
    """허용된 역할인지 확인하는 의존성을 반환합니다. 역할을 지정하지 않으면 모두 허용."""
    allowed = set(roles)

    async def _checker(current_user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if allowed and current_user.role not in allowed:
            raise PermissionDeniedError(current_user.role)
        return current_user

    return _checker
