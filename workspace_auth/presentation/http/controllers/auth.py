"""Auth Controller.

로그아웃과 현재 사용자 조회 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends

from workspace_auth.application.token.commands import LogoutInteractor
from workspace_auth.application.token.dto import LogoutRequest, TokenClaims
from workspace_auth.application.token.exceptions import AuthenticationError, LogoutRejectedError
from workspace_auth.presentation.http.auth import get_access_token, get_current_user
from workspace_auth.presentation.http.schemas import CurrentUserResponse, LogoutResponse
from workspace_auth.setup.dependencies import get_logout_interactor

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/logout", response_model=LogoutResponse, summary="로그아웃")
async def logout(
    access_token: str | None = Depends(get_access_token),
    interactor: LogoutInteractor = Depends(get_logout_interactor),
) -> LogoutResponse:
    """토큰을 남은 유효 시간 동안 블랙리스트에 등록합니다."""
    try:
        await interactor.execute(LogoutRequest(access_token=access_token))
    except AuthenticationError as e:
        raise LogoutRejectedError(e.message) from e

    return LogoutResponse()


@router.get("/me", response_model=CurrentUserResponse, summary="현재 사용자")
async def me(current_user: TokenClaims = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse(
        user_id=current_user.user_id,
        company_id=current_user.company_id,
        email=current_user.email,
        role=current_user.role,
        expires_at=current_user.exp,
    )
