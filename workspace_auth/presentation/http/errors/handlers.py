"""Exception Handlers.

애플리케이션 예외를 HTTP 응답으로 변환합니다.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from workspace_auth.application.common.exceptions import ApplicationError
from workspace_auth.application.token.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    LogoutRejectedError,
    MissingTokenError,
    PermissionDeniedError,
    TokenRevocationUnavailableError,
    TokenRevokedError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, exc: ApplicationError, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": code})


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록."""

    @app.exception_handler(MissingTokenError)
    async def missing_token_handler(request: Request, exc: MissingTokenError):
        return _error(401, exc, "MISSING_TOKEN")

    @app.exception_handler(InvalidTokenError)
    async def invalid_token_handler(request: Request, exc: InvalidTokenError):
        return _error(403, exc, "INVALID_TOKEN")

    @app.exception_handler(TokenRevokedError)
    async def token_revoked_handler(request: Request, exc: TokenRevokedError):
        return _error(401, exc, "TOKEN_REVOKED")

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        return _error(401, exc, "AUTHENTICATION_FAILED")

    @app.exception_handler(LogoutRejectedError)
    async def logout_rejected_handler(request: Request, exc: LogoutRejectedError):
        return _error(400, exc, "LOGOUT_INVALID_TOKEN")

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
        return _error(403, exc, "FORBIDDEN")

    @app.exception_handler(TokenRevocationUnavailableError)
    async def revocation_unavailable_handler(
        request: Request, exc: TokenRevocationUnavailableError
    ):
        logger.warning("Token revocation unavailable", extra={"url.path": request.url.path})
        return _error(503, exc, "TOKEN_REVOCATION_UNAVAILABLE")

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        return _error(400, exc, "APPLICATION_ERROR")
