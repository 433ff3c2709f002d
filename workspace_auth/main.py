"""Workspace Auth API Application Entry Point.

워크스페이스 예약 서비스의 인증/토큰 블랙리스트 API입니다.

Architecture:
    HTTP (logout, me)
        │
        ├── LogoutInteractor / ValidateTokenQueryService
        │       │
        │       └── TokenBlacklistService
        │               │
        │               ├── RedisBlacklistStore (bl_{token})
        │               └── RedisConnectionManager (ReconnectPolicy)
        │
        └── JwtTokenService (서명/만료 검증)

Run:
    uvicorn workspace_auth.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workspace_auth.presentation.http.controllers import build_root_router
from workspace_auth.presentation.http.errors import register_exception_handlers
from workspace_auth.setup.config import Settings, get_settings
from workspace_auth.setup.dependencies import Container
from workspace_auth.setup.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리."""
    container: Container = app.state.container

    # Startup
    settings = container.settings
    logger.info(
        "Starting Workspace Auth API",
        extra={
            "service_name": settings.service_name,
            "service_version": settings.service_version,
            "env": settings.environment,
        },
    )
    await container.init()

    yield

    # Shutdown
    logger.info("Shutting down Workspace Auth API")
    await container.close()


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    """FastAPI 애플리케이션 팩토리."""
    settings = settings or get_settings()

    # 로깅 설정
    setup_logging("DEBUG" if settings.environment == "local" else settings.log_level, settings)

    app = FastAPI(
        title=settings.app_name,
        description="Workspace reservation authentication service",
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.container = container or Container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 예외 핸들러 등록
    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(build_root_router(settings.api_v1_prefix))

    return app


# 애플리케이션 인스턴스
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "workspace_auth.main:app",
        host="0.0.0.0",
        port=8000,
    )
