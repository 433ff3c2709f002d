"""Root Router.

최상위 라우터로, 모든 하위 라우터를 통합합니다.
"""

from fastapi import APIRouter

from workspace_auth.presentation.http.controllers import auth, health


def build_root_router(api_v1_prefix: str = "/api/v1") -> APIRouter:
    """설정된 API prefix로 루트 라우터를 구성합니다."""
    router = APIRouter()
    router.include_router(health.router)
    router.include_router(auth.router, prefix=api_v1_prefix)
    return router
