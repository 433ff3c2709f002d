"""Health Controller.

Kubernetes probe용 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from workspace_auth.infrastructure.persistence_redis import RedisConnectionManager
from workspace_auth.presentation.http.schemas import HealthResponse, ReadinessResponse
from workspace_auth.setup.dependencies import Container, get_connection, get_container

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(container: Container = Depends(get_container)) -> HealthResponse:
    settings = container.settings
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.service_version,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(connection: RedisConnectionManager = Depends(get_connection)):
    body = ReadinessResponse(
        status="ready" if connection.is_open else "degraded",
        cache=connection.state.value,
        reconnect_pending=connection.reconnect_pending,
    )
    return JSONResponse(status_code=200 if connection.is_open else 503, content=body.model_dump())
