from workspace_auth.presentation.http.schemas.auth import (
    CurrentUserResponse,
    HealthResponse,
    LogoutResponse,
    ReadinessResponse,
)

__all__ = ["CurrentUserResponse", "HealthResponse", "LogoutResponse", "ReadinessResponse"]
