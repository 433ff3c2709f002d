"""Auth HTTP Schemas."""

from __future__ import annotations

from pydantic import BaseModel


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Session closed successfully"


class CurrentUserResponse(BaseModel):
    user_id: int
    company_id: int | None = None
    email: str
    role: str
    expires_at: int


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    status: str
    cache: str
    reconnect_pending: bool
