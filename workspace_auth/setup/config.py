"""Application Settings.

환경변수 기반 설정입니다.
env_prefix="AUTH_" 를 기본으로 사용하고, 기존 배포 환경과의 호환을 위해
REDIS_URL / JWT_SECRET 같은 prefix 없는 이름도 함께 받습니다.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정.

    예시:
        REDIS_URL → redis_url
        AUTH_BLACKLIST_FAILURE_POLICY → blacklist_failure_policy
    """

    # Service
    app_name: str = "Workspace Auth API"
    service_name: str = "workspace-auth"
    service_version: str = "1.0.0"
    environment: str = "local"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"
    cors_origins: Optional[str] = None  # comma separated

    # Redis
    redis_url: str = Field(
        default="redis://redis:6379",
        validation_alias=AliasChoices("AUTH_REDIS_URL", "REDIS_URL", "redis_url"),
    )
    redis_socket_timeout_seconds: float = 5.0
    redis_socket_connect_timeout_seconds: float = 5.0

    # Reconnect policy (기본값: 5초 고정 간격, 무제한 재시도)
    redis_reconnect_delay_seconds: float = 5.0
    redis_reconnect_multiplier: float = 1.0
    redis_reconnect_max_delay_seconds: float = 60.0
    redis_reconnect_max_attempts: Optional[int] = None

    # Blacklist
    blacklist_write_mode: Literal["atomic", "legacy"] = "atomic"
    blacklist_failure_policy: Literal["fail_open", "fail_closed"] = "fail_open"
    logout_fallback_ttl_seconds: int = 3600

    # JWT
    jwt_secret_key: str = Field(
        default="workspace_reservation_secret",
        validation_alias=AliasChoices("AUTH_JWT_SECRET_KEY", "JWT_SECRET", "jwt_secret_key"),
    )
    jwt_algorithm: str = "HS256"
    access_token_exp_minutes: int = 60 * 24

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("redis_reconnect_max_attempts", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value: Optional[str]):
        """빈 문자열을 None으로 변환."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("redis_reconnect_delay_seconds", "redis_reconnect_max_delay_seconds")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("delay must be >= 0")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        if not self.cors_origins:
            return ["http://localhost:3000", "http://localhost:5173"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """캐시된 Settings 인스턴스 반환 (FastAPI 공식 패턴)."""
    return Settings()
