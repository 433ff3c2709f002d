"""Logging Configuration.

ECS 호환 JSON 로깅 설정입니다.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import ecs_logging

from workspace_auth.setup.config import Settings, get_settings

_base_record_factory = logging.getLogRecordFactory()


def setup_logging(level: str | None = None, settings: Settings | None = None) -> None:
    """로깅 설정.

    Args:
        level: 로그 레벨 (None이면 설정값 사용)
        settings: 서비스 메타데이터 출처 (None이면 get_settings())
    """
    settings = settings or get_settings()

    # ECS JSON 포맷터
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ecs_logging.StdlibFormatter())

    # 루트 로거 설정
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # 서비스 메타데이터 추가 (재호출 시 중복 래핑 방지)
    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = _base_record_factory(*args, **kwargs)
        record.service = {
            "name": settings.service_name,
            "version": settings.service_version,
            "environment": settings.environment,
        }
        return record

    logging.setLogRecordFactory(record_factory)

    # 외부 라이브러리 로그 레벨 조정
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
