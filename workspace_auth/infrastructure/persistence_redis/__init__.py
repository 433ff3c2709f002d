"""Redis Persistence Infrastructure.

연결 관리자와 블랙리스트 저장소 구현체입니다.
"""

from workspace_auth.infrastructure.persistence_redis.blacklist_store_redis import (
    BLACKLIST_KEY_PREFIX,
    BLACKLIST_MARKER,
    RedisBlacklistStore,
)
from workspace_auth.infrastructure.persistence_redis.connection_manager import (
    RedisConnectionManager,
    build_async_client,
)

__all__ = [
    "BLACKLIST_KEY_PREFIX",
    "BLACKLIST_MARKER",
    "RedisBlacklistStore",
    "RedisConnectionManager",
    "build_async_client",
]
