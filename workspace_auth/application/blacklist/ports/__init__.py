"""Blacklist Ports."""

from workspace_auth.application.blacklist.ports.blacklist_store import BlacklistStore
from workspace_auth.application.blacklist.ports.cache_connection import (
    CacheConnection,
    ConnectionState,
)

__all__ = ["BlacklistStore", "CacheConnection", "ConnectionState"]
