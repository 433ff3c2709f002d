"""Blacklist Services."""

from workspace_auth.application.blacklist.services.token_blacklist import TokenBlacklistService

__all__ = ["TokenBlacklistService"]
