"""Security Infrastructure."""

from workspace_auth.infrastructure.security.jwt_token_service import JwtTokenService

__all__ = ["JwtTokenService"]
