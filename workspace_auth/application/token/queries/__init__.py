"""Token Queries."""

from workspace_auth.application.token.queries.validate import ValidateTokenQueryService

__all__ = ["ValidateTokenQueryService"]
