"""Token Commands."""

from workspace_auth.application.token.commands.logout import LogoutInteractor

__all__ = ["LogoutInteractor"]
