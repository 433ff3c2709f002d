"""Common application exceptions."""

from workspace_auth.application.common.exceptions.base import ApplicationError

__all__ = ["ApplicationError"]
