from workspace_auth.presentation.http.auth.dependencies import (
    get_access_token,
    get_current_user,
    parse_bearer,
    require_roles,
)

__all__ = ["get_access_token", "get_current_user", "parse_bearer", "require_roles"]
