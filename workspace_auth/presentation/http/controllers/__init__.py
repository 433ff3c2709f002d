from workspace_auth.presentation.http.controllers.root_router import build_root_router

__all__ = ["build_root_router"]
