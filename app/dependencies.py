# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The StoreGuard is created by the app lifespan (app/main.py) and kept on
# app.state; handlers never reach for a module-level store.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.guard import StoreGuard


def get_store_guard(request: Request) -> StoreGuard:
    """
    Get the guard wrapping the application's Store.

    Returns the instance attached during startup.
    """
    return request.app.state.guard


# Type alias for dependency injection
StoreGuardDep = Annotated[StoreGuard, Depends(get_store_guard)]


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running app was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
