# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides a health check endpoint for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.dependencies import SettingsDep, StoreGuardDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str
    task_count: int
    user_count: int


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
def health_check(guard: StoreGuardDep, settings: SettingsDep):
    """
    Health check endpoint.

    Also proves the store lock can be taken.
    """
    task_count, user_count = guard.read(lambda store: (store.task_count, store.user_count))

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
        task_count=task_count,
        user_count=user_count,
    )
