"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from forum.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness plus the settings that govern cascade behaviour."""

    status: str
    timestamp: datetime
    environment: str
    git_sha: str
    isolation_level: str
    max_conflict_retries: int
    cascade_timeout_seconds: float | None


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is serving, without touching the database."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        environment=settings.environment,
        git_sha=settings.git_sha,
        isolation_level=settings.database.isolation_level,
        max_conflict_retries=settings.cascade.max_conflict_retries,
        cascade_timeout_seconds=settings.cascade.timeout_seconds,
    )
